"""
A service dedicated to providing instances of other services for FastAPI's
dependency injection, so routes never build connections themselves.

Override ``mongoutils.config.database.get_connection`` to swap the database
for every service at once.
"""
from fastapi import Depends

from mongoutils.config.database import MongoConnection, get_connection
from mongoutils.services.document_service import DocumentService


class DependencyProviderService:
    @staticmethod
    def get_document_service(
        connection: MongoConnection = Depends(get_connection),
    ) -> DocumentService:
        return DocumentService(connection)
