"""
Document Service for browsing collections.

Wraps ``BaseRepository`` per collection and returns JSON-safe dictionaries
with string IDs, ready for the response schemas.
"""

import logging
from typing import Any, Dict, List, Optional

from mongoutils.config.database import MongoConnection
from mongoutils.repositories.base_repository import BaseRepository
from mongoutils.utils.object_id import mongo_doc_to_dict, mongo_docs_to_dicts
from mongoutils.utils.query_params import LIMIT_DEFAULT_VALUE, SortSpec, resolve_sort

logger = logging.getLogger(__name__)


class DocumentService:
    """
    Service class for reading and deleting documents in any collection.
    """

    def __init__(self, connection: MongoConnection):
        """
        Initialize the document service.

        Args:
            connection: Connection handle shared by the repositories it creates
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self.connection = connection

    def get_repository(self, collection: str) -> BaseRepository:
        return BaseRepository(collection, self.connection)

    def list_documents(
        self,
        collection: str,
        limit: int = LIMIT_DEFAULT_VALUE,
        sort: Optional[List[SortSpec]] = None,
    ) -> List[Dict[str, Any]]:
        """
        List documents of a collection.

        Args:
            collection: Collection name
            limit: Maximum number of documents, 0 for all of them
            sort: Sort directives, defaults to ascending ``_id``

        Returns:
            Documents with ``_id`` exposed as string ``id``
        """
        sort = sort or resolve_sort(None)
        self.logger.debug(f"Listing {collection} with limit={limit} sort={sort}")
        documents = self.get_repository(collection).find_all(limit=limit, sort=sort)
        return mongo_docs_to_dicts(documents)

    def get_document(self, collection: str, document_id: str) -> Dict[str, Any]:
        """
        Get one document by ID.

        Raises:
            InvalidObjectIdError: If the ID is malformed
            NoResultsError: If the document does not exist
        """
        return mongo_doc_to_dict(self.get_repository(collection).get_by_id(document_id))

    def delete_document(self, collection: str, document_id: str) -> None:
        """
        Delete one document by ID.

        Raises:
            InvalidObjectIdError: If the ID is malformed
            NoResultsError: If the document does not exist
        """
        self.get_repository(collection).delete(document_id)
        self.logger.info(f"Deleted {collection} document {document_id}")

    def count_documents(self, collection: str) -> int:
        """Count every document of a collection, ignoring limit and sort."""
        return self.get_repository(collection).count()
