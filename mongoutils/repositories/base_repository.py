"""
Base Repository Pattern Implementation

This module provides a base repository class with common CRUD operations
on a single collection. IDs arrive as strings and are validated with the
ObjectId helpers before they reach the driver; list queries take the limit
and sort directives produced by ``mongoutils.utils.query_params``.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from fastapi import HTTPException
from pymongo.errors import OperationFailure, PyMongoError

from mongoutils.config.database import MongoConnection
from mongoutils.utils.errors import require_document
from mongoutils.utils.object_id import str_to_object_id
from mongoutils.utils.query_params import LIMIT_RETURN_ALL, SortSpec

logger = logging.getLogger(__name__)

# BadValue, FailedToParse and the "empty field path" error the server returns
# for malformed sort or filter documents.
INVALID_QUERY_CODES = {2, 9, 40352}


class BaseRepository:
    """
    Base repository class providing common database operations.

    ``InvalidObjectIdError`` and ``NoResultsError`` are raised to the caller
    untouched; queries the server rejects as malformed become a 400 and other
    driver failures are logged and turned into a 500.
    """

    def __init__(self, collection_name: str, connection: MongoConnection):
        """
        Initialize the repository with a collection name and connection.

        Args:
            collection_name: Name of the MongoDB collection
            connection: Connection handle the collection is taken from
        """
        self.collection_name = collection_name
        self.connection = connection
        self.logger = logging.getLogger(f"{self.__class__.__name__}")

    @property
    def collection(self):
        return self.connection.collection(self.collection_name)

    def _driver_error(self, action: str, error: PyMongoError) -> HTTPException:
        self.logger.error(f"Error {action} {self.collection_name}: {str(error)}")
        return HTTPException(
            status_code=500,
            detail=f"Failed {action} {self.collection_name}: {str(error)}"
        )

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a new document in the collection.

        Args:
            data: Dictionary containing document data

        Returns:
            Created document with generated ID
        """
        try:
            self.logger.info(f"Creating new {self.collection_name} document")

            now = datetime.now(timezone.utc)
            data.setdefault("created_at", now)
            data.setdefault("updated_at", now)

            result = self.collection.insert_one(data)
            created_doc = self.collection.find_one({"_id": result.inserted_id})

            self.logger.info(f"Successfully created {self.collection_name} with ID: {result.inserted_id}")
            return created_doc

        except PyMongoError as e:
            raise self._driver_error("creating", e)

    def find_by_id(self, document_id: str) -> Optional[Dict[str, Any]]:
        """
        Find a document by its ID.

        Args:
            document_id: String representation of the document ID

        Returns:
            Document if found, None otherwise

        Raises:
            InvalidObjectIdError: If the ID is not a valid ObjectId string
        """
        obj_id = str_to_object_id(document_id)

        try:
            self.logger.debug(f"Finding {self.collection_name} by ID: {document_id}")
            document = self.collection.find_one({"_id": obj_id})
        except PyMongoError as e:
            raise self._driver_error("finding", e)

        if document is None:
            self.logger.debug(f"No {self.collection_name} found with ID: {document_id}")
        return document

    def get_by_id(self, document_id: str) -> Dict[str, Any]:
        """
        Get a document by its ID, failing if it does not exist.

        Raises:
            InvalidObjectIdError: If the ID is not a valid ObjectId string
            NoResultsError: If no document has this ID
        """
        return require_document(self.find_by_id(document_id), self.collection_name, document_id)

    def find_all(self, filter_dict: Optional[Dict[str, Any]] = None,
                 limit: int = LIMIT_RETURN_ALL,
                 sort: Optional[Sequence[SortSpec]] = None,
                 skip: int = 0) -> List[Dict[str, Any]]:
        """
        Find all documents matching the filter criteria.

        Args:
            filter_dict: MongoDB filter dictionary
            limit: Maximum number of documents, 0 for no limit
            sort: Sort directives applied in order
            skip: Number of documents to skip

        Returns:
            List of matching documents

        Raises:
            HTTPException: 400 if a sort field name is empty or the server
                rejects the query as malformed, 500 for other driver failures
        """
        if filter_dict is None:
            filter_dict = {}

        if sort and any(not spec.field for spec in sort):
            self.logger.warning(f"Rejected empty sort field for {self.collection_name}: {list(sort)}")
            raise HTTPException(
                status_code=400,
                detail="Sort field names cannot be empty"
            )

        try:
            self.logger.debug(f"Finding {self.collection_name} documents with filter: {filter_dict}")

            cursor = self.collection.find(filter_dict)

            if sort:
                cursor = cursor.sort(list(sort))
            if skip > 0:
                cursor = cursor.skip(skip)
            cursor = cursor.limit(limit)

            documents = list(cursor)

            self.logger.debug(f"Found {len(documents)} {self.collection_name} documents")
            return documents

        except OperationFailure as e:
            if e.code not in INVALID_QUERY_CODES:
                raise self._driver_error("retrieving", e)
            self.logger.warning(f"Invalid query on {self.collection_name}: {str(e)}")
            raise HTTPException(
                status_code=400,
                detail=f"Invalid query on {self.collection_name}: {str(e)}"
            )
        except PyMongoError as e:
            raise self._driver_error("retrieving", e)

    def update(self, document_id: str, update_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update a document by its ID.

        Args:
            document_id: String representation of the document ID
            update_data: Dictionary containing fields to update

        Returns:
            Updated document

        Raises:
            InvalidObjectIdError: If the ID is not a valid ObjectId string
            NoResultsError: If no document has this ID
        """
        obj_id = str_to_object_id(document_id)
        update_data["updated_at"] = datetime.now(timezone.utc)

        try:
            self.logger.info(f"Updating {self.collection_name} with ID: {document_id}")

            result = self.collection.update_one({"_id": obj_id}, {"$set": update_data})
            if result.matched_count == 0:
                self.logger.warning(f"No {self.collection_name} found with ID: {document_id}")
                updated_doc = None
            else:
                updated_doc = self.collection.find_one({"_id": obj_id})

        except PyMongoError as e:
            raise self._driver_error("updating", e)

        return require_document(updated_doc, self.collection_name, document_id)

    def delete(self, document_id: str) -> None:
        """
        Delete a document by its ID.

        Raises:
            InvalidObjectIdError: If the ID is not a valid ObjectId string
            NoResultsError: If no document has this ID
        """
        obj_id = str_to_object_id(document_id)

        try:
            self.logger.info(f"Deleting {self.collection_name} with ID: {document_id}")
            result = self.collection.delete_one({"_id": obj_id})
        except PyMongoError as e:
            raise self._driver_error("deleting", e)

        if result.deleted_count == 0:
            self.logger.warning(f"No {self.collection_name} found with ID: {document_id}")
            require_document(None, self.collection_name, document_id)

        self.logger.info(f"Successfully deleted {self.collection_name} with ID: {document_id}")

    def count(self, filter_dict: Optional[Dict[str, Any]] = None) -> int:
        """Count documents matching the filter criteria."""
        try:
            count = self.collection.count_documents(filter_dict or {})
        except PyMongoError as e:
            raise self._driver_error("counting", e)

        self.logger.debug(f"Counted {count} {self.collection_name} documents")
        return count

    def exists(self, filter_dict: Dict[str, Any]) -> bool:
        """Check if a document exists matching the filter criteria."""
        try:
            return self.collection.find_one(filter_dict, projection={"_id": 1}) is not None
        except PyMongoError as e:
            raise self._driver_error("checking", e)
