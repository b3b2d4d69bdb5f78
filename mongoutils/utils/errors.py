"""
Error types shared by the ObjectId helpers, repositories and routes.

Every error carries an ``ErrorKind`` so callers (and the HTTP exception
handlers in ``mongoutils.main``) can tell validation failures apart from
"nothing matched" and connection problems without parsing messages.
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    ID_BAD_LENGTH = "idMustBe24CharactersLong"
    ID_NOT_HEX = "idNotHexadecimal"
    NO_RESULTS = "noResultsFound"
    CONNECTION_FAILED = "connectionFailed"


class MongoUtilsError(Exception):
    """Base class for all errors raised by this package."""

    kind: ErrorKind

    def __init__(self, kind: ErrorKind, detail: Optional[str] = None):
        self.kind = kind
        self.detail = detail or kind.value
        super().__init__(self.detail)


class InvalidObjectIdError(MongoUtilsError, ValueError):
    """
    Raised when a string is not a valid 24 character hexadecimal ObjectId.

    The ``kind`` is either ``ErrorKind.ID_BAD_LENGTH`` or
    ``ErrorKind.ID_NOT_HEX``; length is always checked first.
    """

    def __init__(self, kind: ErrorKind, value: Any = None):
        self.value = value
        super().__init__(kind)


class NoResultsError(MongoUtilsError, LookupError):
    """Raised when a single-document lookup matched nothing."""

    def __init__(self, collection: Optional[str] = None, document_id: Optional[str] = None):
        self.collection = collection
        self.document_id = document_id
        super().__init__(ErrorKind.NO_RESULTS)


class DatabaseConnectionError(MongoUtilsError, ConnectionError):
    """Raised when the MongoDB server cannot be reached."""

    def __init__(self, detail: Optional[str] = None):
        super().__init__(ErrorKind.CONNECTION_FAILED, detail)


def require_document(document, collection: Optional[str] = None, document_id: Optional[str] = None):
    """
    Return ``document`` or raise ``NoResultsError`` if the driver found nothing.

    pymongo signals "no match" from ``find_one`` by returning ``None``.
    """
    if document is None:
        raise NoResultsError(collection, document_id)
    return document
