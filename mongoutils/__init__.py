"""
Helpers on top of pymongo: ObjectId validation and conversion, ``limit`` and
``sort`` query parameter parsing, and a caller-owned connection handle.

    from mongoutils import str_to_object_id, resolve_limit, resolve_sort

    oid = str_to_object_id("507f1f77bcf86cd799439011")
    cursor = db.users.find().sort(resolve_sort("birthday,-username")).limit(resolve_limit("10"))
"""

from .utils.errors import (
    DatabaseConnectionError,
    ErrorKind,
    InvalidObjectIdError,
    MongoUtilsError,
    NoResultsError,
    require_document,
)
from .utils.object_id import ID_LENGTH, object_id_to_str, str_to_object_id, is_valid_object_id
from .utils.query_params import (
    LIMIT_DEFAULT_VALUE,
    LIMIT_RETURN_ALL,
    SORT_DEFAULT,
    SortSpec,
    resolve_limit,
    resolve_sort,
)
from .config.database import MongoConnection
from .config.settings import MongoSettings

__all__ = [
    "DatabaseConnectionError",
    "ErrorKind",
    "InvalidObjectIdError",
    "MongoUtilsError",
    "NoResultsError",
    "require_document",
    "ID_LENGTH",
    "object_id_to_str",
    "str_to_object_id",
    "is_valid_object_id",
    "LIMIT_DEFAULT_VALUE",
    "LIMIT_RETURN_ALL",
    "SORT_DEFAULT",
    "SortSpec",
    "resolve_limit",
    "resolve_sort",
    "MongoConnection",
    "MongoSettings",
]
