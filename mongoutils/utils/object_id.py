"""
ObjectId utility functions for MongoDB operations.

This module centralizes ObjectId validation and conversion so repositories,
services and routes all agree on what a valid external ID looks like:
exactly 24 hexadecimal characters.
"""

import string
from typing import Any, Dict, List, Mapping, Union

from bson import ObjectId

from mongoutils.utils.errors import ErrorKind, InvalidObjectIdError

ID_LENGTH = 24

_HEX_DIGITS = frozenset(string.hexdigits)


def _is_correct_length(id_str: str) -> bool:
    return len(id_str) == ID_LENGTH


def _is_hex_string(id_str: str) -> bool:
    return all(char in _HEX_DIGITS for char in id_str)


def str_to_object_id(id_str: str) -> ObjectId:
    """
    Convert a string to an ObjectId, validating it first.

    Args:
        id_str: String representation of the ObjectId

    Returns:
        ObjectId instance

    Raises:
        InvalidObjectIdError: ``ID_BAD_LENGTH`` if the string is not exactly
            24 characters long, ``ID_NOT_HEX`` if it contains anything other
            than hexadecimal digits
        TypeError: If ``id_str`` is not a string
    """
    if not isinstance(id_str, str):
        raise TypeError(f"ObjectId must be given as a string, not {type(id_str).__name__}")

    if not _is_correct_length(id_str):
        raise InvalidObjectIdError(ErrorKind.ID_BAD_LENGTH, id_str)
    if not _is_hex_string(id_str):
        raise InvalidObjectIdError(ErrorKind.ID_NOT_HEX, id_str)

    return ObjectId(id_str)


def object_id_to_str(object_id: ObjectId) -> str:
    """
    Convert an ObjectId to its 24 character lowercase hexadecimal string.

    Args:
        object_id: ObjectId instance

    Returns:
        String accepted unchanged by ``str_to_object_id``
    """
    return str(object_id)


def is_valid_object_id(id_str: str) -> bool:
    """
    Check if string is a valid ObjectId format.

    Args:
        id_str: String to validate

    Returns:
        True if valid ObjectId format, False otherwise
    """
    if not isinstance(id_str, str):
        return False
    return _is_correct_length(id_str) and _is_hex_string(id_str)


def validate_object_ids(ids: List[str]) -> List[ObjectId]:
    """
    Validate and convert multiple string IDs to ObjectIds.

    Args:
        ids: List of string IDs

    Returns:
        List of ObjectId instances in the same order

    Raises:
        InvalidObjectIdError: For the first ID that fails validation
    """
    return [str_to_object_id(id_str) for id_str in ids]


def ensure_object_id(value: Union[str, ObjectId]) -> ObjectId:
    """
    Ensure value is an ObjectId, converting from string if necessary.

    Raises:
        InvalidObjectIdError: If a string value fails validation
        TypeError: If value is neither a string nor an ObjectId
    """
    if isinstance(value, ObjectId):
        return value

    return str_to_object_id(value)


def mongo_doc_to_dict(doc: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert MongoDB document to dictionary with string IDs.

    The top-level ``_id`` is renamed to ``id``. Every ObjectId value, however
    deeply nested in sub-documents or arrays, is encoded as its hexadecimal
    string.

    Args:
        doc: MongoDB document

    Returns:
        New dictionary; the original document is left untouched
    """
    if not doc:
        return doc

    result = {}
    for key, value in doc.items():
        if key == "_id":
            key = "id"
        result[key] = _encode_object_ids(value)

    return result


def _encode_object_ids(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return object_id_to_str(value)
    if isinstance(value, Mapping):
        return {key: _encode_object_ids(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_encode_object_ids(item) for item in value]
    return value


def mongo_docs_to_dicts(docs: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Convert a list of MongoDB documents with ``mongo_doc_to_dict``."""
    return [mongo_doc_to_dict(doc) for doc in docs]
