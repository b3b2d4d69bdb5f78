"""Pytest configuration and fixtures."""

from unittest.mock import MagicMock

import pytest
from bson import ObjectId

from mongoutils.config.settings import MongoSettings


@pytest.fixture
def mongo_settings():
    """Settings built explicitly so tests never depend on the environment."""
    return MongoSettings(
        mongodb_url="mongodb://localhost:27017",
        database_name="mongoutils_test",
        read_preference="monotonic",
        write_concern_w="majority",
        write_concern_journal=True,
        write_concern_wtimeout_ms=2500,
    )


@pytest.fixture
def documents():
    return [
        {"_id": ObjectId("507f1f77bcf86cd799439011"), "username": "ada", "owner_id": ObjectId("5f43a1b2c3d4e5f6a7b8c9d0")},
        {"_id": ObjectId("507f1f77bcf86cd799439012"), "username": "grace"},
    ]


@pytest.fixture
def collection(documents):
    """A pymongo collection stand-in whose cursor methods chain like the real one."""
    collection = MagicMock()
    cursor = collection.find.return_value
    cursor.sort.return_value = cursor
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.__iter__.return_value = iter(documents)
    collection.find_one.return_value = documents[0]
    collection.count_documents.return_value = len(documents)
    return collection


@pytest.fixture
def connection(collection, mongo_settings):
    connection = MagicMock()
    connection.config = mongo_settings
    connection.collection.return_value = collection
    return connection
