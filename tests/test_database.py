"""Tests for the MongoDB connection handle."""

from unittest.mock import MagicMock

import threading
import time

import pytest
from pymongo.errors import InvalidURI, OperationFailure, ServerSelectionTimeoutError
from pymongo.read_preferences import ReadPreference
from pymongo.write_concern import WriteConcern

from mongoutils.config.database import (
    MongoConnection,
    build_write_concern,
    resolve_read_preference,
)
from mongoutils.config.settings import MongoSettings
from mongoutils.utils.errors import DatabaseConnectionError, ErrorKind


@pytest.fixture
def client(monkeypatch):
    client = MagicMock()
    monkeypatch.setattr(MongoConnection, "_create_client", lambda self: client)
    return client


@pytest.mark.parametrize("value,expected", [
    (0, ReadPreference.SECONDARY_PREFERRED),
    (1, ReadPreference.PRIMARY_PREFERRED),
    (2, ReadPreference.PRIMARY),
    ("eventual", ReadPreference.SECONDARY_PREFERRED),
    ("Monotonic", ReadPreference.PRIMARY_PREFERRED),
    ("strong", ReadPreference.PRIMARY),
])
def test_read_preference_modes(value, expected):
    assert resolve_read_preference(value) == expected


@pytest.mark.parametrize("value", [3, -1, "fastest"])
def test_unknown_read_preference_keeps_driver_default(value, caplog):
    assert resolve_read_preference(value) is None
    assert "Unknown read preference" in caplog.text


def test_missing_read_preference():
    assert resolve_read_preference(None) is None


def test_read_preference_digit_strings_from_environment(monkeypatch):
    monkeypatch.setenv("READ_PREFERENCE", "0")
    assert MongoSettings().read_preference == 0


def test_write_concern_from_settings(mongo_settings):
    assert build_write_concern(mongo_settings) == WriteConcern(w="majority", wtimeout=2500, j=True)


def test_invalid_mongodb_url_is_rejected():
    with pytest.raises(ValueError):
        MongoSettings(mongodb_url="localhost:27017")


def test_connect_configures_database(client, mongo_settings):
    connection = MongoConnection(mongo_settings)
    assert not connection.is_connected

    db = connection.connect()

    client.admin.command.assert_called_once_with("ping")
    client.get_database.assert_called_once_with(
        "mongoutils_test",
        read_preference=ReadPreference.PRIMARY_PREFERRED,
        write_concern=WriteConcern(w="majority", wtimeout=2500, j=True),
    )
    assert db is client.get_database.return_value
    assert connection.is_connected
    assert connection.client is client


def test_connection_is_established_once(client, mongo_settings):
    connection = MongoConnection(mongo_settings)

    first = connection.db
    second = connection.connect()
    connection.collection("users")

    assert first is second
    client.admin.command.assert_called_once()
    first.__getitem__.assert_called_once_with("users")


def test_connect_failure_raises_connection_error(client, mongo_settings, caplog):
    client.admin.command.side_effect = ServerSelectionTimeoutError("no servers found")
    connection = MongoConnection(mongo_settings)

    with pytest.raises(DatabaseConnectionError) as exc_info:
        connection.connect()

    assert exc_info.value.kind is ErrorKind.CONNECTION_FAILED
    assert "no servers found" in exc_info.value.detail
    client.close.assert_called_once()
    assert not connection.is_connected
    assert "Error connecting to MongoDB" in caplog.text


def test_ping_failure_raises_connection_error(client, mongo_settings):
    connection = MongoConnection(mongo_settings)
    connection.connect()
    client.get_database.return_value.command.side_effect = OperationFailure("unauthorized")

    with pytest.raises(DatabaseConnectionError):
        connection.ping()


def test_close_is_idempotent(client, mongo_settings):
    connection = MongoConnection(mongo_settings)
    connection.close()
    connection.connect()

    connection.close()
    connection.close()

    client.close.assert_called_once()
    assert not connection.is_connected


def test_separate_connections_are_isolated(client, mongo_settings):
    first = MongoConnection(mongo_settings)
    second = MongoConnection(MongoSettings(database_name="other"))

    first.connect()

    assert first.is_connected
    assert not second.is_connected
    assert second.config.database_name == "other"


def test_concurrent_first_use_creates_one_client(monkeypatch, mongo_settings):
    created = []

    def slow_client(self):
        time.sleep(0.05)
        client = MagicMock()
        created.append(client)
        return client

    monkeypatch.setattr(MongoConnection, "_create_client", slow_client)
    connection = MongoConnection(mongo_settings)
    barrier = threading.Barrier(4)
    databases = []

    def use_connection():
        barrier.wait()
        databases.append(connection.connect())

    threads = [threading.Thread(target=use_connection) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(created) == 1
    assert all(db is databases[0] for db in databases)

    connection.close()
    created[0].close.assert_called_once()


def test_client_construction_failure_raises_connection_error(monkeypatch, mongo_settings):
    def bad_uri(self):
        raise InvalidURI("Invalid URI scheme")

    monkeypatch.setattr(MongoConnection, "_create_client", bad_uri)
    connection = MongoConnection(mongo_settings)

    with pytest.raises(DatabaseConnectionError) as exc_info:
        connection.connect()

    assert "Invalid URI scheme" in exc_info.value.detail
    assert not connection.is_connected
