"""
MongoDB connection handle.

``MongoConnection`` owns one ``MongoClient`` (and therefore one connection
pool) plus the database it is configured for. Callers create it from a
``MongoSettings`` instance and pass it to whatever needs database access;
the FastAPI app keeps a single default instance behind ``get_connection``.
"""

import logging
import threading
from functools import lru_cache
from typing import Any, Optional, Union

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError
from pymongo.read_preferences import ReadPreference
from pymongo.write_concern import WriteConcern

from mongoutils.config.settings import MongoSettings, settings as default_settings
from mongoutils.utils.errors import DatabaseConnectionError

logger = logging.getLogger(__name__)

# Consistency modes: eventual reads may go to any secondary, monotonic reads
# stick to the primary once it is available, strong reads always hit the primary.
READ_PREFERENCE_MODES = {
    0: ReadPreference.SECONDARY_PREFERRED,
    1: ReadPreference.PRIMARY_PREFERRED,
    2: ReadPreference.PRIMARY,
}
READ_PREFERENCE_NAMES = {
    "eventual": 0,
    "monotonic": 1,
    "strong": 2,
}


def resolve_read_preference(value: Union[int, str, None]) -> Optional[Any]:
    """
    Map a consistency mode to a pymongo read preference.

    Args:
        value: 0/"eventual", 1/"monotonic" or 2/"strong"

    Returns:
        The read preference, or None (driver default) if the mode is unknown
    """
    if value is None:
        return None

    mode = READ_PREFERENCE_NAMES.get(value.lower(), value) if isinstance(value, str) else value
    read_preference = READ_PREFERENCE_MODES.get(mode)
    if read_preference is None:
        logger.error(f"Unknown read preference {value!r}, keeping the driver default")
    return read_preference


def build_write_concern(config: MongoSettings) -> WriteConcern:
    """Build the write concern described by the settings."""
    return WriteConcern(
        w=config.write_concern_w,
        wtimeout=config.write_concern_wtimeout_ms,
        j=config.write_concern_journal,
    )


class MongoConnection:
    """
    Lazily established handle to a MongoDB database.

    The client is created on the first call to ``connect`` (or the first
    access to ``client``, ``db`` or ``collection``) and reused until ``close``.
    """

    def __init__(self, config: Optional[MongoSettings] = None):
        self.config = config or default_settings
        self.logger = logging.getLogger(self.__class__.__name__)
        self._client: Optional[MongoClient] = None
        self._db: Optional[Database] = None
        self._lock = threading.Lock()

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    def _create_client(self) -> MongoClient:
        return MongoClient(
            self.config.mongodb_url,
            serverSelectionTimeoutMS=self.config.server_selection_timeout_ms,
        )

    def connect(self) -> Database:
        """
        Connect to the server and return the configured database.

        Calling this on an open connection returns the existing database.
        Concurrent first calls share a single client.

        Raises:
            DatabaseConnectionError: If the client cannot be created or the
                server does not answer a ping
        """
        if self._db is not None:
            return self._db

        with self._lock:
            if self._db is not None:
                return self._db

            client = None
            try:
                client = self._create_client()
                client.admin.command("ping")
            except PyMongoError as e:
                self.logger.error(f"Error connecting to MongoDB database {self.config.database_name}: {str(e)}")
                if client is not None:
                    client.close()
                raise DatabaseConnectionError(str(e)) from e

            self._client = client
            self._db = client.get_database(
                self.config.database_name,
                read_preference=resolve_read_preference(self.config.read_preference),
                write_concern=build_write_concern(self.config),
            )
            self.logger.info(f"Connected to MongoDB database: {self.config.database_name}")
            return self._db

    @property
    def client(self) -> MongoClient:
        self.connect()
        return self._client

    @property
    def db(self) -> Database:
        return self.connect()

    def collection(self, name: str) -> Collection:
        """Get a collection of the configured database."""
        return self.db[name]

    def ping(self) -> bool:
        """
        Run a ``ping`` command against the server.

        Raises:
            DatabaseConnectionError: If the server cannot be reached
        """
        try:
            self.db.command("ping")
        except PyMongoError as e:
            self.logger.error(f"MongoDB ping failed: {str(e)}")
            raise DatabaseConnectionError(str(e)) from e
        return True

    def close(self) -> None:
        """Close the client. Safe to call more than once."""
        with self._lock:
            if self._client is None:
                return
            self._client.close()
            self._client = None
            self._db = None
        self.logger.info("MongoDB connection closed")


@lru_cache
def get_connection() -> MongoConnection:
    """
    Dependency function returning the process-wide default connection.

    Tests replace it through ``app.dependency_overrides``.
    """
    return MongoConnection(default_settings)
