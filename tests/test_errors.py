"""Tests for the shared error types."""

import pytest

from mongoutils.utils.errors import (
    DatabaseConnectionError,
    ErrorKind,
    InvalidObjectIdError,
    MongoUtilsError,
    NoResultsError,
    require_document,
)


def test_error_kinds_keep_their_messages():
    assert ErrorKind.ID_BAD_LENGTH.value == "idMustBe24CharactersLong"
    assert ErrorKind.ID_NOT_HEX.value == "idNotHexadecimal"
    assert ErrorKind.NO_RESULTS.value == "noResultsFound"


def test_require_document_returns_found_document():
    doc = {"_id": 1}
    assert require_document(doc) is doc


def test_require_document_raises_no_results():
    with pytest.raises(NoResultsError) as exc_info:
        require_document(None, "users", "507f1f77bcf86cd799439011")

    error = exc_info.value
    assert error.kind is ErrorKind.NO_RESULTS
    assert error.collection == "users"
    assert error.document_id == "507f1f77bcf86cd799439011"
    assert str(error) == "noResultsFound"


def test_empty_documents_are_still_results():
    assert require_document({}) == {}


@pytest.mark.parametrize("error", [
    InvalidObjectIdError(ErrorKind.ID_NOT_HEX, "zz"),
    NoResultsError(),
    DatabaseConnectionError("timed out"),
])
def test_all_errors_share_the_base_class(error):
    assert isinstance(error, MongoUtilsError)
    assert isinstance(error.kind, ErrorKind)


def test_connection_error_keeps_driver_detail():
    error = DatabaseConnectionError("server selection timed out")
    assert error.kind is ErrorKind.CONNECTION_FAILED
    assert error.detail == "server selection timed out"
    assert isinstance(error, ConnectionError)
