"""
User Records Service — Error Kind Mapping Tests
================================================

What:  The ErrorKind → status table and the kind each exception carries,
       checked independently of the store and of HTTP.
"""

import pytest

from userservice.exceptions import (
    STATUS_BY_KIND,
    DatabaseError,
    ErrorKind,
    InvalidIdentifierError,
    NotFoundError,
    UpdateNotAppliedError,
    UserServiceError,
    ValidationError,
)


def test_every_kind_has_a_status():
    assert set(STATUS_BY_KIND) == set(ErrorKind)
    assert ErrorKind.BAD_REQUEST.status_code == 400
    assert ErrorKind.NOT_FOUND.status_code == 404
    assert ErrorKind.SERVER_ERROR.status_code == 500


@pytest.mark.parametrize(
    "exc, status",
    [
        (UserServiceError(), 500),
        (ValidationError("bad body", field="name"), 400),
        (InvalidIdentifierError("abc"), 400),
        (NotFoundError(resource="user", resource_id="65f1c2a9e4b0a1b2c3d4e5f6"), 404),
        (DatabaseError(), 500),
        (UpdateNotAppliedError("65f1c2a9e4b0a1b2c3d4e5f6"), 500),
    ],
)
def test_exception_status(exc, status):
    assert exc.status_code == status


def test_not_found_message_names_resource():
    exc = NotFoundError(resource="user", resource_id="65f1c2a9e4b0a1b2c3d4e5f6")

    assert exc.message == "user with ID '65f1c2a9e4b0a1b2c3d4e5f6' was not found"
    assert exc.context == {"resource": "user", "resource_id": "65f1c2a9e4b0a1b2c3d4e5f6"}


def test_update_not_applied_is_a_database_error():
    exc = UpdateNotAppliedError("65f1c2a9e4b0a1b2c3d4e5f6", context={"matched": 1})

    assert isinstance(exc, DatabaseError)
    assert exc.context == {"matched": 1, "user_id": "65f1c2a9e4b0a1b2c3d4e5f6"}
