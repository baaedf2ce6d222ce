"""
User Records Service — Identifier Codec Tests
==============================================
"""

import pytest
from bson import ObjectId

from userservice.exceptions import ErrorKind, InvalidIdentifierError
from userservice.identifiers import new_user_id, parse_user_id


def test_new_user_id_is_unique():
    ids = {new_user_id() for _ in range(1000)}
    assert len(ids) == 1000


def test_parse_round_trips_hex_form():
    user_id = new_user_id()
    assert parse_user_id(str(user_id)) == user_id


def test_parse_accepts_uppercase_hex():
    assert parse_user_id("65F1C2A9E4B0A1B2C3D4E5F6") == ObjectId("65f1c2a9e4b0a1b2c3d4e5f6")


@pytest.mark.parametrize(
    "raw_id",
    [
        "",
        "65f1c2a9e4b0a1b2c3d4e5f",      # 23 chars
        "65f1c2a9e4b0a1b2c3d4e5f6a",    # 25 chars
        "65f1c2a9e4b0a1b2c3d4e5fx",     # non-hex
        "twelve bytes",                 # valid 12-byte form for ObjectId(), not a path id
        " 65f1c2a9e4b0a1b2c3d4e5f ",
    ],
)
def test_parse_rejects_malformed(raw_id):
    with pytest.raises(InvalidIdentifierError) as exc_info:
        parse_user_id(raw_id)

    assert exc_info.value.kind is ErrorKind.BAD_REQUEST
    assert exc_info.value.context["field"] == "id"
