"""
User Records Service — Identifier Codec
========================================

What:  Generates and parses user identifiers (BSON ObjectIds).
Who:   UserService calls new_user_id() on create and parse_user_id() before
       every path-parameterized store access.

Format:
    A user identifier travels over HTTP as the 24-character hex form of an
    ObjectId (e.g. 65f1c2a9e4b0a1b2c3d4e5f6). Anything else is rejected.
"""

from bson import ObjectId
from bson.errors import InvalidId

from userservice.exceptions import InvalidIdentifierError


def new_user_id() -> ObjectId:
    """Return a fresh, collision-free identifier."""
    return ObjectId()


def parse_user_id(raw_id: str) -> ObjectId:
    """
    Parse a path segment into an ObjectId.

    ObjectId() also accepts 12-byte values; only the hex string form is a
    valid path identifier, so length and type are checked first.

    Raises:
        InvalidIdentifierError: raw_id is not a 24-character hex string
    """
    if not isinstance(raw_id, str) or len(raw_id) != 24:
        raise InvalidIdentifierError(str(raw_id))
    try:
        return ObjectId(raw_id)
    except (InvalidId, TypeError) as e:
        raise InvalidIdentifierError(raw_id) from e
