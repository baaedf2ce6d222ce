"""
User Records Service — Error Kinds and Exception Hierarchy
===========================================================

What:  Defines the error kinds the service can report and the exceptions
       that carry them.
How:   Each exception carries a message, an optional context dict, and an
       ErrorKind. A single global handler (registered in main.py) maps the
       kind to an HTTP status via STATUS_BY_KIND and returns an empty body.
Who:   Raised by UserService and the identifier codec; caught by the global
       handler.

Exception Hierarchy:
    UserServiceError (base)          → SERVER_ERROR (500)
    ├── ValidationError              → BAD_REQUEST (400)
    │   └── InvalidIdentifierError   → BAD_REQUEST (400)
    ├── NotFoundError                → NOT_FOUND (404)
    └── DatabaseError                → SERVER_ERROR (500)
        └── UpdateNotAppliedError    → SERVER_ERROR (500)
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Outcome classes a request can fail with."""

    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self]


# The one place error kinds become HTTP statuses
STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.SERVER_ERROR: 500,
}


class UserServiceError(Exception):
    """
    Base exception for all service errors.

    Attributes:
        message:  Human-readable description (logged, never sent to the client)
        context:  Additional debug info (logged only)
        kind:     ErrorKind used to pick the response status
    """

    kind: ErrorKind = ErrorKind.SERVER_ERROR

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code


class ValidationError(UserServiceError):
    """
    Raised when the request cannot be decoded.

    When:    Body is not a JSON object or a field has the wrong type.
    HTTP:    400 Bad Request
    """

    kind = ErrorKind.BAD_REQUEST

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InvalidIdentifierError(ValidationError):
    """
    Raised when a path segment is not a valid user identifier.

    When:    GET/PUT/DELETE /users/{id} with anything but a 24-char hex string.
    HTTP:    400 Bad Request, raised before the store is contacted.
    """

    def __init__(self, raw_id: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"'{raw_id}' is not a valid user identifier",
            field="id",
            context=context,
        )
        self.raw_id = raw_id


class NotFoundError(UserServiceError):
    """
    Raised when a requested resource does not exist.

    When:    No document with the identifier, a delete that removed nothing,
             or an empty collection on list (legacy convention).
    HTTP:    404 Not Found
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(UserServiceError):
    """
    Raised when a document store operation fails.

    When:    Driver, network or server-side error; a stored document that
             cannot be decoded.
    HTTP:    500 Internal Server Error. Details are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UpdateNotAppliedError(DatabaseError):
    """
    Raised when an update reports zero modified documents.

    A merge that changes nothing is indistinguishable from a failed write
    here, so both surface as 500 unless NOOP_UPDATE_IS_ERROR is disabled.
    """

    def __init__(self, user_id: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["user_id"] = user_id
        super().__init__(
            message=f"Update of user '{user_id}' modified no documents",
            context=ctx,
        )
