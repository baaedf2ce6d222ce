"""
User Records Service — Pydantic Request/Response Schemas
=========================================================

What:  Pydantic models defining the API contract of the /users endpoints.
How:   FastAPI validates request bodies against UserPayload and serializes
       responses through UserResponse with `response_model_exclude_none`,
       so unset attributes are omitted instead of rendered as null.

Schemas are separate from the stored model (models/user.py) because the
wire form renders the ObjectId as a hex string under `id`, while the
stored form keeps the native ObjectId under `_id`.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from userservice.models.user import User


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what clients send
# ══════════════════════════════════════════════════════════════════════════


class UserPayload(BaseModel):
    """
    Body of POST /users and PUT /users/{id}.

    Both fields are optional. Unknown keys, including any client-sent `id`
    or `_id`, are dropped: identifiers are assigned by the service only.
    """

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(default=None, description="Display name")
    email: Optional[str] = Field(default=None, description="Contact email (not validated)")


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns
# ══════════════════════════════════════════════════════════════════════════


class UserResponse(BaseModel):
    """
    Outward representation of a user.

    Example:
        {"id": "65f1c2a9e4b0a1b2c3d4e5f6", "name": "Ann"}
    """

    id: str = Field(description="24-character hex identifier")
    name: Optional[str] = Field(default=None, description="Omitted when unset")
    email: Optional[str] = Field(default=None, description="Omitted when unset")

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(id=str(user.id), name=user.name, email=user.email)


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and store status.
    Who:   Returned by GET /health for container and load balancer probes.
    """

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
