"""
User Records Service — Users Route Handlers
============================================

What:  The /users resource: create, list, get, update, delete.
How:   Each handler receives the users collection and the service through
       Depends(), delegates to UserService, and converts the returned model
       to UserResponse. Failures propagate as UserServiceError and are turned
       into empty-bodied responses by the global handler in main.py.

Route Table:
    POST   /users        → create_user
    GET    /users        → list_users
    GET    /users/{id}   → get_user
    PUT    /users/{id}   → update_user
    DELETE /users/{id}   → delete_user

The {user_id} path segment is taken as a plain string and parsed by the
service, so a malformed id answers 400 rather than FastAPI's 422.
"""

from typing import List

from fastapi import APIRouter, Depends
from pymongo.asynchronous.collection import AsyncCollection

from userservice.database import get_users_collection
from userservice.schemas.user import UserPayload, UserResponse
from userservice.services.user_service import UserService, get_user_service


# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/users", tags=["Users"])

_NOT_FOUND = {404: {"description": "User not found"}}
_BAD_ID = {400: {"description": "Malformed user identifier"}}
_SERVER_ERROR = {500: {"description": "Document store failure"}}


@router.post(
    "",
    response_model=UserResponse,
    response_model_exclude_none=True,
    responses={400: {"description": "Malformed body"}, **_SERVER_ERROR},
    summary="Create a user",
)
async def create_user(
    payload: UserPayload,
    collection: AsyncCollection = Depends(get_users_collection),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Any `id` in the body is ignored; the identifier is generated here."""
    user = await service.create_user(collection, payload)
    return UserResponse.from_user(user)


@router.get(
    "",
    response_model=List[UserResponse],
    response_model_exclude_none=True,
    responses={404: {"description": "Collection is empty"}, **_SERVER_ERROR},
    summary="List every user",
)
async def list_users(
    collection: AsyncCollection = Depends(get_users_collection),
    service: UserService = Depends(get_user_service),
) -> List[UserResponse]:
    """
    Returns the whole collection in store order, unpaginated.

    An empty collection answers 404 unless EMPTY_LIST_NOT_FOUND is disabled.
    """
    users = await service.list_users(collection)
    return [UserResponse.from_user(user) for user in users]


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    response_model_exclude_none=True,
    responses={**_BAD_ID, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Get a user by ID",
)
async def get_user(
    user_id: str,
    collection: AsyncCollection = Depends(get_users_collection),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    user = await service.get_user(collection, user_id)
    return UserResponse.from_user(user)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    response_model_exclude_none=True,
    responses={**_BAD_ID, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Merge fields into a user",
)
async def update_user(
    user_id: str,
    payload: UserPayload,
    collection: AsyncCollection = Depends(get_users_collection),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """
    Partial update: fields missing from the body keep their stored values.

    An update that changes nothing answers 500 unless NOOP_UPDATE_IS_ERROR
    is disabled.
    """
    user = await service.update_user(collection, user_id, payload)
    return UserResponse.from_user(user)


@router.delete(
    "/{user_id}",
    response_model=UserResponse,
    response_model_exclude_none=True,
    responses={**_BAD_ID, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Delete a user",
)
async def delete_user(
    user_id: str,
    collection: AsyncCollection = Depends(get_users_collection),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Echoes the record as it was before deletion."""
    user = await service.delete_user(collection, user_id)
    return UserResponse.from_user(user)
