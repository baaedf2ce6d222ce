"""
User Records Service — User Service (Business Logic)
=====================================================

What:  The five user operations: create, get-one, get-all, update, delete.
Why:   Keeps store calls, merge rules and outcome handling out of the routes.
How:   Each method parses the identifier (when there is one), issues the
       store calls on the collection it is given, and either returns a User
       or raises a UserServiceError whose kind decides the HTTP status.
Who:   Called by the /users route handlers.

Outcome table:
    create   insert ok → User              store error → DatabaseError
    get      found → User                  absent → NotFoundError
    list     ≥1 doc → [User]               empty → NotFoundError (legacy)
    update   modified ≥1 → merged User     modified 0 → UpdateNotAppliedError (legacy)
    delete   deleted 1 → pre-delete User   deleted 0 → NotFoundError
    (every path-parameterized operation)   bad id → InvalidIdentifierError

Design Decision:
    UserService holds no per-request state. It receives the collection for
    each call, so concurrent requests share nothing but the driver's pool.
    Fetch-then-write sequences in update and delete are not atomic; a
    concurrent delete between the two steps is reported as 404 on delete.
"""

import logging
from typing import List

from bson import ObjectId
from pymongo.asynchronous.collection import AsyncCollection

from userservice.config import settings
from userservice.exceptions import (
    DatabaseError,
    NotFoundError,
    UpdateNotAppliedError,
)
from userservice.identifiers import new_user_id, parse_user_id
from userservice.models.user import User
from userservice.schemas.user import UserPayload

logger = logging.getLogger(__name__)


class UserService:
    """
    Business logic layer for user records.

    Args:
        empty_list_not_found: list_users() raises NotFoundError on an empty
            collection instead of returning [].
        noop_update_is_error: update_user() raises UpdateNotAppliedError when
            the store reports zero modified documents.

    Error Handling Strategy:
        Driver errors and undecodable documents are wrapped in DatabaseError
        (chained to the original) and logged here; NotFoundError and
        InvalidIdentifierError propagate as raised.
    """

    def __init__(
        self,
        empty_list_not_found: bool = True,
        noop_update_is_error: bool = True,
    ):
        self.empty_list_not_found = empty_list_not_found
        self.noop_update_is_error = noop_update_is_error

    async def create_user(self, collection: AsyncCollection, payload: UserPayload) -> User:
        """
        Insert a new user under a freshly generated identifier.

        Returns:
            The inserted User, including its generated id

        Raises:
            DatabaseError: insert_one failed
        """
        user = User(id=new_user_id(), name=payload.name, email=payload.email)
        try:
            await collection.insert_one(user.to_document())
        except Exception as e:
            logger.error("Database error creating user %s: %s", user.id, str(e))
            raise DatabaseError(
                message="Could not create the user",
                context={"user_id": str(user.id), "error_type": type(e).__name__},
            ) from e

        logger.info("User %s created", user.id)
        return user

    async def get_user(self, collection: AsyncCollection, raw_id: str) -> User:
        """
        Fetch one user by its path identifier.

        Raises:
            InvalidIdentifierError: raw_id does not parse (store not contacted)
            NotFoundError: no document with that id
            DatabaseError: find_one failed
        """
        user_id = parse_user_id(raw_id)
        return await self._find_user(collection, user_id)

    async def list_users(self, collection: AsyncCollection) -> List[User]:
        """
        Materialize every user in the collection, in store order.

        A failure on any single document aborts the whole listing.

        Raises:
            NotFoundError: the collection is empty and empty_list_not_found is set
            DatabaseError: the query or any item read failed
        """
        users: List[User] = []
        try:
            async for document in collection.find({}):
                users.append(User.from_document(document))
        except Exception as e:
            logger.error("Database error listing users: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve users",
                context={"read_before_failure": len(users), "error_type": type(e).__name__},
            ) from e

        if not users and self.empty_list_not_found:
            raise NotFoundError(resource="users")
        return users

    async def update_user(
        self,
        collection: AsyncCollection,
        raw_id: str,
        payload: UserPayload,
    ) -> User:
        """
        Merge the payload into the stored user and write the result back.

        Workflow:
            1. Parse the identifier
            2. Fetch the stored record
            3. Merge field by field (supplied value wins, omitted keeps stored)
            4. update_one with $set of the merged fields, upsert disabled

        Raises:
            InvalidIdentifierError: raw_id does not parse
            NotFoundError: no document with that id; with noop_update_is_error
                off, also when the write matched nothing
            UpdateNotAppliedError: zero documents modified (noop_update_is_error)
            DatabaseError: find_one or update_one failed
        """
        user_id = parse_user_id(raw_id)
        existing = await self._find_user(collection, user_id)
        merged = existing.merge(name=payload.name, email=payload.email)

        changes = merged.field_values()
        if changes:
            try:
                result = await collection.update_one(
                    {"_id": user_id},
                    {"$set": changes},
                    upsert=False,
                )
            except Exception as e:
                logger.error("Error updating user %s: %s", user_id, str(e))
                raise DatabaseError(
                    message="Could not update the user",
                    context={"user_id": str(user_id), "error_type": type(e).__name__},
                ) from e
            matched, modified = result.matched_count, result.modified_count
        else:
            # Empty $set is rejected by the server; the record was just read
            matched, modified = 1, 0

        if modified > 0:
            logger.info("User %s updated", user_id)
            return merged

        if self.noop_update_is_error:
            logger.error("Error updating user %s: no documents modified", user_id)
            raise UpdateNotAppliedError(str(user_id), context={"matched": matched})

        if matched == 0:
            raise NotFoundError(resource="user", resource_id=str(user_id))
        return merged

    async def delete_user(self, collection: AsyncCollection, raw_id: str) -> User:
        """
        Delete a user and return the record as it was before deletion.

        Raises:
            InvalidIdentifierError: raw_id does not parse
            NotFoundError: no document at fetch time, or delete_one removed
                nothing (a concurrent delete won the race)
            DatabaseError: find_one or delete_one failed
        """
        user_id = parse_user_id(raw_id)
        existing = await self._find_user(collection, user_id)

        try:
            result = await collection.delete_one({"_id": user_id})
        except Exception as e:
            logger.error("Database error deleting user %s: %s", user_id, str(e))
            raise DatabaseError(
                message="Could not delete the user",
                context={"user_id": str(user_id), "error_type": type(e).__name__},
            ) from e

        if result.deleted_count != 1:
            raise NotFoundError(resource="user", resource_id=str(user_id))

        logger.info("User %s deleted", user_id)
        return existing

    async def _find_user(self, collection: AsyncCollection, user_id: ObjectId) -> User:
        try:
            document = await collection.find_one({"_id": user_id})
            user = User.from_document(document) if document is not None else None
        except Exception as e:
            logger.error("Database error fetching user %s: %s", user_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the user",
                context={"user_id": str(user_id), "error_type": type(e).__name__},
            ) from e

        if user is None:
            raise NotFoundError(resource="user", resource_id=str(user_id))
        return user


# ── Singleton Instance ────────────────────────────────────────────────────
user_service = UserService(
    empty_list_not_found=settings.empty_list_not_found,
    noop_update_is_error=settings.noop_update_is_error,
)


def get_user_service() -> UserService:
    """FastAPI dependency returning the configured service."""
    return user_service
