"""
User Records Service — Document Store Connection Management
============================================================

What:  MongoDB client construction, the shared database handle, and the
       FastAPI dependencies that hand it to route handlers.
How:   One AsyncMongoClient (which owns its own connection pool) is created
       during application startup and stored on `app.state`. Handlers never
       build clients; they receive the database or the users collection
       through Depends().
When:  Client is created once in the lifespan; dependencies resolve per
       request; the client is closed on shutdown.

Concurrency:
    The client is safe for concurrent use by many coroutines. It is shared
    read-only; no per-request state lives on it.
"""

import logging

from fastapi import Depends, Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase

from userservice.config import settings

logger = logging.getLogger(__name__)


# ── Client Lifecycle ──────────────────────────────────────────────────────
def create_client(connection_string: str) -> AsyncMongoClient:
    """
    What:  Builds the process-wide client from a connection string.
    How:   No network I/O happens here; the driver connects lazily on the
           first operation, with its default pool size and timeouts.
    """
    return AsyncMongoClient(connection_string)


async def close_client(client: AsyncMongoClient) -> None:
    """Closes all pooled connections. Called during application shutdown."""
    await client.close()


async def ping(database: AsyncDatabase) -> None:
    """Round-trips a `ping` command. Raises the driver error when unreachable."""
    await database.command("ping")


# ── Request Dependencies ──────────────────────────────────────────────────
async def get_database(request: Request) -> AsyncDatabase:
    """
    FastAPI dependency returning the shared database handle.

    Example usage in a route:
        @router.get("/health")
        async def health(db: AsyncDatabase = Depends(get_database)):
            await ping(db)
    """
    return request.app.state.database


async def get_users_collection(
    database: AsyncDatabase = Depends(get_database),
) -> AsyncCollection:
    """FastAPI dependency returning the users collection every handler works on."""
    return database[settings.users_collection]
