"""
User Records Service — Test Configuration (conftest.py)
========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── fake_collection: In-memory stand-in for the users collection
    ├── fake_database: Database handle returning fake_collection
    ├── app: FastAPI app with get_database overridden to fake_database
    └── test_client: HTTPX AsyncClient for API endpoint testing
"""

import os
from typing import Any, Dict, List, Optional, Set

# Override settings for testing BEFORE any application imports
os.environ["MONGO_DB"] = "mongodb://localhost:27017/?serverSelectionTimeoutMS=100"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import AsyncClient, ASGITransport
from pymongo.errors import DuplicateKeyError, PyMongoError, ServerSelectionTimeoutError
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult


# ══════════════════════════════════════════════════════════════════════════
# In-Memory Store Doubles
# ══════════════════════════════════════════════════════════════════════════

_MISSING = object()


class FakeCursor:
    """
    Async-iterable over copies of documents, like the driver's cursor.

    fail_after: raise on reading the item at that index (per-item read failure).
    """

    def __init__(self, documents: List[Dict[str, Any]], fail_after: Optional[int] = None):
        self._documents = documents
        self._fail_after = fail_after

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for index, document in enumerate(self._documents):
            if self._fail_after is not None and index >= self._fail_after:
                raise PyMongoError("cursor read failed")
            yield dict(document)


class FakeUsersCollection:
    """
    The subset of AsyncCollection the service uses, keyed by `_id`.

    calls:             names of every operation issued, in order
    fail_on:           operation names that raise PyMongoError
    cursor_fail_after: index at which find() cursors fail
    """

    def __init__(self):
        self.documents: Dict[ObjectId, Dict[str, Any]] = {}
        self.calls: List[str] = []
        self.fail_on: Set[str] = set()
        self.cursor_fail_after: Optional[int] = None

    def _record(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise PyMongoError(f"{operation} failed")

    async def insert_one(self, document):
        self._record("insert_one")
        if document["_id"] in self.documents:
            raise DuplicateKeyError("E11000 duplicate key error")
        self.documents[document["_id"]] = dict(document)
        return InsertOneResult(document["_id"], True)

    async def find_one(self, filter):
        self._record("find_one")
        document = self.documents.get(filter["_id"])
        return dict(document) if document is not None else None

    def find(self, filter):
        self._record("find")
        return FakeCursor(list(self.documents.values()), self.cursor_fail_after)

    async def update_one(self, filter, update, upsert=False):
        self._record("update_one")
        assert upsert is False
        document = self.documents.get(filter["_id"])
        if document is None:
            return UpdateResult({"n": 0, "nModified": 0}, True)
        changed = {
            key: value
            for key, value in update["$set"].items()
            if document.get(key, _MISSING) != value
        }
        document.update(changed)
        return UpdateResult({"n": 1, "nModified": 1 if changed else 0}, True)

    async def delete_one(self, filter):
        self._record("delete_one")
        removed = self.documents.pop(filter["_id"], None)
        return DeleteResult({"n": 1 if removed is not None else 0}, True)


class FakeDatabase:
    """Database handle that serves one collection and answers `ping`."""

    def __init__(self, collection: FakeUsersCollection):
        self.collection = collection
        self.reachable = True

    def __getitem__(self, name: str) -> FakeUsersCollection:
        return self.collection

    async def command(self, name: str):
        if not self.reachable:
            raise ServerSelectionTimeoutError("No servers available")
        return {"ok": 1.0}


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def fake_collection():
    """
    Provides an empty in-memory users collection.

    Usage:
        async def test_get(fake_collection):
            fake_collection.documents[oid] = {"_id": oid, "name": "Ann"}
    """
    return FakeUsersCollection()


@pytest.fixture
def fake_database(fake_collection):
    return FakeDatabase(fake_collection)


@pytest.fixture
def app(fake_database):
    """
    Provides a fresh FastAPI app whose database dependency is the fake.

    The lifespan does not run under ASGITransport, so no real client is built.
    """
    from userservice.database import get_database
    from userservice.main import create_app

    application = create_app()
    application.dependency_overrides[get_database] = lambda: fake_database
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def stored_user(fake_collection):
    """Inserts {"name": "Ann"} directly into the fake store and returns its id."""
    user_id = ObjectId()
    fake_collection.documents[user_id] = {"_id": user_id, "name": "Ann"}
    return user_id
