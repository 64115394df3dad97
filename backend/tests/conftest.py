"""
DocRelay Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   HTTP tests run against an in-memory stand-in for the MongoDB
       collection, so no database is needed.
How:   The fake store is injected through create_app(record_store=...).

Fixtures:
    ├── fake_store:       RecordStore stand-in backed by a Python list
    ├── unreachable_store: RecordStore stand-in whose backend is down
    ├── test_client:      HTTPX AsyncClient bound to an app using fake_store
    └── offline_client:   HTTPX AsyncClient bound to an app using unreachable_store
"""

import os

# Set before any docrelay import so the settings singleton picks them up
os.environ["MONGO_USER"] = "relay"
os.environ["MONGO_PASSWORD"] = "relay-secret"
os.environ["MONGO_HOST"] = "localhost"
os.environ["MONGO_DB"] = "relaydb"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo.results import InsertOneResult

from docrelay.exceptions import StorageConnectionError


class FakeCursor:
    """Mimics the AsyncCursor returned by find()."""

    def __init__(self, documents: List[Dict[str, Any]]):
        self._documents = documents

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        if length is None:
            return list(self._documents)
        return list(self._documents[:length])


class FakeCollection:
    """In-memory collection supporting insert_one and find."""

    def __init__(self):
        self.documents: List[Dict[str, Any]] = []

    async def insert_one(self, document: Dict[str, Any]) -> InsertOneResult:
        # The driver mutates the dict it is given
        document.setdefault("_id", ObjectId())
        self.documents.append(dict(document))
        return InsertOneResult(document["_id"], acknowledged=True)

    def find(self, query: Optional[Dict[str, Any]] = None) -> FakeCursor:
        return FakeCursor([dict(doc) for doc in self.documents])


class FakeRecordStore:
    """Drop-in for RecordStore that never touches the network."""

    def __init__(self):
        self.records = FakeCollection()
        self.connect_calls = 0
        self.closed = False

    async def connect(self) -> None:
        self.connect_calls += 1

    async def collection(self, name: Optional[str] = None) -> FakeCollection:
        return self.records

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        self.closed = True


class UnreachableRecordStore(FakeRecordStore):
    """Behaves like a RecordStore whose server refuses connections."""

    message = "localhost:27017: [Errno 111] Connection refused"

    async def connect(self) -> None:
        self.connect_calls += 1
        raise StorageConnectionError(message=self.message)

    async def collection(self, name: Optional[str] = None) -> FakeCollection:
        raise StorageConnectionError(message=self.message)

    async def ping(self) -> bool:
        return False


@pytest.fixture
def fake_store():
    return FakeRecordStore()


@pytest.fixture
def unreachable_store():
    return UnreachableRecordStore()


async def _client_for(store):
    from docrelay.main import create_app

    app = create_app(record_store=store)
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture
async def test_client(fake_store):
    """
    HTTPX AsyncClient talking to an app backed by fake_store.

    Usage:
        async def test_root(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    async with await _client_for(fake_store) as client:
        yield client


@pytest_asyncio.fixture
async def offline_client(unreachable_store):
    async with await _client_for(unreachable_store) as client:
        yield client
