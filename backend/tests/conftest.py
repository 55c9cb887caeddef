"""
HRMS Employee Service — Test Configuration (conftest.py)
=========================================================

What:  Shared pytest fixtures.
How:   No MongoDB is needed. Route tests inject `FakeCollection`, a small
       in-memory stand-in for the async collection, through
       `app.dependency_overrides`; service tests use AsyncMock collections.

Fixtures:
    ├── fake_collection:  in-memory employees collection (records every call)
    ├── mock_collection:  AsyncMock collection for service unit tests
    ├── app:              fresh FastAPI app with the collection overridden
    └── test_client:      HTTPX AsyncClient bound to `app`
"""

import os
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo.results import DeleteResult, InsertOneResult

os.environ.setdefault("MONGODB_CONNECTION_STRING", "mongodb://localhost:27017")
os.environ.setdefault("LOG_LEVEL", "WARNING")


class FakeCursor:
    def __init__(self, documents: List[Dict[str, Any]]):
        self._documents = documents

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        return list(self._documents)


class FakeCollection:
    """
    Just enough of AsyncCollection for the employee operations.

    Documents are keyed by `_id`; `calls` lists every method invoked so tests
    can assert that a request never reached the database.
    """

    def __init__(self):
        self.documents: Dict[ObjectId, Dict[str, Any]] = {}
        self.calls: List[str] = []

    def find(self, filter: Dict[str, Any]) -> FakeCursor:
        self.calls.append("find")
        return FakeCursor([dict(doc) for doc in self.documents.values()])

    async def insert_one(self, document: Dict[str, Any]) -> InsertOneResult:
        self.calls.append("insert_one")
        oid = ObjectId()
        self.documents[oid] = {"_id": oid, **document}
        return InsertOneResult(oid, True)

    async def find_one(self, filter: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self.calls.append("find_one")
        doc = self.documents.get(filter["_id"])
        return dict(doc) if doc is not None else None

    async def find_one_and_update(
        self, filter: Dict[str, Any], update: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        self.calls.append("find_one_and_update")
        doc = self.documents.get(filter["_id"])
        if doc is None:
            return None
        previous = dict(doc)
        doc.update(update["$set"])
        return previous

    async def delete_one(self, filter: Dict[str, Any]) -> DeleteResult:
        self.calls.append("delete_one")
        removed = self.documents.pop(filter["_id"], None)
        return DeleteResult({"n": 0 if removed is None else 1}, True)


@pytest.fixture
def fake_collection():
    return FakeCollection()


@pytest.fixture
def mock_collection():
    """
    AsyncMock collection.

    `find` is synchronous on the real driver (it returns a cursor), so it is a
    MagicMock whose cursor has an awaitable `to_list`.

    Usage:
        mock_collection.find.return_value.to_list.return_value = [doc]
    """
    collection = MagicMock()
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=[])
    collection.find = MagicMock(return_value=cursor)
    collection.insert_one = AsyncMock()
    collection.find_one = AsyncMock()
    collection.find_one_and_update = AsyncMock()
    collection.delete_one = AsyncMock()
    return collection


@pytest.fixture
def sample_employee_data():
    return {"name": "Ann", "salary": 50000, "age": 30}


@pytest.fixture
def app(fake_collection):
    from hrms.database import get_employee_collection
    from hrms.main import create_app

    application = create_app()
    application.dependency_overrides[get_employee_collection] = lambda: fake_collection
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient talking to the app in-process.

    ASGITransport does not run the lifespan, so no connection is attempted.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
