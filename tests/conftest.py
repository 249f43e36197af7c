"""
Dealerships API — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Tests must not need a running MongoDB.
How:   An in-memory double implements the subset of the pymongo async
       collection API the repositories and the seed service call
       (find/to_list, find_one with sort, insert_one, insert_many,
       delete_many, count_documents, create_index). The FastAPI app gets it
       through a `get_database` dependency override.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── seed_data:      documents from the packaged seed files
    ├── fake_database:  empty in-memory database
    ├── seeded_database: fake_database loaded with seed_data
    └── test_client:    HTTPX AsyncClient bound to a fresh app
"""

import copy
import json
import os
from typing import Any, Dict, List, Optional

# Override settings for testing BEFORE any dealer_api imports
os.environ["MONGO_URI"] = "mongodb://localhost:1"
os.environ["MONGO_DB_NAME"] = "dealerships_test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
import bson
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from dealer_api.config import DATA_DIR


# ══════════════════════════════════════════════════════════════════════════
# In-memory document store double
# ══════════════════════════════════════════════════════════════════════════

class FakeCursor:
    def __init__(self, documents: List[Dict[str, Any]]):
        self._documents = documents

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        docs = [copy.deepcopy(d) for d in self._documents]
        return docs if length is None else docs[:length]


class FakeInsertOneResult:
    def __init__(self, inserted_id):
        self.inserted_id = inserted_id


class FakeInsertManyResult:
    def __init__(self, inserted_ids):
        self.inserted_ids = inserted_ids


class FakeDeleteResult:
    def __init__(self, deleted_count: int):
        self.deleted_count = deleted_count


class FakeCollection:
    """
    Equality-only queries, single-key sorts, unique single-field indexes.

    Set `fail_with` to an exception instance to make every call raise it.
    """

    def __init__(self, name: str):
        self.name = name
        self.documents: List[Dict[str, Any]] = []
        self.unique_fields: set = set()
        self.indexes: List[Any] = []
        self.fail_with: Optional[Exception] = None

    def _check_failure(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    @staticmethod
    def _matches(doc: Dict[str, Any], query: Optional[Dict[str, Any]]) -> bool:
        return all(doc.get(k) == v for k, v in (query or {}).items())

    def find(self, query: Optional[Dict[str, Any]] = None) -> FakeCursor:
        self._check_failure()
        bson.encode(query or {})
        return FakeCursor([d for d in self.documents if self._matches(d, query)])

    async def find_one(self, query=None, sort=None):
        self._check_failure()
        bson.encode(query or {})
        docs = [d for d in self.documents if self._matches(d, query)]
        for key, direction in reversed(sort or []):
            docs.sort(
                key=lambda d: (d.get(key) is not None, d.get(key)),
                reverse=direction < 0,
            )
        return copy.deepcopy(docs[0]) if docs else None

    async def insert_one(self, document: Dict[str, Any]) -> FakeInsertOneResult:
        self._check_failure()
        # Encodes like the driver does: ints outside int64 raise OverflowError
        bson.encode(document)
        for field in self.unique_fields:
            if any(d.get(field) == document.get(field) for d in self.documents):
                raise DuplicateKeyError(f"E11000 duplicate key error: {field}")
        document.setdefault("_id", ObjectId())
        self.documents.append(copy.deepcopy(document))
        return FakeInsertOneResult(document["_id"])

    async def insert_many(self, documents: List[Dict[str, Any]]) -> FakeInsertManyResult:
        self._check_failure()
        ids = []
        for document in documents:
            result = await self.insert_one(document)
            ids.append(result.inserted_id)
        return FakeInsertManyResult(ids)

    async def delete_many(self, query: Dict[str, Any]) -> FakeDeleteResult:
        self._check_failure()
        kept = [d for d in self.documents if not self._matches(d, query)]
        deleted = len(self.documents) - len(kept)
        self.documents = kept
        return FakeDeleteResult(deleted)

    async def count_documents(self, query: Dict[str, Any]) -> int:
        self._check_failure()
        return sum(1 for d in self.documents if self._matches(d, query))

    async def create_index(self, keys, unique: bool = False) -> str:
        self._check_failure()
        field = keys[0][0]
        if unique:
            values = [d.get(field) for d in self.documents]
            if len(values) != len(set(map(repr, values))):
                raise DuplicateKeyError(f"E11000 duplicate key error building index on {field}")
            self.unique_fields.add(field)
        self.indexes.append(keys)
        return "_".join(f"{k}_{d}" for k, d in keys)


class FakeDatabase(dict):
    """Collections are created on first access, like a real database."""

    def __init__(self):
        super().__init__()
        self.reachable = True

    def __missing__(self, name: str) -> FakeCollection:
        collection = FakeCollection(name)
        self[name] = collection
        return collection

    async def command(self, name: str):
        if not self.reachable:
            raise ServerSelectionTimeoutError("No servers available")
        return {"ok": 1.0}


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def seed_data() -> Dict[str, List[Dict[str, Any]]]:
    """Documents from the seed files shipped with the package."""
    with open(DATA_DIR / "reviews.json", encoding="utf-8") as f:
        reviews = json.load(f)["reviews"]
    with open(DATA_DIR / "dealerships.json", encoding="utf-8") as f:
        dealerships = json.load(f)["dealerships"]
    return {"reviews": reviews, "dealerships": dealerships}


@pytest.fixture
def fake_database() -> FakeDatabase:
    return FakeDatabase()


@pytest_asyncio.fixture
async def seeded_database(fake_database, seed_data) -> FakeDatabase:
    """Fake database with the unique review-id index and the seed documents."""
    await fake_database["reviews"].create_index([("id", 1)], unique=True)
    await fake_database["reviews"].insert_many(copy.deepcopy(seed_data["reviews"]))
    await fake_database["dealerships"].insert_many(copy.deepcopy(seed_data["dealerships"]))
    return fake_database


@pytest_asyncio.fixture
async def test_client(seeded_database):
    """
    Provides an async HTTP test client for endpoint testing.

    The lifespan does not run under ASGITransport, so the database
    dependency is overridden with the seeded fake instead.
    """
    from dealer_api.database import get_database
    from dealer_api.main import create_app

    app = create_app()
    app.dependency_overrides[get_database] = lambda: seeded_database
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
