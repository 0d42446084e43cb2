"""
Trainer API Backend: Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Tests run without a MongoDB server: an in-memory collection stands in
       for pymongo's AsyncCollection behind a real TrainerRepository.

Fixture Hierarchy (all function-scoped):
    ├── fake_collection:  In-memory async collection (find/find_one/insert/delete)
    ├── repository:       TrainerRepository over fake_collection
    ├── credential_file:  Temporary mongo.json with valid content
    └── test_client:      HTTPX AsyncClient wired to the app with `repository`
"""

import json
import os
from types import SimpleNamespace
from typing import Any, Dict, List, Mapping, Optional
from unittest.mock import AsyncMock

import bson
import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo.results import DeleteResult, InsertOneResult

# Override settings BEFORE any app imports
os.environ["CREDENTIALS_FILE"] = "./does-not-exist.json"
os.environ["MONGO_SCHEME"] = "mongodb"
os.environ["LOG_LEVEL"] = "WARNING"

from app.repositories.trainer_repository import TrainerRepository  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# In-memory collection
# ══════════════════════════════════════════════════════════════════════════

def _matches(doc: Mapping[str, Any], filter: Optional[Mapping[str, Any]]) -> bool:
    """Equality-only filter matching, the only kind the repository issues."""
    return all(doc.get(key) == value for key, value in (filter or {}).items())


class _FakeCursor:
    """Async iterator over a snapshot of documents, like AsyncCursor."""

    def __init__(self, docs: List[Dict[str, Any]]):
        self._docs = iter(docs)

    def __aiter__(self):
        return self

    async def __anext__(self) -> Dict[str, Any]:
        try:
            return next(self._docs)
        except StopIteration:
            raise StopAsyncIteration


class FakeCollection:
    """
    Minimal stand-in for pymongo's AsyncCollection.

    Supports the calls TrainerRepository makes. Documents keep insertion
    order, which plays the role of MongoDB's natural order.
    """

    def __init__(self):
        self.docs: List[Dict[str, Any]] = []
        self.database = SimpleNamespace(command=AsyncMock(return_value={"ok": 1.0}))

    def find(self, filter: Optional[Mapping[str, Any]] = None) -> _FakeCursor:
        return _FakeCursor([dict(d) for d in self.docs if _matches(d, filter)])

    async def find_one(self, filter: Optional[Mapping[str, Any]] = None) -> Optional[Dict[str, Any]]:
        for doc in self.docs:
            if _matches(doc, filter):
                return dict(doc)
        return None

    async def insert_one(self, document: Dict[str, Any]) -> InsertOneResult:
        # pymongo writes the generated _id into the caller's mapping
        document.setdefault("_id", ObjectId())
        # The driver BSON-encodes before sending; encoding errors surface here
        bson.encode(document)
        self.docs.append(dict(document))
        return InsertOneResult(document["_id"], acknowledged=True)

    async def delete_many(self, filter: Optional[Mapping[str, Any]] = None) -> DeleteResult:
        kept = [d for d in self.docs if not _matches(d, filter)]
        deleted = len(self.docs) - len(kept)
        self.docs = kept
        return DeleteResult({"n": deleted, "ok": 1.0}, acknowledged=True)


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def fake_collection() -> FakeCollection:
    """A fresh, empty in-memory trainers collection."""
    return FakeCollection()


@pytest.fixture
def repository(fake_collection) -> TrainerRepository:
    return TrainerRepository(fake_collection)


@pytest.fixture
def sample_trainer_data():
    """The canonical trainer used across tests."""
    return {"name": "Ash", "age": 10, "city": "Pallet Town"}


@pytest.fixture
def credential_file(tmp_path):
    """Writes a valid credential file and returns its path."""
    path = tmp_path / "mongo.json"
    path.write_text(json.dumps({
        "user": "ash",
        "password": "pikachu",
        "host": "cluster0.example.mongodb.net",
    }))
    return str(path)


@pytest_asyncio.fixture
async def test_client(repository):
    """
    HTTPX AsyncClient talking to the FastAPI app in-process.

    ASGITransport does not run the lifespan, so no MongoDB connection is
    attempted; the repository is installed on app.state directly.
    """
    from app.main import app
    app.state.trainer_repository = repository
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.state.trainer_repository = None
