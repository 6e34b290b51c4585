"""Pytest configuration and fixtures."""

import asyncio
import itertools
from typing import Any, Dict, List, Optional, Set, Tuple

import pytest
from loguru import logger

from client.app import FlashcardApp
from storage.database.base import dispose_db, init_db
from storage.errors import StoreError
from storage.service.auth import SqlAuthProvider
from storage.service.document_store import SqlDocumentStore

TEST_DATABASE_URL = "sqlite:///:memory:"


class RecordingStore(SqlDocumentStore):
    """SQL store that records every write and can fail chosen requests."""

    def __init__(self):
        super().__init__()
        self.calls: List[Tuple[str, str, Optional[str], Optional[Dict[str, Any]]]] = []
        self.fail_delete_ids: Set[str] = set()
        self.fail_updates = False
        self.fail_creates = False

    async def create(self, collection, fields):
        self.calls.append(("create", collection, None, dict(fields)))
        if self.fail_creates:
            raise StoreError("Missing or insufficient permissions.")
        return await super().create(collection, fields)

    async def set(self, collection, doc_id, fields):
        self.calls.append(("set", collection, doc_id, dict(fields)))
        await super().set(collection, doc_id, fields)

    async def update(self, collection, doc_id, fields):
        self.calls.append(("update", collection, doc_id, dict(fields)))
        if self.fail_updates:
            raise StoreError("Missing or insufficient permissions.")
        await super().update(collection, doc_id, fields)

    async def delete(self, collection, doc_id):
        self.calls.append(("delete", collection, doc_id, None))
        if doc_id in self.fail_delete_ids:
            raise StoreError(f"Failed to delete {collection}/{doc_id}")
        await super().delete(collection, doc_id)

    def calls_for(self, op: str) -> List[Tuple[str, str, Optional[str], Optional[Dict[str, Any]]]]:
        return [c for c in self.calls if c[0] == op]


class Clock:
    """Deterministic timestamp source: each call returns the next second."""

    def __init__(self):
        self._counter = itertools.count(1)
        self.last: Optional[str] = None

    def __call__(self) -> str:
        self.last = f"2026-01-01T00:00:{next(self._counter):02d}.000Z"
        return self.last


async def settle(rounds: int = 10) -> None:
    """Let scheduled auth and snapshot callbacks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def db():
    """Fresh in-memory database for each test."""
    init_db(TEST_DATABASE_URL)
    yield
    dispose_db()


@pytest.fixture
def store(db) -> RecordingStore:
    s = RecordingStore()
    yield s
    s.close()


@pytest.fixture
def auth(db) -> SqlAuthProvider:
    return SqlAuthProvider()


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
async def app(auth, store):
    flashcard_app = FlashcardApp(auth, store)
    flashcard_app.start()
    await flashcard_app.session.wait_ready()
    yield flashcard_app
    flashcard_app.close()


@pytest.fixture
async def signed_in_app(app):
    await app.account.sign_up("ada@example.com", "secret1", "secret1", "Ada", "Lovelace")
    await settle()
    await app.cards.wait_for_snapshot()
    return app


@pytest.fixture
def log_messages():
    """Capture loguru messages at ERROR and above."""
    messages: List[str] = []
    handler_id = logger.add(lambda m: messages.append(str(m)), level="ERROR")
    yield messages
    logger.remove(handler_id)
