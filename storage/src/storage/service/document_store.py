"""Document store backed by the SQL collections, with live queries.

Every write schedules a fresh full snapshot for each live query on the
written collection. Snapshots are delivered with ``loop.call_soon`` so they
always arrive after the write that caused them has resolved.
"""

import asyncio
from typing import Any, Callable, Dict, List, Optional, Set

from loguru import logger

from storage.errors import StoreError
from storage.repository import document as document_repo
from storage.util import generate_id

Document = Dict[str, Any]
SnapshotCallback = Callable[[List[Document]], None]


class _Listener:
    def __init__(self, collection: str, filters: Dict[str, Any], on_snapshot: SnapshotCallback):
        self.collection = collection
        self.filters = filters
        self.on_snapshot = on_snapshot
        self.active = True
        self.last: Optional[List[Document]] = None
        self.poll_task: Optional[asyncio.Task] = None


class SqlLiveQuery:
    """A filtered view of one collection that can be subscribed to."""

    def __init__(self, store: "SqlDocumentStore", collection: str, filters: Dict[str, Any]):
        self._store = store
        self.collection = collection
        self.filters = dict(filters)

    def subscribe(self, on_snapshot: SnapshotCallback) -> Callable[[], None]:
        return self._store._add_listener(_Listener(self.collection, self.filters, on_snapshot))


class SqlDocumentStore:
    def __init__(self, poll_interval: Optional[float] = None):
        self.poll_interval = poll_interval
        self._listeners: Set[_Listener] = set()

    def query(self, collection: str, filters: Optional[Dict[str, Any]] = None) -> SqlLiveQuery:
        document_repo.resolve_collection(collection)
        return SqlLiveQuery(self, collection, filters or {})

    async def create(self, collection: str, fields: Dict[str, Any]) -> str:
        doc_id = generate_id()
        document_repo.insert_document(collection, doc_id, fields)
        logger.debug("Created {}/{}", collection, doc_id)
        self._notify(collection)
        return doc_id

    async def set(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        document_repo.put_document(collection, doc_id, fields)
        logger.debug("Set {}/{}", collection, doc_id)
        self._notify(collection)

    async def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        document_repo.update_document(collection, doc_id, fields)
        logger.debug("Updated {}/{} fields={}", collection, doc_id, sorted(fields))
        self._notify(collection)

    async def delete(self, collection: str, doc_id: str) -> None:
        if document_repo.delete_document(collection, doc_id):
            logger.debug("Deleted {}/{}", collection, doc_id)
            self._notify(collection)

    async def get_all(self, collection: str, filters: Optional[Dict[str, Any]] = None) -> List[Document]:
        return document_repo.list_documents(collection, filters)

    def close(self) -> None:
        for listener in list(self._listeners):
            self._remove_listener(listener)

    def _add_listener(self, listener: _Listener) -> Callable[[], None]:
        loop = asyncio.get_running_loop()
        self._listeners.add(listener)
        loop.call_soon(self._push, listener)
        if self.poll_interval:
            listener.poll_task = loop.create_task(self._poll(listener))
        logger.debug("Live query opened on {} filters={}", listener.collection, listener.filters)

        def unsubscribe() -> None:
            self._remove_listener(listener)

        return unsubscribe

    def _remove_listener(self, listener: _Listener) -> None:
        if not listener.active:
            return
        listener.active = False
        self._listeners.discard(listener)
        if listener.poll_task is not None:
            listener.poll_task.cancel()
        logger.debug("Live query closed on {}", listener.collection)

    def _notify(self, collection: str) -> None:
        loop = asyncio.get_running_loop()
        for listener in list(self._listeners):
            if listener.collection == collection:
                loop.call_soon(self._push, listener)

    def _push(self, listener: _Listener, only_if_changed: bool = False) -> None:
        if not listener.active:
            return
        try:
            docs = document_repo.list_documents(listener.collection, listener.filters)
        except StoreError:
            logger.exception("Live query on {} failed", listener.collection)
            return
        if only_if_changed and docs == listener.last:
            return
        listener.last = docs
        try:
            listener.on_snapshot([dict(d) for d in docs])
        except Exception:
            logger.exception("Snapshot listener on {} raised", listener.collection)

    async def _poll(self, listener: _Listener) -> None:
        while listener.active:
            await asyncio.sleep(self.poll_interval)
            self._push(listener, only_if_changed=True)
