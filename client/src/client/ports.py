"""Contracts the client core consumes from its collaborators."""

from typing import Any, Callable, Dict, List, Optional, Protocol

from storage.entity.dto import Identity

Record = Dict[str, Any]
Unsubscribe = Callable[[], None]


class LiveQuery(Protocol):
    def subscribe(self, on_snapshot: Callable[[List[Record]], None]) -> Unsubscribe:
        ...


class DocumentStore(Protocol):
    def query(self, collection: str, filters: Optional[Dict[str, Any]] = None) -> LiveQuery:
        ...

    async def create(self, collection: str, fields: Dict[str, Any]) -> str:
        ...

    async def set(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        ...

    async def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        ...

    async def delete(self, collection: str, doc_id: str) -> None:
        ...

    async def get_all(self, collection: str, filters: Optional[Dict[str, Any]] = None) -> List[Record]:
        ...


class AuthProvider(Protocol):
    @property
    def current_user(self) -> Optional[Identity]:
        ...

    def subscribe(self, on_change: Callable[[Optional[Identity]], None]) -> Unsubscribe:
        ...

    async def sign_in(self, email: str, password: str) -> Identity:
        ...

    async def sign_up(self, email: str, password: str) -> Identity:
        ...

    async def sign_out(self) -> None:
        ...

    async def update_display_name(self, identity: Identity, display_name: str) -> Identity:
        ...

    async def delete_account(self, identity: Identity) -> None:
        ...
