"""Live, read-only view of the signed-in user's cards."""

import asyncio
from typing import Callable, List, Optional, Sequence, Tuple

from loguru import logger

from client.ports import DocumentStore, Record, Unsubscribe
from storage.entity.dto import Card, Identity

CARDS_COLLECTION = "flashcards"

SnapshotListener = Callable[[Tuple[Card, ...]], None]


def incomplete_cards(cards: Sequence[Card]) -> List[Card]:
    return [c for c in cards if not c.is_completed]


def completed_cards(cards: Sequence[Card]) -> List[Card]:
    return [c for c in cards if c.is_completed]


class CardSubscription:
    """Holds the latest snapshot pushed by one live query.

    Every push replaces the whole snapshot; nothing is merged. The
    incomplete/completed partitions are computed from the snapshot on access.
    """

    def __init__(self, store: DocumentStore):
        self._store = store
        self._cards: Tuple[Card, ...] = ()
        self._owner: Optional[Identity] = None
        self._unsubscribe: Optional[Unsubscribe] = None
        self._generation = 0
        self._listeners: List[SnapshotListener] = []
        self._received: Optional[asyncio.Event] = None

    @property
    def owner(self) -> Optional[Identity]:
        return self._owner

    @property
    def cards(self) -> Tuple[Card, ...]:
        return self._cards

    @property
    def incomplete(self) -> List[Card]:
        return incomplete_cards(self._cards)

    @property
    def completed(self) -> List[Card]:
        return completed_cards(self._cards)

    def find(self, card_id: str) -> Optional[Card]:
        for card in self._cards:
            if card.id == card_id:
                return card
        return None

    def bind(self, identity: Optional[Identity]) -> None:
        """Follow ``identity``'s cards, or clear everything when it is None."""
        if identity is not None and self._owner is not None and identity.uid == self._owner.uid:
            self._owner = identity
            return
        self._teardown()
        self._owner = identity
        if identity is None:
            return
        self._generation += 1
        generation = self._generation
        self._received = asyncio.Event()
        live_query = self._store.query(CARDS_COLLECTION, {"owner_id": identity.uid})
        self._unsubscribe = live_query.subscribe(lambda records: self._on_snapshot(generation, records))
        logger.debug("Card subscription opened uid={}", identity.uid)

    def close(self) -> None:
        self._teardown()
        self._owner = None
        self._listeners.clear()

    async def wait_for_snapshot(self) -> Tuple[Card, ...]:
        """Wait for the first push of the current binding."""
        if self._received is None:
            raise RuntimeError("CardSubscription is not bound to an identity")
        await self._received.wait()
        return self._cards

    def subscribe(self, listener: SnapshotListener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _teardown(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
            logger.debug("Card subscription closed")
        # pushes still in flight from the old query must be ignored
        self._generation += 1
        self._received = None
        if self._cards:
            self._cards = ()
            self._emit()

    def _on_snapshot(self, generation: int, records: List[Record]) -> None:
        if generation != self._generation:
            logger.debug("Dropping snapshot from a closed card subscription")
            return
        self._cards = tuple(Card.from_dict(r) for r in records)
        if self._received is not None:
            self._received.set()
        self._emit()

    def _emit(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._cards)
            except Exception:
                logger.exception("Card snapshot listener raised")
