"""Complete and delete actions on individual cards.

Failures are logged and reported through the return value only; they never
raise to the caller.
"""

from typing import Callable

from loguru import logger

from client.card_subscription import CARDS_COLLECTION
from client.ports import DocumentStore
from storage.entity.dto import CardStatus
from storage.util import get_utc_iso8601_timestamp


class CardActions:
    def __init__(self, store: DocumentStore, now: Callable[[], str] = get_utc_iso8601_timestamp):
        self._store = store
        self._now = now

    async def complete(self, card_id: str) -> bool:
        # no guard against completing twice; completed_at is overwritten
        try:
            await self._store.update(CARDS_COLLECTION, card_id, {
                "status": CardStatus.COMPLETED.value,
                "completed_at": self._now(),
            })
        except Exception as e:
            logger.exception("Error marking card {} as complete: {}", card_id, e)
            return False
        logger.info("Completed card {}", card_id)
        return True

    async def delete(self, card_id: str) -> bool:
        try:
            await self._store.delete(CARDS_COLLECTION, card_id)
        except Exception as e:
            logger.exception("Error deleting card {}: {}", card_id, e)
            return False
        logger.info("Deleted card {}", card_id)
        return True
