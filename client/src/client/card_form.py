"""Add/edit card form: draft, validation and save."""

from datetime import date
from typing import Callable, Optional

from loguru import logger
from pydantic import BaseModel

from client.card_subscription import CARDS_COLLECTION
from client.errors import AuthError, ValidationError
from client.ports import DocumentStore
from client.session import SessionState
from storage.entity.dto import Card, CardColor, CardStatus
from storage.util import get_utc_iso8601_timestamp


class CardDraft(BaseModel):
    """In-progress card input. Not validated until ``validate``/``save``."""

    title: str = ""
    tasks: str = ""
    color: CardColor = CardColor.BLUE
    due_date: Optional[date] = None

    model_config = {"validate_assignment": True}


class CardFormController:
    def __init__(self, store: DocumentStore, session: SessionState,
                 now: Callable[[], str] = get_utc_iso8601_timestamp):
        self._store = store
        self._session = session
        self._now = now

    def prepare_new(self) -> CardDraft:
        return CardDraft()

    def prepare_edit(self, card: Card) -> CardDraft:
        return CardDraft(
            title=card.title,
            tasks=card.tasks,
            color=card.color,
            due_date=date.fromisoformat(card.due_date) if card.due_date else None,
        )

    def validate(self, draft: CardDraft) -> None:
        if not draft.title.strip() or not draft.tasks.strip():
            raise ValidationError("Title and tasks are required")

    async def save(self, draft: CardDraft, existing: Optional[Card] = None) -> str:
        """Create or update a card and return its id.

        The local card list is not touched; it changes when the live query
        pushes the next snapshot.
        """
        self.validate(draft)
        identity = self._session.identity
        if identity is None:
            raise AuthError("You must be signed in to save a flashcard")

        now = self._now()
        fields = {
            "title": draft.title.strip(),
            "tasks": draft.tasks.strip(),
            "color": draft.color.value,
            "due_date": draft.due_date.isoformat() if draft.due_date else None,
            "updated_at": now,
        }
        if existing is not None:
            fields["status"] = existing.status.value
            await self._store.update(CARDS_COLLECTION, existing.id, fields)
            logger.info("Updated card {}", existing.id)
            return existing.id

        fields.update(
            status=CardStatus.INCOMPLETE.value,
            owner_id=identity.uid,
            created_at=now,
        )
        card_id = await self._store.create(CARDS_COLLECTION, fields)
        logger.info("Created card {}", card_id)
        return card_id
