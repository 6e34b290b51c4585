"""Application root: owns and wires every client component."""

from typing import List, Optional

from loguru import logger

from client.account import AccountController
from client.card_actions import CardActions
from client.card_form import CardFormController
from client.card_subscription import CardSubscription
from client.ports import AuthProvider, DocumentStore, Unsubscribe
from client.router import ViewRouter
from client.session import SessionState
from storage.entity.dto import Identity


class FlashcardApp:
    def __init__(self, auth: AuthProvider, store: DocumentStore):
        self.session = SessionState(auth)
        self.cards = CardSubscription(store)
        self.card_form = CardFormController(store, self.session)
        self.card_actions = CardActions(store)
        self.account = AccountController(auth, store, self.session)
        self.router = ViewRouter(self.session)
        self._unsubscribes: List[Unsubscribe] = []

    def start(self) -> None:
        self._unsubscribes.append(self.session.subscribe(self._on_session_change))
        self.session.start()
        logger.debug("Flashcard app started")

    def close(self) -> None:
        for unsubscribe in self._unsubscribes:
            unsubscribe()
        self._unsubscribes.clear()
        self.cards.close()
        self.session.close()
        logger.debug("Flashcard app closed")

    async def __aenter__(self) -> "FlashcardApp":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _on_session_change(self, identity: Optional[Identity]) -> None:
        self.cards.bind(identity)
        self.router.on_session_change(identity)
