"""Session state: the signed-in identity, driven by auth notifications."""

import asyncio
from typing import Callable, List, Optional

from loguru import logger

from client.ports import AuthProvider, Unsubscribe
from storage.entity.dto import Identity

SessionListener = Callable[[Optional[Identity]], None]


class SessionState:
    """Single writer of the current identity.

    Starts out loading. Each provider notification replaces the identity
    once and is forwarded to every listener.
    """

    def __init__(self, auth: AuthProvider):
        self._auth = auth
        self._identity: Optional[Identity] = None
        self._loading = True
        self._listeners: List[SessionListener] = []
        self._unsubscribe: Optional[Unsubscribe] = None
        self._ready: Optional[asyncio.Event] = None

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def identity(self) -> Optional[Identity]:
        return self._identity

    @property
    def is_authenticated(self) -> bool:
        return not self._loading and self._identity is not None

    def start(self) -> None:
        if self._unsubscribe is not None:
            return
        self._ready = asyncio.Event()
        self._unsubscribe = self._auth.subscribe(self._on_auth_change)
        logger.debug("Session state subscribed to auth provider")

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._listeners.clear()

    async def wait_ready(self) -> Optional[Identity]:
        """Wait for the first notification and return the identity."""
        if self._ready is None:
            raise RuntimeError("SessionState.start() has not been called")
        await self._ready.wait()
        return self._identity

    def subscribe(self, listener: SessionListener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _on_auth_change(self, identity: Optional[Identity]) -> None:
        self._identity = identity
        self._loading = False
        if self._ready is not None:
            self._ready.set()
        logger.debug("Session changed uid={}", identity.uid if identity else None)
        for listener in list(self._listeners):
            try:
                listener(identity)
            except Exception:
                logger.exception("Session listener raised")
