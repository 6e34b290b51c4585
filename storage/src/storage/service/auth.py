"""Auth provider backed by the account table.

The signed-in identity can be persisted to a JSON session file so that
separate processes (one per CLI command) share a session.
"""

import asyncio
import json
import os
from typing import Callable, List, Optional

from loguru import logger

from storage.entity.dto import Identity
from storage.errors import AuthError, StoreError
from storage.repository import account as account_repo
from storage.service.password import hash_password, verify_password
from storage.util import generate_id

AuthCallback = Callable[[Optional[Identity]], None]


class _AuthListener:
    def __init__(self, on_change: AuthCallback):
        self.on_change = on_change
        self.active = True


class SqlAuthProvider:
    def __init__(self, session_file: Optional[str] = None):
        self.session_file = session_file
        self._current: Optional[Identity] = None
        self._listeners: List[_AuthListener] = []
        if session_file:
            self._restore_session()

    @property
    def current_user(self) -> Optional[Identity]:
        return self._current

    def subscribe(self, on_change: AuthCallback) -> Callable[[], None]:
        """Register ``on_change``. It first receives the current identity."""
        listener = _AuthListener(on_change)
        self._listeners.append(listener)
        asyncio.get_running_loop().call_soon(self._deliver_current, listener)

        def unsubscribe() -> None:
            listener.active = False
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def sign_in(self, email: str, password: str) -> Identity:
        creds = account_repo.get_credentials(email)
        if creds is None or not verify_password(password, creds[1]):
            raise AuthError("Invalid email or password")
        identity = creds[0]
        logger.info("Signed in uid={}", identity.uid)
        self._set_current(identity)
        return identity

    async def sign_up(self, email: str, password: str) -> Identity:
        if account_repo.email_exists(email):
            raise AuthError("Email already in use")
        if len(password) < 6:
            raise AuthError("Password should be at least 6 characters")
        try:
            identity = account_repo.create_account(generate_id(), email, hash_password(password))
        except StoreError as e:
            raise AuthError(e.message) from e
        logger.info("Registered uid={}", identity.uid)
        self._set_current(identity)
        return identity

    async def sign_out(self) -> None:
        if self._current is not None:
            logger.info("Signed out uid={}", self._current.uid)
        self._set_current(None)

    async def update_display_name(self, identity: Identity, display_name: str) -> Identity:
        updated = account_repo.set_display_name(identity.uid, display_name)
        if updated is None:
            raise AuthError("User not found")
        if self._current is not None and self._current.uid == identity.uid:
            self._set_current(updated)
        return updated

    async def delete_account(self, identity: Identity) -> None:
        account_repo.delete_account(identity.uid)
        logger.info("Deleted account uid={}", identity.uid)
        if self._current is not None and self._current.uid == identity.uid:
            self._set_current(None)

    def _set_current(self, identity: Optional[Identity]) -> None:
        self._current = identity
        self._save_session()
        loop = asyncio.get_running_loop()
        for listener in list(self._listeners):
            loop.call_soon(self._deliver, listener, identity)

    def _deliver_current(self, listener: _AuthListener) -> None:
        self._deliver(listener, self._current)

    @staticmethod
    def _deliver(listener: _AuthListener, identity: Optional[Identity]) -> None:
        if not listener.active:
            return
        try:
            listener.on_change(identity)
        except Exception:
            logger.exception("Auth state listener raised")

    def reload_session(self) -> None:
        """Pick up a sign-in or sign-out made by another process."""
        if not self.session_file:
            return
        identity = self._read_session(discard=False)
        if identity != self._current:
            logger.info("Session file changed uid={}", identity.uid if identity else None)
            self._set_current(identity)

    def _restore_session(self) -> None:
        self._current = self._read_session()

    def _read_session(self, discard: bool = True) -> Optional[Identity]:
        """Load the identity named by the session file.

        With ``discard`` an unreadable or stale file is removed. Without it an
        unreadable file, possibly half-written by another process, leaves the
        current identity unchanged.
        """
        if not os.path.exists(self.session_file):
            return None
        try:
            with open(self.session_file) as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            if not discard:
                return self._current
            logger.warning("Unreadable session file {}, discarding: {}", self.session_file, e)
            self._discard_session_file()
            return None
        uid = data.get("uid") if isinstance(data, dict) else None
        identity = account_repo.get_account(uid) if uid else None
        if identity is None:
            if discard:
                logger.warning("Stored session refers to a missing account, discarding")
                self._discard_session_file()
        return identity

    def _discard_session_file(self) -> None:
        try:
            os.remove(self.session_file)
        except FileNotFoundError:
            pass

    def _save_session(self) -> None:
        if not self.session_file:
            return
        if self._current is None:
            if os.path.exists(self.session_file):
                os.remove(self.session_file)
            return
        os.makedirs(os.path.dirname(self.session_file) or ".", exist_ok=True)
        with open(self.session_file, "w") as f:
            json.dump({"uid": self._current.uid, "email": self._current.email}, f)
