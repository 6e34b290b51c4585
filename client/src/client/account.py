"""Sign in, sign up, sign out and account deletion."""

import asyncio
import re
from typing import Callable, Optional

from loguru import logger
from pydantic import BaseModel

from client.card_subscription import CARDS_COLLECTION
from client.errors import AuthError, ValidationError
from client.ports import AuthProvider, DocumentStore
from client.session import SessionState
from storage.entity.dto import Identity, Profile
from storage.util import get_utc_iso8601_timestamp

USERS_COLLECTION = "users"
MIN_PASSWORD_LENGTH = 6
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class SignUpForm(BaseModel):
    email: str = ""
    password: str = ""
    confirm_password: str = ""
    first_name: str = ""
    last_name: str = ""

    def check(self) -> None:
        """Raise ValidationError for the first rule that fails."""
        if not all((self.email, self.password, self.confirm_password, self.first_name, self.last_name)):
            raise ValidationError("All fields are required")
        if self.password != self.confirm_password:
            raise ValidationError("Passwords do not match")
        if len(self.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if not EMAIL_PATTERN.match(self.email):
            raise ValidationError("Please enter a valid email address")

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class AccountController:
    def __init__(self, auth: AuthProvider, store: DocumentStore, session: SessionState,
                 now: Callable[[], str] = get_utc_iso8601_timestamp):
        self._auth = auth
        self._store = store
        self._session = session
        self._now = now

    async def sign_in(self, email: str, password: str) -> Identity:
        if not email or not password:
            raise AuthError("Please fill in all fields")
        return await self._auth.sign_in(email, password)

    async def sign_up(self, email: str, password: str, confirm_password: str,
                      first_name: str, last_name: str) -> Identity:
        form = SignUpForm(
            email=email,
            password=password,
            confirm_password=confirm_password,
            first_name=first_name,
            last_name=last_name,
        )
        form.check()

        identity = await self._auth.sign_up(form.email, form.password)
        identity = await self._auth.update_display_name(identity, form.display_name)
        await self._store.set(USERS_COLLECTION, identity.uid, {
            "first_name": form.first_name,
            "last_name": form.last_name,
            "email": form.email,
            "created_at": self._now(),
        })
        logger.info("Account created uid={}", identity.uid)
        return identity

    async def sign_out(self) -> None:
        await self._auth.sign_out()

    async def load_profile(self) -> Optional[Profile]:
        """Read the signed-in user's profile record, if one was written."""
        identity = self._session.identity
        if identity is None:
            return None
        records = await self._store.get_all(USERS_COLLECTION, {"id": identity.uid})
        return Profile.from_dict(records[0]) if records else None

    async def delete_account(self) -> Optional[Identity]:
        """Delete every owned card, the profile, then the identity.

        Each step is safe to repeat. If any card deletion fails the call
        raises StoreError before the profile or identity is touched; cards
        deleted so far stay deleted.
        """
        identity = self._session.identity or self._auth.current_user
        if identity is None:
            return None

        records = await self._store.get_all(CARDS_COLLECTION, {"owner_id": identity.uid})
        results = await asyncio.gather(
            *(self._store.delete(CARDS_COLLECTION, r["id"]) for r in records),
            return_exceptions=True,
        )
        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            logger.error("Account deletion uid={}: {} of {} card deletions failed",
                         identity.uid, len(failures), len(records))
            raise failures[0]

        await self._store.delete(USERS_COLLECTION, identity.uid)
        await self._auth.delete_account(identity)
        logger.info("Account deleted uid={} cards={}", identity.uid, len(records))
        return identity
