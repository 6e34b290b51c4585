"""Errors raised by the auth provider and the document store."""


class FlashcardError(Exception):
    """Base error carrying a user-facing message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthError(FlashcardError):
    """The auth provider rejected credentials or a registration."""


class StoreError(FlashcardError):
    """A document store request failed (network, permission, not found)."""
