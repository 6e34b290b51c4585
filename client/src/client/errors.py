"""Error taxonomy seen by screens.

AuthError and StoreError come from the backend; ValidationError and
NavigationError are raised locally before any request is issued.
"""

from storage.errors import AuthError, FlashcardError, StoreError

__all__ = ["AuthError", "FlashcardError", "NavigationError", "StoreError", "ValidationError"]


class ValidationError(FlashcardError):
    """User input was rejected before a request was issued."""


class NavigationError(FlashcardError):
    """The requested screen is not reachable in the current session state."""
