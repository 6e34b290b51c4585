"""Screen gating and parameterized navigation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from client.errors import NavigationError
from client.session import SessionState
from storage.entity.dto import Identity


class Screen(str, Enum):
    SIGN_IN = "SignIn"
    SIGN_UP = "SignUp"
    HOME = "Home"
    ADD_EDIT_FLASHCARD = "AddEditFlashcard"
    PROFILE = "Profile"


UNAUTHENTICATED_SCREENS: Tuple[Screen, ...] = (Screen.SIGN_IN, Screen.SIGN_UP)
AUTHENTICATED_SCREENS: Tuple[Screen, ...] = (Screen.HOME, Screen.ADD_EDIT_FLASHCARD, Screen.PROFILE)


@dataclass
class Route:
    screen: Screen
    params: Dict[str, Any] = field(default_factory=dict)


class ViewRouter:
    """Keeps a navigation stack limited to the screens the session allows.

    Nothing is reachable while the session is loading. Every session change
    resets the stack to the first screen of the reachable set.
    """

    def __init__(self, session: SessionState):
        self._session = session
        self._stack: List[Route] = []

    @property
    def available_screens(self) -> Tuple[Screen, ...]:
        if self._session.is_loading:
            return ()
        if self._session.identity is None:
            return UNAUTHENTICATED_SCREENS
        return AUTHENTICATED_SCREENS

    @property
    def current(self) -> Optional[Route]:
        return self._stack[-1] if self._stack else None

    @property
    def history(self) -> Tuple[Route, ...]:
        return tuple(self._stack)

    def navigate(self, screen: Screen, **params: Any) -> Route:
        available = self.available_screens
        if screen not in available:
            if not available:
                raise NavigationError("Session is still loading")
            if self._session.identity is None:
                raise NavigationError("Not signed in")
            raise NavigationError(f"Already signed in as {self._session.identity.email}")
        if not self._stack:
            self._reset()
        route = Route(screen, dict(params))
        if self._stack and self._stack[-1].screen == screen and not params:
            self._stack[-1] = route
        else:
            self._stack.append(route)
        logger.debug("Navigate to {}", screen.value)
        return route

    def go_back(self) -> Optional[Route]:
        if len(self._stack) > 1:
            self._stack.pop()
        return self.current

    def on_session_change(self, identity: Optional[Identity]) -> None:
        self._reset()

    def _reset(self) -> None:
        available = self.available_screens
        self._stack = [Route(available[0])] if available else []
