"""Plain data objects passed between the storage layer and the client."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class CardColor(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    RED = "red"
    YELLOW = "yellow"
    PURPLE = "purple"


class CardStatus(str, Enum):
    INCOMPLETE = "incomplete"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Identity:
    uid: str
    email: str
    display_name: Optional[str] = None


@dataclass
class Card:
    id: str
    title: str
    tasks: str
    owner_id: str
    color: CardColor = CardColor.BLUE
    due_date: Optional[str] = None
    status: CardStatus = CardStatus.INCOMPLETE
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    completed_at: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return self.status == CardStatus.COMPLETED

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Card":
        color = data.get("color") or CardColor.BLUE.value
        try:
            card_color = CardColor(color)
        except ValueError:
            card_color = CardColor.BLUE
        status = CardStatus.COMPLETED if data.get("status") == CardStatus.COMPLETED.value else CardStatus.INCOMPLETE
        return cls(
            id=data["id"],
            title=data.get("title") or "",
            tasks=data.get("tasks") or "",
            owner_id=data.get("owner_id") or "",
            color=card_color,
            due_date=data.get("due_date"),
            status=status,
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            completed_at=data.get("completed_at"),
        )


@dataclass
class Profile:
    uid: str
    first_name: str
    last_name: str
    email: str
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Profile":
        return cls(
            uid=data["id"],
            first_name=data.get("first_name") or "",
            last_name=data.get("last_name") or "",
            email=data.get("email") or "",
            created_at=data.get("created_at"),
        )
