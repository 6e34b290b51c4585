from sqlalchemy import Column, Integer, String, Text
from .base import Base


class CardEntity(Base):
    """A document in the ``flashcards`` collection.

    Timestamps are written by the client, so there are no column defaults.
    """

    __tablename__ = "flashcards"

    id = Column(Integer, primary_key=True, autoincrement=True)
    card_id = Column(String, nullable=False, unique=True, index=True)
    owner_id = Column(String, nullable=True, index=True)
    title = Column(String, nullable=True)
    tasks = Column(Text, nullable=True)
    color = Column(String, nullable=True)
    due_date = Column(String, nullable=True)
    status = Column(String, nullable=True)
    created_at = Column(String, nullable=True)
    updated_at = Column(String, nullable=True)
    completed_at = Column(String, nullable=True)
