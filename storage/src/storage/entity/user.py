from sqlalchemy import Column, Integer, String
from .base import Base


class UserEntity(Base):
    """Profile document in the ``users`` collection, keyed by account uid."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, nullable=False, unique=True, index=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    created_at = Column(String, nullable=True)
