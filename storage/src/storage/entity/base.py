from sqlalchemy import Column, String
from sqlalchemy.orm import DeclarativeBase
from storage.util import get_utc_iso8601_timestamp


class Base(DeclarativeBase):
    pass


class AuditColumns:
    """Row timestamps maintained by the ORM, for tables whose writers don't set their own."""
    created_at = Column(String, default=get_utc_iso8601_timestamp)
    updated_at = Column(String, default=get_utc_iso8601_timestamp, onupdate=get_utc_iso8601_timestamp)
