"""Function-based account repository using SQLAlchemy sessions."""

from typing import Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError

from storage.database.base import get_db
from storage.entity.account import AccountEntity
from storage.entity.dto import Identity
from storage.errors import StoreError


def _entity_to_dto(entity: AccountEntity) -> Identity:
    return Identity(uid=entity.uid, email=entity.email, display_name=entity.display_name)


def get_account(uid: str) -> Optional[Identity]:
    with get_db() as session:
        row = session.query(AccountEntity).filter_by(uid=uid).first()
        if row:
            return _entity_to_dto(row)
        return None


def get_credentials(email: str) -> Optional[Tuple[Identity, str]]:
    """Return the identity and password hash registered for ``email``."""
    with get_db() as session:
        row = session.query(AccountEntity).filter_by(email=email).first()
        if row:
            return _entity_to_dto(row), row.password_hash
        return None


def email_exists(email: str) -> bool:
    with get_db() as session:
        return session.query(AccountEntity).filter_by(email=email).first() is not None


def create_account(uid: str, email: str, password_hash: str) -> Identity:
    try:
        with get_db() as session:
            entity = AccountEntity(uid=uid, email=email, password_hash=password_hash)
            session.add(entity)
            session.flush()
            return _entity_to_dto(entity)
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to create account: {e}") from e


def set_display_name(uid: str, display_name: str) -> Optional[Identity]:
    with get_db() as session:
        entity = session.query(AccountEntity).filter_by(uid=uid).first()
        if not entity:
            return None
        entity.display_name = display_name
        session.flush()
        return _entity_to_dto(entity)


def delete_account(uid: str) -> bool:
    with get_db() as session:
        count = session.query(AccountEntity).filter_by(uid=uid).delete()
        session.flush()
        return count > 0
