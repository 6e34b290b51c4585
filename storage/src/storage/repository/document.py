"""Function-based document repository over the collection tables.

A document is a plain dict with an ``id`` key plus the collection's fields.
Rows come back in insertion order.
"""

from typing import Any, Dict, List, Optional, Tuple, Type

from sqlalchemy.exc import SQLAlchemyError

from storage.database.base import get_db
from storage.entity.base import Base
from storage.entity.card import CardEntity
from storage.entity.user import UserEntity
from storage.errors import StoreError

# collection name -> (entity, column holding the document id)
COLLECTIONS: Dict[str, Tuple[Type[Base], str]] = {
    "flashcards": (CardEntity, "card_id"),
    "users": (UserEntity, "user_id"),
}

Document = Dict[str, Any]


def resolve_collection(collection: str) -> Tuple[Type[Base], str]:
    try:
        return COLLECTIONS[collection]
    except KeyError:
        raise StoreError(f"Unknown collection: {collection}")


def _field_names(entity_cls: Type[Base], key: str) -> List[str]:
    return [c.name for c in entity_cls.__table__.columns if c.name not in ("id", key)]


def _check_fields(entity_cls: Type[Base], key: str, fields: Dict[str, Any]) -> None:
    allowed = set(_field_names(entity_cls, key))
    unknown = sorted(k for k in fields if k not in allowed)
    if unknown:
        raise StoreError(f"Unknown field(s) for {entity_cls.__tablename__}: {', '.join(unknown)}")


def _entity_to_document(entity, key: str) -> Document:
    doc = {"id": getattr(entity, key)}
    for name in _field_names(type(entity), key):
        doc[name] = getattr(entity, name)
    return doc


def list_documents(collection: str, filters: Optional[Dict[str, Any]] = None) -> List[Document]:
    entity_cls, key = resolve_collection(collection)
    filters = dict(filters or {})
    if "id" in filters:
        filters[key] = filters.pop("id")
    _check_fields(entity_cls, key, {k: v for k, v in filters.items() if k != key})
    try:
        with get_db() as session:
            query = session.query(entity_cls).filter_by(**filters).order_by(entity_cls.id.asc())
            return [_entity_to_document(row, key) for row in query.all()]
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to query {collection}: {e}") from e


def get_document(collection: str, doc_id: str) -> Optional[Document]:
    entity_cls, key = resolve_collection(collection)
    try:
        with get_db() as session:
            row = session.query(entity_cls).filter_by(**{key: doc_id}).first()
            if row:
                return _entity_to_document(row, key)
            return None
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to read {collection}/{doc_id}: {e}") from e


def insert_document(collection: str, doc_id: str, fields: Dict[str, Any]) -> Document:
    entity_cls, key = resolve_collection(collection)
    _check_fields(entity_cls, key, fields)
    try:
        with get_db() as session:
            entity = entity_cls(**{key: doc_id}, **fields)
            session.add(entity)
            session.flush()
            return _entity_to_document(entity, key)
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to create {collection}/{doc_id}: {e}") from e


def put_document(collection: str, doc_id: str, fields: Dict[str, Any]) -> Document:
    """Create or fully overwrite a document."""
    entity_cls, key = resolve_collection(collection)
    _check_fields(entity_cls, key, fields)
    try:
        with get_db() as session:
            entity = session.query(entity_cls).filter_by(**{key: doc_id}).first()
            if entity:
                for name in _field_names(entity_cls, key):
                    setattr(entity, name, fields.get(name))
            else:
                entity = entity_cls(**{key: doc_id}, **fields)
                session.add(entity)
            session.flush()
            return _entity_to_document(entity, key)
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to write {collection}/{doc_id}: {e}") from e


def update_document(collection: str, doc_id: str, fields: Dict[str, Any]) -> Document:
    """Merge ``fields`` into an existing document. Raises StoreError if missing."""
    entity_cls, key = resolve_collection(collection)
    _check_fields(entity_cls, key, fields)
    try:
        with get_db() as session:
            entity = session.query(entity_cls).filter_by(**{key: doc_id}).first()
            if not entity:
                raise StoreError(f"No document to update: {collection}/{doc_id}")
            for k, v in fields.items():
                setattr(entity, k, v)
            session.flush()
            return _entity_to_document(entity, key)
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to update {collection}/{doc_id}: {e}") from e


def delete_document(collection: str, doc_id: str) -> bool:
    """Delete a document. Deleting a missing document is not an error."""
    entity_cls, key = resolve_collection(collection)
    try:
        with get_db() as session:
            count = session.query(entity_cls).filter_by(**{key: doc_id}).delete()
            session.flush()
            return count > 0
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to delete {collection}/{doc_id}: {e}") from e
