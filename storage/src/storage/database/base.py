"""Engine and session management for the SQL backend."""

from contextlib import contextmanager
from typing import Iterator, Optional

from loguru import logger
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from storage.entity.base import Base

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def init_db(database_url: str) -> Engine:
    """Create the engine and all tables. Safe to call again with a new URL."""
    global _engine, _session_factory
    dispose_db()
    kwargs = {}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url:
            # every session must see the same in-memory database
            kwargs["poolclass"] = StaticPool
    _engine = create_engine(database_url, **kwargs)

    # register every mapped table before create_all
    import storage.entity.account  # noqa: F401
    import storage.entity.card  # noqa: F401
    import storage.entity.user  # noqa: F401

    Base.metadata.create_all(bind=_engine)
    _session_factory = sessionmaker(bind=_engine, autoflush=False, expire_on_commit=False)
    logger.debug("Database initialized url={}", database_url)
    return _engine


def dispose_db() -> None:
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None


@contextmanager
def get_db() -> Iterator[Session]:
    """Yield a session that commits on success and rolls back on error."""
    if _session_factory is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    session = _session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
