from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from property_manager.infra.config import database_url

POOL_SIZE = 10
POOL_MAX_OVERFLOW = 20
POOL_RECYCLE_SECONDS = 3600

# Created on first use so the mongodb and memory backends never need DATABASE_URL
_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def get_engine() -> Engine:
    """
    Engine for the ``postgres`` backend, created on first use.

    At most POOL_SIZE + POOL_MAX_OVERFLOW connections; each one is pinged
    before checkout and recycled after POOL_RECYCLE_SECONDS.
    """
    global _engine
    if _engine is None:
        _engine = create_engine(
            database_url(),
            pool_size=POOL_SIZE,
            max_overflow=POOL_MAX_OVERFLOW,
            pool_pre_ping=True,
            pool_recycle=POOL_RECYCLE_SECONDS,
        )
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    global _session_factory
    if _session_factory is None:
        # Properties returned after commit must stay readable
        _session_factory = sessionmaker(bind=get_engine(), expire_on_commit=False)
    return _session_factory


@contextmanager
def get_session() -> Iterator[Session]:
    """
    One unit of work: commit if the block succeeds, roll back if it raises.

    A property write is a single statement, so a request never commits
    a partial change.
    """
    session = get_session_factory()()

    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def dispose_engine() -> None:
    """Close pooled connections (application shutdown)."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None
