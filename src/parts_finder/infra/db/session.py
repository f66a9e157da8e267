"""Engine and session factory for the PostgreSQL vehicle store, created on first use."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from parts_finder.infra.db.config import database_url
from parts_finder.infra.rest.config import store_timeout

_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def get_engine() -> Engine:
    """
    Engine for DATABASE_URL.

    The garage issues one store call at a time, so the pool stays small.
    Connecting and waiting for a pooled connection are both bounded by
    VEHICLE_STORE_TIMEOUT, which turns an unreachable database into a
    store error instead of a hung request.
    """
    global _engine
    if _engine is None:
        timeout = store_timeout()
        _engine = create_engine(
            database_url(),
            pool_size=2,
            max_overflow=2,
            pool_timeout=timeout,
            pool_pre_ping=True,
            pool_recycle=1800,
            connect_args={"connect_timeout": max(1, int(timeout))},
        )
    return _engine


def get_session_local() -> sessionmaker[Session]:
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(bind=get_engine(), expire_on_commit=False)
    return _session_factory


def dispose_engine() -> None:
    """Close pooled connections. The next store call builds a fresh engine."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None


@contextmanager
def session_scope(factory: sessionmaker[Session] | None = None) -> Iterator[Session]:
    """One unit of work: commit when the block completes, roll back when it raises."""
    session = (factory or get_session_local())()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
