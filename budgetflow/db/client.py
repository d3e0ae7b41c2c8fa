"""Centralized SQLAlchemy engine/session helpers.

Usage
-----
from budgetflow.db.client import session_scope

with session_scope() as s:
    s.get(KvEntry, "budgetflow_users")

The database URL comes from the explicit ``database_url`` argument, then
``BUDGETFLOW_DATABASE_URL``, then ``DATABASE_URL``, and finally a SQLite file
``budgetflow.db`` in the working directory. The schema is created on first
engine use.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from ..logging_setup import get_logger
from .models import Base

logger = get_logger("budgetflow.db.client")

DEFAULT_DATABASE_URL = "sqlite+pysqlite:///budgetflow.db"

_ENGINE: Engine | None = None
_SESSION_MAKER: sessionmaker[Session] | None = None
_DB_URL: str | None = None


def database_url(override: str | None = None) -> str:
    return (
        override
        or os.getenv("BUDGETFLOW_DATABASE_URL")
        or os.getenv("DATABASE_URL")
        or DEFAULT_DATABASE_URL
    )


def get_engine(*, database_url: str | None = None) -> Engine:
    """Return the shared SQLAlchemy engine, creating it (and the schema) on first use."""

    global _ENGINE, _SESSION_MAKER, _DB_URL
    url = _resolve(database_url)
    if _ENGINE is None:
        engine = create_engine(url, pool_pre_ping=True)
        Base.metadata.create_all(bind=engine)
        _SESSION_MAKER = sessionmaker(bind=engine, expire_on_commit=False, class_=Session)
        _ENGINE = engine
        _DB_URL = url
        logger.debug("Database engine initialized: %s", engine.url.render_as_string(hide_password=True))
        return engine
    # Engine already initialized; guard against cross-environment misuse.
    if _DB_URL is not None and url != _DB_URL:
        raise RuntimeError(
            "get_engine() already initialized with a different database URL; "
            "call reset_engine() first or avoid passing a different URL"
        )
    return _ENGINE


def _resolve(override: str | None) -> str:
    # An engine bound earlier keeps serving callers that pass no explicit URL.
    if override is None and _DB_URL is not None:
        return _DB_URL
    return database_url(override)


def get_session(*, database_url: str | None = None) -> Session:
    """Return a new SQLAlchemy session bound to the shared engine."""

    get_engine(database_url=database_url)
    assert _SESSION_MAKER is not None  # bound by get_engine
    return _SESSION_MAKER()


@contextmanager
def session_scope(*, database_url: str | None = None) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""

    session = get_session(database_url=database_url)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def reset_engine() -> None:
    """Dispose the shared engine so the next call binds a fresh URL."""

    global _ENGINE, _SESSION_MAKER, _DB_URL
    if _ENGINE is not None:
        _ENGINE.dispose()
    _ENGINE = None
    _SESSION_MAKER = None
    _DB_URL = None


__all__ = [
    "DEFAULT_DATABASE_URL",
    "database_url",
    "get_engine",
    "get_session",
    "reset_engine",
    "session_scope",
]
