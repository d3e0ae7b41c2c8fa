"""db: persistence layer for ``budgetflow`` (SQLAlchemy).

Public exports
--------------
- ``Base`` and ``metadata`` for schema creation
- the ``KvEntry`` ORM model backing the key-value store
- engine/session helpers from ``budgetflow.db.client``
"""

from __future__ import annotations

from .client import get_engine, get_session, reset_engine, session_scope
from .models import Base, KvEntry

metadata = Base.metadata

__all__ = [
    "Base",
    "KvEntry",
    "get_engine",
    "get_session",
    "metadata",
    "reset_engine",
    "session_scope",
]
