from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


def _utcnow() -> datetime:
    return datetime.now(UTC)


# ---------------------------
# Core: kv_entries
# ---------------------------


class KvEntry(Base):
    """One key of the per-user key-value store.

    ``value`` holds a JSON document (a list of records for collections, a
    bare string for the current-user pointer). Writes replace the whole
    value; the last writer wins.
    """

    __tablename__ = "kv_entries"

    key: Mapped[str] = mapped_column(String, primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )


__all__ = ["Base", "KvEntry"]
