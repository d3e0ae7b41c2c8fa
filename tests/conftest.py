"""Pytest configuration for test isolation.

The storage layer keeps a process-wide SQLAlchemy engine bound to the first
database URL it sees. To keep tests hermetic, every test gets its own SQLite
file (exported through ``BUDGETFLOW_DATABASE_URL``) and the engine singleton
is reset before and after the test.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from budgetflow.db.client import reset_engine


@pytest.fixture(autouse=True)
def _isolate_database(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Point the store at a per-test SQLite file and drop any cached engine."""

    db_file = tmp_path / "db" / "budgetflow.db"
    db_file.parent.mkdir(parents=True, exist_ok=True)
    monkeypatch.setenv("BUDGETFLOW_DATABASE_URL", f"sqlite+pysqlite:///{os.fspath(db_file)}")
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("BUDGETFLOW_SEED_SAMPLES", raising=False)
    reset_engine()
    yield
    reset_engine()


@pytest.fixture
def database_url() -> str:
    return os.environ["BUDGETFLOW_DATABASE_URL"]
