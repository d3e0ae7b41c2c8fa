"""Per-user persistence on top of the ``kv_entries`` key-value table.

Each signed-in user owns one partition: the keys
``budgetflow_<collection>_<user_id>`` (``..._guest`` when nobody is signed
in). A collection is stored as one JSON array and every write replaces the
whole array, so concurrent writers follow last-write-wins.

Collections are loaded through the pydantic DTOs in :mod:`budgetflow.models`.
A corrupt document is logged and read as an empty collection; individual
records that fail validation are logged and dropped.
"""

from __future__ import annotations

import json
import os
import uuid
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, replace
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from .db.client import session_scope
from .db.models import KvEntry
from .ingest.seed_samples import SAMPLE_DEBTS, SAMPLE_GOALS, SAMPLE_TRANSACTIONS
from .logging_setup import get_logger
from .models import Debt, DebtRecord, Goal, GoalRecord, Transaction, TransactionRecord

logger = get_logger("budgetflow.storage")

KEY_PREFIX = "budgetflow"
USERS_KEY = f"{KEY_PREFIX}_users"
CURRENT_USER_KEY = f"{KEY_PREFIX}_current_user"
GUEST = "guest"

T = TypeVar("T")


def storage_key(collection: str, user_id: str | None) -> str:
    return f"{KEY_PREFIX}_{collection}_{user_id or GUEST}"


def new_id() -> str:
    return uuid.uuid4().hex


def _seed_samples_default() -> bool:
    v = (os.getenv("BUDGETFLOW_SEED_SAMPLES") or "").strip().lower()
    return v not in {"0", "false", "no"}


class KeyValueStore:
    """Opaque string key-value store backed by the database."""

    def __init__(self, *, database_url: str | None = None) -> None:
        self._database_url = database_url

    def get(self, key: str) -> str | None:
        with session_scope(database_url=self._database_url) as session:
            entry = session.get(KvEntry, key)
            return entry.value if entry is not None else None

    def set(self, key: str, value: str) -> None:
        with session_scope(database_url=self._database_url) as session:
            entry = session.get(KvEntry, key)
            if entry is None:
                session.add(KvEntry(key=key, value=value))
            else:
                entry.value = value

    def delete(self, key: str) -> None:
        with session_scope(database_url=self._database_url) as session:
            entry = session.get(KvEntry, key)
            if entry is not None:
                session.delete(entry)

    def get_json(self, key: str) -> Any | None:
        """Decoded JSON under ``key``; ``None`` when missing or unreadable."""

        raw = self.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("Error loading %s: %s", key, e)
            return None

    def set_json(self, key: str, value: Any) -> None:
        self.set(key, json.dumps(value))


class CollectionStore(Generic[T]):
    """One JSON-array collection (transactions, goals or debts) of a partition.

    Every mutating method persists and returns the new full list.

    Parameters
    ----------
    kv:
        Backing key-value store.
    key:
        Storage key of the collection.
    to_record / from_record:
        Conversions between domain values and their pydantic DTO.
    record_cls:
        DTO class used to validate stored items.
    samples:
        Written and returned on the first load of a never-saved key when
        ``seed_samples`` is true.
    prepend:
        Whether :meth:`add` puts new items first (transactions) or last.
    """

    def __init__(
        self,
        kv: KeyValueStore,
        key: str,
        *,
        record_cls: type[BaseModel],
        to_record: Callable[[T], BaseModel],
        from_record: Callable[[Any], T],
        samples: Sequence[T] = (),
        prepend: bool = False,
        seed_samples: bool = True,
    ) -> None:
        self.kv = kv
        self.key = key
        self._record_cls = record_cls
        self._to_record = to_record
        self._from_record = from_record
        self._samples = tuple(samples)
        self._prepend = prepend
        self._seed_samples = seed_samples

    def load(self) -> list[T]:
        raw = self.kv.get(self.key)
        if raw is None:
            if self._seed_samples and self._samples:
                return self.save(self._samples)
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("Error loading %s: %s", self.key, e)
            return []
        if not isinstance(data, list):
            logger.error("Error loading %s: expected a JSON array", self.key)
            return []

        items: list[T] = []
        for pos, obj in enumerate(data):
            try:
                record = self._record_cls.model_validate(obj)
                items.append(self._from_record(record))
            except (ValidationError, ValueError) as e:
                logger.warning("Dropping invalid record %d in %s: %s", pos, self.key, e)
        return items

    def save(self, items: Iterable[T]) -> list[T]:
        saved = list(items)
        self.kv.set_json(
            self.key,
            [self._to_record(item).model_dump(by_alias=True) for item in saved],
        )
        return saved

    def get(self, item_id: str) -> T | None:
        for item in self.load():
            if getattr(item, "id", None) == item_id:
                return item
        return None

    def add(self, item: T) -> list[T]:
        current = self.load()
        return self.save([item, *current] if self._prepend else [*current, item])

    def add_many(self, items: Iterable[T]) -> list[T]:
        """Add each item in turn, exactly as repeated :meth:`add` calls would."""

        current = self.load()
        for item in items:
            current = [item, *current] if self._prepend else [*current, item]
        return self.save(current)

    def update(self, item_id: str, **changes: Any) -> list[T]:
        """Apply ``changes`` to the item with ``item_id``; unknown ids are a no-op."""

        changes.pop("id", None)
        updated = [
            replace(item, **changes) if getattr(item, "id", None) == item_id else item
            for item in self.load()
        ]
        return self.save(updated)

    def delete(self, item_id: str) -> list[T]:
        return self.save([item for item in self.load() if getattr(item, "id", None) != item_id])


@dataclass(frozen=True, slots=True)
class UserStores:
    """The three collections of one user partition."""

    user_id: str | None
    transactions: CollectionStore[Transaction]
    goals: CollectionStore[Goal]
    debts: CollectionStore[Debt]


def open_stores(
    *,
    user_id: str | None,
    database_url: str | None = None,
    seed_samples: bool | None = None,
) -> UserStores:
    """Open the partition of ``user_id`` (the guest partition for ``None``).

    ``seed_samples`` defaults to the ``BUDGETFLOW_SEED_SAMPLES`` environment
    variable (enabled unless set to ``0``/``false``/``no``).
    """

    if seed_samples is None:
        seed_samples = _seed_samples_default()
    kv = KeyValueStore(database_url=database_url)
    return UserStores(
        user_id=user_id,
        transactions=CollectionStore(
            kv,
            storage_key("transactions", user_id),
            record_cls=TransactionRecord,
            to_record=TransactionRecord.from_domain,
            from_record=TransactionRecord.to_domain,
            samples=SAMPLE_TRANSACTIONS,
            prepend=True,
            seed_samples=seed_samples,
        ),
        goals=CollectionStore(
            kv,
            storage_key("goals", user_id),
            record_cls=GoalRecord,
            to_record=GoalRecord.from_domain,
            from_record=GoalRecord.to_domain,
            samples=SAMPLE_GOALS,
            seed_samples=seed_samples,
        ),
        debts=CollectionStore(
            kv,
            storage_key("debts", user_id),
            record_cls=DebtRecord,
            to_record=DebtRecord.from_domain,
            from_record=DebtRecord.to_domain,
            samples=SAMPLE_DEBTS,
            seed_samples=seed_samples,
        ),
    )


__all__ = [
    "CURRENT_USER_KEY",
    "GUEST",
    "USERS_KEY",
    "CollectionStore",
    "KeyValueStore",
    "UserStores",
    "new_id",
    "open_stores",
    "storage_key",
]
