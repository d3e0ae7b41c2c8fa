"""CSV ingestion: raw delimited text -> normalized :class:`Transaction` records.

The importer accepts exports from arbitrary banks. It sniffs the delimiter,
maps the header row onto the canonical vocabulary in
:mod:`budgetflow.ingest.headers`, then converts every data line independently.

Contract
--------
- :func:`parse_csv` never raises for bad rows. A row with an unusable amount
  (missing, non-numeric or exactly zero) or an unparseable date is skipped
  and logged at WARNING; the batch continues.
- Fewer than two non-blank lines (header plus one data row) yield an empty
  result.
- :func:`import_transactions` is the batch-level entry point: it raises
  :class:`~budgetflow.errors.NoValidRowsError` when nothing could be imported,
  so callers can tell a failed import from a successful one.
- Output amounts are absolute values; the sign becomes ``type``.

Lines are split on ``\\r?\\n`` before quote handling, so quoted fields cannot
span lines.
"""

from __future__ import annotations

import math
import re
import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import NamedTuple

from ..errors import NoValidRowsError
from ..logging_setup import get_logger
from ..models import Transaction, TransactionType, validate_category
from .delimited import (
    DEFAULT_DELIMITER,
    detect_delimiter,
    parse_currency,
    parse_date,
    split_line,
)
from .headers import normalize_headers

logger = get_logger("budgetflow.ingest.csv_import")

DEFAULT_DESCRIPTION = "Imported Transaction"

_LINE_BREAK_RE = re.compile(r"\r?\n")
_EXPENSE_TYPE_MARKERS: tuple[str, ...] = ("debit", "expense", "outflow")


@dataclass(frozen=True, slots=True)
class SkippedRow:
    """A data line that was dropped. ``line`` is 1-based including the header."""

    line: int
    reason: str


class CsvImport(NamedTuple):
    """Result of reading one CSV batch."""

    transactions: tuple[Transaction, ...]
    skipped: tuple[SkippedRow, ...]
    delimiter: str


class _RowRejected(ValueError):
    pass


def _split_lines(text: str) -> list[str]:
    return [line for line in _LINE_BREAK_RE.split(text.strip()) if line.strip()]


def _resolve_amount(row: Mapping[str, str]) -> float:
    amount_raw = row.get("amount")
    amount = parse_currency(amount_raw) if amount_raw else math.nan
    if not math.isnan(amount):
        return amount

    debit = parse_currency(row.get("debit"))
    credit = parse_currency(row.get("credit"))
    if not math.isnan(debit) or not math.isnan(credit):
        return _or_zero(credit) - _or_zero(debit)

    outflow = parse_currency(row.get("outflow"))
    inflow = parse_currency(row.get("inflow"))
    if not math.isnan(outflow) or not math.isnan(inflow):
        return _or_zero(inflow) - _or_zero(outflow)
    return math.nan


def _or_zero(value: float) -> float:
    return 0.0 if math.isnan(value) else value


def _resolve_type(row: Mapping[str, str], amount: float) -> TransactionType:
    raw_type = (row.get("type") or "").lower()
    if raw_type:
        if any(marker in raw_type for marker in _EXPENSE_TYPE_MARKERS):
            return "expense"
        return "income"
    return "expense" if amount < 0 else "income"


def _row_to_transaction(row: Mapping[str, str], index: int, batch_stamp: int) -> Transaction:
    # The raw-key fallbacks only hit when a header survived normalization
    # verbatim; the "date" rule normally claims them first.
    date_raw = row.get("date") or row.get("transaction date") or row.get("posted date")
    description = row.get("description") or DEFAULT_DESCRIPTION

    amount = _resolve_amount(row)
    if math.isnan(amount) or amount == 0:
        raise _RowRejected("invalid or zero amount")

    tx_type = _resolve_type(row, amount)
    category = validate_category(row.get("category") or "Other")

    parsed_date = parse_date(date_raw)
    if parsed_date is None:
        raise _RowRejected(f"invalid date: {date_raw!r}")

    return Transaction(
        id=f"csv-{batch_stamp}-{index}",
        date=parsed_date.isoformat(),
        description=description,
        amount=abs(amount),
        category=category,
        type=tx_type,
    )


def read_transactions(text: str) -> CsvImport:
    """Parse ``text`` and report both the accepted and the skipped rows."""

    lines = _split_lines(text)
    delimiter = detect_delimiter(lines[0]) if lines else DEFAULT_DELIMITER
    if len(lines) < 2:
        return CsvImport(transactions=(), skipped=(), delimiter=delimiter)

    headers = normalize_headers(split_line(lines[0], delimiter))
    batch_stamp = int(time.time() * 1000)

    transactions: list[Transaction] = []
    skipped: list[SkippedRow] = []
    for i, line in enumerate(lines[1:], start=1):
        values = split_line(line, delimiter)
        row: dict[str, str] = {}
        for col, header in enumerate(headers):
            row[header] = (values[col] if col < len(values) else "").strip()
        try:
            transactions.append(_row_to_transaction(row, i, batch_stamp))
        except _RowRejected as exc:
            logger.warning("Skipping row %d: %s", i + 1, exc)
            skipped.append(SkippedRow(line=i + 1, reason=str(exc)))

    logger.debug(
        "CSV parsed: delimiter=%r rows=%d accepted=%d skipped=%d",
        delimiter,
        len(lines) - 1,
        len(transactions),
        len(skipped),
    )
    return CsvImport(transactions=tuple(transactions), skipped=tuple(skipped), delimiter=delimiter)


def parse_csv(text: str) -> tuple[Transaction, ...]:
    """Return the transactions found in ``text``; rows that cannot be imported are skipped."""

    return read_transactions(text).transactions


def import_transactions(text: str) -> CsvImport:
    """Parse ``text`` and fail loudly when the batch yields nothing.

    Raises
    ------
    NoValidRowsError
        When the text has no data rows or every data row was rejected.
    """

    result = read_transactions(text)
    if not result.transactions:
        raise NoValidRowsError(skipped=len(result.skipped))
    if result.skipped:
        logger.info(
            "Imported %d transaction(s); skipped %d row(s)",
            len(result.transactions),
            len(result.skipped),
        )
    return result


__all__ = [
    "DEFAULT_DESCRIPTION",
    "CsvImport",
    "SkippedRow",
    "import_transactions",
    "parse_csv",
    "read_transactions",
]
