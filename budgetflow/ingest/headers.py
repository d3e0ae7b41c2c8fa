"""Header normalization for heterogeneous bank CSV exports.

Source headers ("Posted Date", "Memo", "Withdrawal", ...) collapse onto a
small canonical vocabulary. Matching is by substring containment, evaluated
against an ordered rule list; the first matching rule wins, so a header that
triggers several rules resolves to the earliest one. ``category`` and
``type`` are the only exact-match rules.

The ``outflow`` rule maps to ``debit`` and sits after the ``credit`` rule.
As a consequence no normalized header ever becomes ``outflow`` or
``inflow`` ("inflow" is caught by the ``credit`` rule), which leaves the
outflow/inflow amount fallback in the row importer unreachable for parsed
files. Keep the order as is; product has not confirmed which behavior is
intended.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

CanonicalHeader = Literal[
    "date",
    "description",
    "amount",
    "debit",
    "credit",
    "outflow",
    "inflow",
    "category",
    "type",
]


@dataclass(frozen=True, slots=True)
class HeaderRule:
    """Map a header onto ``target`` when it contains any of ``needles``.

    With ``exact=True`` the header must equal one of ``needles`` instead.
    """

    target: CanonicalHeader
    needles: tuple[str, ...]
    exact: bool = False

    def matches(self, header: str) -> bool:
        if self.exact:
            return header in self.needles
        return any(n in header for n in self.needles)


HEADER_RULES: tuple[HeaderRule, ...] = (
    HeaderRule("date", ("date",)),
    HeaderRule("description", ("descr", "details", "memo", "payee")),
    HeaderRule("amount", ("amount",)),
    HeaderRule("debit", ("debit", "withdraw")),
    HeaderRule("credit", ("credit", "deposit", "inflow")),
    HeaderRule("debit", ("outflow",)),
    HeaderRule("category", ("category",), exact=True),
    HeaderRule("type", ("type",), exact=True),
)

_WS_RE = re.compile(r"\s+")


def normalize_header(raw: str, rules: Sequence[HeaderRule] = HEADER_RULES) -> str:
    """Return the canonical name for ``raw``, or the cleaned header itself.

    Cleaning lower-cases, trims, and collapses internal whitespace runs to a
    single space before the rules are applied.

    >>> normalize_header("Posted  Date")
    'date'
    >>> normalize_header("Withdrawal Amount")
    'amount'
    >>> normalize_header("Balance")
    'balance'
    """

    header = _WS_RE.sub(" ", raw.strip().lower())
    for rule in rules:
        if rule.matches(header):
            return rule.target
    return header


def normalize_headers(raw_headers: Sequence[str]) -> list[str]:
    return [normalize_header(h) for h in raw_headers]


__all__ = [
    "HEADER_RULES",
    "CanonicalHeader",
    "HeaderRule",
    "normalize_header",
    "normalize_headers",
]
