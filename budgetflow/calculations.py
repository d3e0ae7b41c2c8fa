"""Aggregates over transaction collections.

All functions take any iterable of :class:`~budgetflow.models.Transaction`
and return fresh values; inputs are never modified.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from .models import FilterOptions, Transaction


def total_income(transactions: Iterable[Transaction]) -> float:
    return sum((t.amount for t in transactions if t.type == "income"), 0.0)


def total_expenses(transactions: Iterable[Transaction]) -> float:
    return sum((t.amount for t in transactions if t.type == "expense"), 0.0)


def monthly_spending(transactions: Iterable[Transaction]) -> dict[str, float]:
    """Expense totals keyed by ``YYYY-MM`` in first-seen order."""

    monthly: dict[str, float] = defaultdict(float)
    for t in transactions:
        if t.type == "expense":
            monthly[t.date[:7]] += t.amount
    return dict(monthly)


def category_spending(transactions: Iterable[Transaction]) -> dict[str, float]:
    """Expense totals keyed by category label in first-seen order."""

    categories: dict[str, float] = defaultdict(float)
    for t in transactions:
        if t.type == "expense":
            categories[t.category] += t.amount
    return dict(categories)


def filter_transactions(
    transactions: Iterable[Transaction], options: FilterOptions
) -> list[Transaction]:
    """Apply ``options`` and keep the input order.

    Date bounds compare ISO strings, which order the same as the dates.
    """

    result = list(transactions)
    if options.category is not None:
        result = [t for t in result if t.category == options.category]
    if options.type != "all":
        result = [t for t in result if t.type == options.type]
    if options.start_date:
        result = [t for t in result if t.date >= options.start_date]
    if options.end_date:
        result = [t for t in result if t.date <= options.end_date]
    return result


def format_currency(amount: float) -> str:
    """Format as US dollars with two decimals, e.g. ``$1,234.56`` / ``-$5.00``."""

    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


__all__ = [
    "category_spending",
    "filter_transactions",
    "format_currency",
    "monthly_spending",
    "total_expenses",
    "total_income",
]
