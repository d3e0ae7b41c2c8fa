"""Debt payoff math and planning helpers.

:func:`calculate_payoff` solves the fixed-payment amortization recurrence

    balance[n + 1] = balance[n] * (1 + r) - payment

for the smallest ``n`` with ``balance[n] <= 0`` using the closed-form annuity
formula. Impossible payoffs come back as :class:`~budgetflow.models.Unreachable`
rather than as an infinite float.

Everything here is pure: functions that "change" a debt return a new one.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import date
from typing import Literal

from .models import Debt, Finite, PayoffResult, Unreachable

PayoffStrategy = Literal["snowball", "avalanche"]
DueStatus = Literal["overdue", "due_soon", "ok"]

DUE_SOON_DAYS = 7


def calculate_payoff(balance: float, annual_rate_percent: float, monthly_payment: float) -> PayoffResult:
    """Return how long a fixed monthly payment takes to clear ``balance``.

    Parameters
    ----------
    balance:
        Outstanding principal (positive).
    annual_rate_percent:
        Annual interest rate in percent (``18`` means 18% APR), compounded
        monthly at ``rate / 100 / 12``.
    monthly_payment:
        Fixed payment made every month.

    Returns
    -------
    PayoffResult
        :class:`Finite` with ``months``, ``total_interest`` and
        ``total_payment``; or :class:`Unreachable` when the payment is not
        positive or does not exceed the monthly interest accrual.
    """

    monthly_rate = annual_rate_percent / 100 / 12
    if monthly_payment <= 0:
        return Unreachable(reason="no_payment")

    if monthly_rate == 0:
        months = math.ceil(balance / monthly_payment)
    elif monthly_payment <= balance * monthly_rate:
        return Unreachable(reason="interest_exceeds_payment")
    else:
        months_exact = -math.log(1 - monthly_rate * balance / monthly_payment) / math.log(1 + monthly_rate)
        months = math.ceil(months_exact)

    total_payment = months * monthly_payment
    # ceil() can leave months * payment a hair under the balance in floats.
    total_interest = max(0.0, total_payment - balance)
    return Finite(months=months, total_interest=total_interest, total_payment=total_payment)


def debt_payoff(debt: Debt) -> PayoffResult:
    """Payoff at the debt's own minimum payment; recomputed on every call."""

    return calculate_payoff(debt.balance, debt.interest_rate, debt.minimum_payment)


def payoff_order(debts: Iterable[Debt], strategy: PayoffStrategy = "avalanche") -> list[Debt]:
    """Order debts for extra payments.

    ``snowball`` puts the smallest balance first; ``avalanche`` the highest
    interest rate first. The sort is stable, so equal keys keep input order.
    """

    if strategy == "snowball":
        return sorted(debts, key=lambda d: d.balance)
    if strategy == "avalanche":
        return sorted(debts, key=lambda d: -d.interest_rate)
    raise ValueError(f"unknown payoff strategy: {strategy!r}")


@dataclass(frozen=True, slots=True)
class DebtSummary:
    total_balance: float
    total_minimum_payments: float
    average_interest_rate: float


def summarize_debts(debts: Sequence[Debt]) -> DebtSummary:
    if not debts:
        return DebtSummary(0.0, 0.0, 0.0)
    return DebtSummary(
        total_balance=sum(d.balance for d in debts),
        total_minimum_payments=sum(d.minimum_payment for d in debts),
        average_interest_rate=sum(d.interest_rate for d in debts) / len(debts),
    )


def days_until(due_date: str, today: date | None = None) -> int:
    """Whole days from ``today`` to the ISO ``due_date`` (negative when past)."""

    today = today or date.today()
    return (date.fromisoformat(due_date) - today).days


def due_status(debt: Debt, today: date | None = None) -> DueStatus:
    days = days_until(debt.due_date, today)
    if days < 0:
        return "overdue"
    if days <= DUE_SOON_DAYS:
        return "due_soon"
    return "ok"


def apply_payment(debt: Debt, amount: float) -> Debt:
    """Return a copy of ``debt`` with ``amount`` paid off (never below zero)."""

    if math.isnan(amount) or amount < 0:
        raise ValueError("payment amount must be a non-negative number")
    return replace(debt, balance=max(0.0, debt.balance - amount))


__all__ = [
    "DUE_SOON_DAYS",
    "DebtSummary",
    "DueStatus",
    "PayoffStrategy",
    "apply_payment",
    "calculate_payoff",
    "days_until",
    "debt_payoff",
    "due_status",
    "payoff_order",
    "summarize_debts",
]
