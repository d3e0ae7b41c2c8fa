"""Financial reports: a pure projection over transactions, goals and debts.

:func:`build_report` computes every figure once; :func:`to_json` and
:func:`report_filename` only format what was computed. ``today`` is injectable
so report periods are reproducible in tests.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Literal

from .calculations import category_spending, total_expenses, total_income
from .debts import summarize_debts
from .ingest.delimited import parse_date
from .models import Debt, Goal, Transaction

ReportPeriod = Literal["all", "ytd", "last12", "last30"]

REPORT_PERIODS: dict[ReportPeriod, str] = {
    "all": "All Time",
    "ytd": "Year to Date",
    "last12": "Last 12 Months",
    "last30": "Last 30 Days",
}


@dataclass(frozen=True, slots=True)
class ReportSummary:
    total_income: float
    total_expenses: float
    net_income: float
    savings_rate: float
    total_transactions: int


@dataclass(frozen=True, slots=True)
class GoalsOverview:
    total_goals: int
    total_target: float
    total_progress: float
    progress_percentage: float


@dataclass(frozen=True, slots=True)
class DebtsOverview:
    total_debts: int
    total_balance: float
    total_minimum_payments: float


@dataclass(frozen=True, slots=True)
class Report:
    period: ReportPeriod
    generated_at: datetime
    summary: ReportSummary
    goals: GoalsOverview
    debts: DebtsOverview
    category_breakdown: dict[str, float]


def period_start(period: ReportPeriod, today: date) -> date:
    """First date (inclusive) covered by ``period``."""

    if period == "all":
        return date.min
    if period == "ytd":
        return date(today.year, 1, 1)
    if period == "last12":
        try:
            return today.replace(year=today.year - 1)
        except ValueError:
            # Feb 29 -> Feb 28 of the previous year
            return today.replace(year=today.year - 1, day=28)
    if period == "last30":
        return today - timedelta(days=30)
    raise ValueError(f"unknown report period: {period!r}")


def transactions_in_period(
    transactions: Sequence[Transaction], period: ReportPeriod, today: date
) -> list[Transaction]:
    start = period_start(period, today)
    selected: list[Transaction] = []
    for t in transactions:
        d = parse_date(t.date)
        if d is not None and d >= start:
            selected.append(t)
    return selected


def build_report(
    transactions: Sequence[Transaction],
    goals: Sequence[Goal],
    debts: Sequence[Debt],
    *,
    period: ReportPeriod = "ytd",
    today: date | None = None,
    now: datetime | None = None,
) -> Report:
    """Aggregate everything a report shows for ``period``.

    Goals and debts are reported in full; only transactions are restricted to
    the period.
    """

    now = now or datetime.now().astimezone()
    today = today or now.date()

    selected = transactions_in_period(transactions, period, today)
    income = total_income(selected)
    expenses = total_expenses(selected)
    net = income - expenses

    total_target = sum(g.target_amount for g in goals)
    total_progress = sum(g.current_amount for g in goals)
    debt_summary = summarize_debts(debts)

    return Report(
        period=period,
        generated_at=now,
        summary=ReportSummary(
            total_income=income,
            total_expenses=expenses,
            net_income=net,
            savings_rate=(net / income * 100) if income > 0 else 0.0,
            total_transactions=len(selected),
        ),
        goals=GoalsOverview(
            total_goals=len(goals),
            total_target=total_target,
            total_progress=total_progress,
            progress_percentage=(total_progress / total_target * 100) if total_target > 0 else 0.0,
        ),
        debts=DebtsOverview(
            total_debts=len(debts),
            total_balance=debt_summary.total_balance,
            total_minimum_payments=debt_summary.total_minimum_payments,
        ),
        category_breakdown=category_spending(selected),
    )


def report_to_dict(report: Report) -> dict[str, Any]:
    """Export shape with camelCase keys, as written by :func:`to_json`."""

    return {
        "period": report.period,
        "dateGenerated": report.generated_at.isoformat(),
        "summary": {
            "totalIncome": report.summary.total_income,
            "totalExpenses": report.summary.total_expenses,
            "netIncome": report.summary.net_income,
            "savingsRate": report.summary.savings_rate,
            "totalTransactions": report.summary.total_transactions,
        },
        "goals": {
            "totalGoals": report.goals.total_goals,
            "totalTarget": report.goals.total_target,
            "totalProgress": report.goals.total_progress,
            "progressPercentage": report.goals.progress_percentage,
        },
        "debts": {
            "totalDebts": report.debts.total_debts,
            "totalBalance": report.debts.total_balance,
            "totalMinimumPayments": report.debts.total_minimum_payments,
        },
        "categoryBreakdown": dict(report.category_breakdown),
    }


def to_json(report: Report) -> str:
    return json.dumps(report_to_dict(report), indent=2)


def report_filename(period: ReportPeriod, today: date) -> str:
    return f"budget-report-{period}-{today.isoformat()}.json"


__all__ = [
    "REPORT_PERIODS",
    "DebtsOverview",
    "GoalsOverview",
    "Report",
    "ReportPeriod",
    "ReportSummary",
    "build_report",
    "period_start",
    "report_filename",
    "report_to_dict",
    "to_json",
    "transactions_in_period",
]
