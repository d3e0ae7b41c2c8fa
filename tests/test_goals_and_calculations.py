from datetime import date

import pytest

from budgetflow.calculations import (
    category_spending,
    filter_transactions,
    format_currency,
    monthly_spending,
    total_expenses,
    total_income,
)
from budgetflow.goals import contribute, goal_status, progress_percentage
from budgetflow.models import FilterOptions, Goal, Transaction


def _goal(target, current, target_date="2025-06-01"):
    return Goal(
        id="g1",
        title="Emergency Fund",
        description="",
        target_amount=target,
        current_amount=current,
        target_date=target_date,
        category="Emergency Fund",
        created_at="2024-01-01T00:00:00+00:00",
    )


TRANSACTIONS = [
    Transaction("1", "2024-01-15", "Salary", 5000.0, "Salary", "income"),
    Transaction("2", "2024-01-16", "Grocery", 125.5, "Food & Dining", "expense"),
    Transaction("3", "2024-02-01", "Gas", 65.0, "Transportation", "expense"),
    Transaction("4", "2024-02-03", "Dinner", 40.0, "Food & Dining", "expense"),
]


def test_progress_is_capped_and_safe():
    assert progress_percentage(_goal(15000, 8500)) == pytest.approx(56.666, rel=1e-3)
    assert progress_percentage(_goal(100, 250)) == 100
    assert progress_percentage(_goal(0, 10)) == 0


def test_goal_status():
    today = date(2025, 1, 1)

    assert goal_status(_goal(100, 100), today) == "completed"
    assert goal_status(_goal(100, 10, "2024-12-31"), today) == "overdue"
    assert goal_status(_goal(100, 10), today) == "on_track"


def test_contribute_returns_new_goal():
    goal = _goal(5000, 2100)

    assert contribute(goal, 400).current_amount == 2500
    assert goal.current_amount == 2100
    with pytest.raises(ValueError):
        contribute(goal, 0)


def test_totals():
    assert total_income(TRANSACTIONS) == 5000
    assert total_expenses(TRANSACTIONS) == pytest.approx(230.5)
    assert total_income([]) == 0


def test_monthly_and_category_spending():
    assert monthly_spending(TRANSACTIONS) == {"2024-01": 125.5, "2024-02": 105.0}
    assert category_spending(TRANSACTIONS) == {"Food & Dining": 165.5, "Transportation": 65.0}


def test_filter_transactions():
    only_food = filter_transactions(TRANSACTIONS, FilterOptions(category="Food & Dining"))
    assert [t.id for t in only_food] == ["2", "4"]

    feb_expenses = filter_transactions(
        TRANSACTIONS, FilterOptions(type="expense", start_date="2024-02-01", end_date="2024-02-01")
    )
    assert [t.id for t in feb_expenses] == ["3"]

    assert filter_transactions(TRANSACTIONS, FilterOptions()) == TRANSACTIONS


def test_filter_options_reject_unknown_values():
    with pytest.raises(ValueError):
        FilterOptions(category="Gadgets")  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        FilterOptions(type="transfer")  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("amount", "expected"),
    [(1234.56, "$1,234.56"), (-5, "-$5.00"), (0, "$0.00")],
)
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected


def test_transaction_rejects_negative_amount():
    with pytest.raises(ValueError):
        Transaction("x", "2024-01-01", "Bad", -1.0, "Other", "expense")
