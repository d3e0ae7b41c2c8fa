from __future__ import annotations

# Sample records written into a user partition that has never been saved.
#
# Usage (example):
#   python -m budgetflow.ingest.seed_samples --user-id 3f1c... \
#     --database-url sqlite+pysqlite:///budgetflow.db
#
# The CLI only needs SAMPLE_TRANSACTIONS / SAMPLE_GOALS / SAMPLE_DEBTS through
# ``budgetflow.storage``; ``main`` force-writes them for demos.
import argparse

from ..models import Debt, Goal, Transaction

SAMPLE_TRANSACTIONS: tuple[Transaction, ...] = (
    Transaction(
        id="1",
        date="2024-01-15",
        description="Salary Payment",
        amount=5000.0,
        category="Salary",
        type="income",
    ),
    Transaction(
        id="2",
        date="2024-01-16",
        description="Grocery Shopping",
        amount=125.50,
        category="Food & Dining",
        type="expense",
    ),
    Transaction(
        id="3",
        date="2024-01-17",
        description="Gas Station",
        amount=65.00,
        category="Transportation",
        type="expense",
    ),
    Transaction(
        id="4",
        date="2024-01-18",
        description="Netflix Subscription",
        amount=15.99,
        category="Entertainment",
        type="expense",
    ),
)

SAMPLE_GOALS: tuple[Goal, ...] = (
    Goal(
        id="1",
        title="Emergency Fund",
        description="6 months of expenses for financial security",
        target_amount=15000.0,
        current_amount=8500.0,
        target_date="2024-12-31",
        category="Emergency Fund",
        created_at="2024-01-01",
    ),
    Goal(
        id="2",
        title="Summer Vacation",
        description="Trip to Europe with family",
        target_amount=5000.0,
        current_amount=2100.0,
        target_date="2024-06-01",
        category="Vacation",
        created_at="2024-01-01",
    ),
)

SAMPLE_DEBTS: tuple[Debt, ...] = (
    Debt(
        id="1",
        creditor="Chase Credit Card",
        balance=3200.0,
        interest_rate=18.99,
        minimum_payment=95.0,
        due_date="2024-02-15",
        type="Credit Card",
        created_at="2024-01-01",
    ),
    Debt(
        id="2",
        creditor="Student Loan",
        balance=12500.0,
        interest_rate=4.5,
        minimum_payment=150.0,
        due_date="2024-02-01",
        type="Student Loan",
        created_at="2024-01-01",
    ),
)


def reseed_samples(*, database_url: str | None, user_id: str | None) -> None:
    from ..storage import open_stores

    stores = open_stores(user_id=user_id, database_url=database_url, seed_samples=False)
    stores.transactions.save(SAMPLE_TRANSACTIONS)
    stores.goals.save(SAMPLE_GOALS)
    stores.debts.save(SAMPLE_DEBTS)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Overwrite a user partition with sample data")
    ap.add_argument(
        "--database-url",
        required=False,
        default=None,
        help="SQLAlchemy database URL; falls back to $BUDGETFLOW_DATABASE_URL when not set",
    )
    ap.add_argument(
        "--user-id",
        required=False,
        default=None,
        help="Target user id; the guest partition when omitted",
    )
    args = ap.parse_args(argv)
    reseed_samples(database_url=args.database_url or None, user_id=args.user_id or None)
    return 0


if __name__ == "__main__":  # pragma: no cover - manual utility
    raise SystemExit(main())
