"""Public interface for the ``budgetflow`` package.

This module exposes the package's core functions and public models as the
stable import surface. There is no runtime logic here, only re-exports.
"""

from .calculations import (
    category_spending,
    filter_transactions,
    format_currency,
    monthly_spending,
    total_expenses,
    total_income,
)
from .debts import (
    apply_payment,
    calculate_payoff,
    debt_payoff,
    payoff_order,
    summarize_debts,
)
from .errors import (
    AccountExistsError,
    BudgetflowError,
    ImportFailedError,
    InvalidCredentialsError,
    NoValidRowsError,
    UnsupportedFileError,
)
from .goals import contribute, goal_status, progress_percentage
from .ingest import (
    CsvImport,
    SkippedRow,
    import_transactions,
    load_transactions_from_csv,
    parse_csv,
    parse_currency,
    read_transactions,
)
from .models import (
    CATEGORIES,
    Debt,
    FilterOptions,
    Finite,
    Goal,
    PayoffResult,
    Transaction,
    TransactionCategory,
    Unreachable,
)
from .reports import Report, build_report, to_json

__all__ = [
    # Ingestion
    "parse_csv",
    "read_transactions",
    "import_transactions",
    "load_transactions_from_csv",
    "parse_currency",
    "CsvImport",
    "SkippedRow",
    # Debts
    "calculate_payoff",
    "debt_payoff",
    "payoff_order",
    "summarize_debts",
    "apply_payment",
    # Goals
    "progress_percentage",
    "goal_status",
    "contribute",
    # Aggregates / reports
    "total_income",
    "total_expenses",
    "monthly_spending",
    "category_spending",
    "filter_transactions",
    "format_currency",
    "build_report",
    "to_json",
    "Report",
    # Models / types
    "CATEGORIES",
    "Transaction",
    "TransactionCategory",
    "Goal",
    "Debt",
    "FilterOptions",
    "Finite",
    "Unreachable",
    "PayoffResult",
    # Errors
    "BudgetflowError",
    "ImportFailedError",
    "NoValidRowsError",
    "UnsupportedFileError",
    "AccountExistsError",
    "InvalidCredentialsError",
]
