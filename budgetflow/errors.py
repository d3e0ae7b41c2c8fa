"""Named failure conditions raised by ``budgetflow``.

Row-level CSV problems are never raised; they are skipped and reported on
:class:`~budgetflow.ingest.csv_import.CsvImport`. The calculator reports an
unreachable payoff as a value, not an exception.
"""

from __future__ import annotations


class BudgetflowError(Exception):
    """Base class for all package errors."""


class ImportFailedError(BudgetflowError):
    """A CSV import could not produce any transactions."""


class NoValidRowsError(ImportFailedError):
    """The CSV text held no header plus data rows, or every row was rejected."""

    def __init__(self, message: str = "No valid transactions found in the CSV file", *, skipped: int = 0):
        super().__init__(message)
        self.skipped = skipped


class UnsupportedFileError(ImportFailedError):
    """The file handed to the importer is not a CSV file."""


class AccountError(BudgetflowError):
    """Base class for sign-up / sign-in failures."""


class AccountExistsError(AccountError):
    def __init__(self, email: str):
        super().__init__("An account with this email already exists")
        self.email = email


class InvalidCredentialsError(AccountError):
    def __init__(self) -> None:
        super().__init__("Invalid email or password")


__all__ = [
    "AccountError",
    "AccountExistsError",
    "BudgetflowError",
    "ImportFailedError",
    "InvalidCredentialsError",
    "NoValidRowsError",
    "UnsupportedFileError",
]
