"""CSV ingestion for ``budgetflow``."""

from .csv_import import (
    CsvImport,
    SkippedRow,
    import_transactions,
    parse_csv,
    read_transactions,
)
from .delimited import detect_delimiter, parse_currency, parse_date, split_line
from .headers import HEADER_RULES, normalize_header
from .utils import load_transactions_from_csv

__all__ = [
    "HEADER_RULES",
    "CsvImport",
    "SkippedRow",
    "detect_delimiter",
    "import_transactions",
    "load_transactions_from_csv",
    "normalize_header",
    "parse_csv",
    "parse_currency",
    "parse_date",
    "read_transactions",
    "split_line",
]
