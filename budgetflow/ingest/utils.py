"""Ingest utilities shared by CLI commands and library callers.

Exposes a single helper that reads a bank CSV export from disk and runs it
through the batch importer.
"""

from __future__ import annotations

from os import PathLike
from pathlib import Path

from ..errors import UnsupportedFileError
from .csv_import import CsvImport, import_transactions


def load_transactions_from_csv(csv_path: str | PathLike[str]) -> CsvImport:
    """Read a CSV export and return the imported batch.

    The file is decoded as UTF-8; a leading byte-order mark (common in
    spreadsheet exports) is dropped.

    Raises
    ------
    UnsupportedFileError
        When ``csv_path`` does not carry a ``.csv`` suffix.
    NoValidRowsError
        When no transaction could be read from the file.
    FileNotFoundError, PermissionError
        Propagated from opening the file.
    """

    p = Path(csv_path)
    if p.suffix.lower() != ".csv":
        raise UnsupportedFileError(f"Please upload a CSV file: {p.name}")
    text = p.read_text(encoding="utf-8-sig")
    return import_transactions(text)


__all__ = ["load_transactions_from_csv"]
