"""Low-level helpers for delimited bank exports.

Bank exports disagree on delimiters, quoting and number formats, so these
helpers are forgiving: nothing here raises on bad input. Failures
surface as ``float("nan")`` (amounts) or ``None`` (dates) and the row-level
importer decides what to do with them.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime

DELIMITER_CANDIDATES: tuple[str, ...] = ("\t", ";", ",")
DEFAULT_DELIMITER = ","

# Characters kept by the currency parser before numeric conversion.
_CURRENCY_STRIP_RE = re.compile(r"[^0-9.,()\-]")
# Thousands separator: a comma followed by exactly three digits, then a
# non-digit or the end of the value.
_THOUSANDS_RE = re.compile(r",(?=\d{3}(?:\D|$))")
_PARENTHESIZED_RE = re.compile(r"^\(.*\)$")
_EDGE_QUOTE_RE = re.compile(r'^"|"$')
# Leading decimal number, the way a lenient float parser reads a prefix.
_LEADING_NUMBER_RE = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)")

_DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%m/%d/%y",
    "%Y/%m/%d",
    "%d.%m.%Y",
    "%b %d, %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%d %B %Y",
)


def detect_delimiter(line: str) -> str:
    """Pick the delimiter that splits ``line`` into the most fields.

    Candidates are tried in the order tab, semicolon, comma, starting from a
    comma default; a candidate only wins when it yields strictly more fields
    than the current best, so earlier candidates keep ties.
    """

    best = DEFAULT_DELIMITER
    for candidate in DELIMITER_CANDIDATES:
        if len(line.split(candidate)) > len(line.split(best)):
            best = candidate
    return best


def split_line(line: str, delimiter: str) -> list[str]:
    '''Split one line into trimmed fields, honoring double-quoted sections.

    A quote toggles quoted mode and is not part of the field. Inside quotes a
    doubled quote is a literal ``"`` and the delimiter is ordinary text. Each
    field is then trimmed and loses one leading and one trailing ``"`` when
    present:

    >>> split_line('"Grocery, ""Store""",100', ",")
    ['Grocery, "Store"', '100']
    >>> split_line('12"" TV,1', ",")
    ['12 TV', '1']
    '''

    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    n = len(line)
    while i < n:
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < n and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1
    fields.append("".join(current))
    return [_EDGE_QUOTE_RE.sub("", f.strip()) for f in fields]


def parse_currency(value: str | None) -> float:
    """Parse a bank-export amount such as ``"$1,234.56"`` or ``"(12.00)"``.

    Returns ``float("nan")`` when no number can be read. Parenthesized values
    are negative. Any leading numeric prefix is accepted (``"12.5abc"`` is
    ``12.5``), matching how spreadsheet exports are usually read.
    """

    cleaned = _CURRENCY_STRIP_RE.sub("", value or "")
    cleaned = _THOUSANDS_RE.sub("", cleaned)
    negative = bool(_PARENTHESIZED_RE.match(cleaned))
    numeric = cleaned.replace("(", "").replace(")", "").replace(",", "")
    m = _LEADING_NUMBER_RE.match(numeric)
    if m is None:
        return math.nan
    result = float(m.group(0))
    return -result if negative else result


def parse_date(value: str | None) -> date | None:
    """Return the calendar date in ``value`` or ``None`` when unparseable.

    Accepts ISO dates and datetimes plus the common US/European bank formats
    listed in ``_DATE_FORMATS``. A trailing time part after whitespace is
    ignored for the non-ISO formats.
    """

    if value is None:
        return None
    s = value.strip()
    if not s:
        return None
    try:
        return datetime.fromisoformat(s).date()
    except ValueError:
        pass
    candidates = [s]
    first = s.split()[0]
    if first != s:
        candidates.append(first)
    for text in candidates:
        for fmt in _DATE_FORMATS:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue
    return None


def is_blank(line: str) -> bool:
    return not line.strip()


__all__ = [
    "DEFAULT_DELIMITER",
    "DELIMITER_CANDIDATES",
    "detect_delimiter",
    "is_blank",
    "parse_currency",
    "parse_date",
    "split_line",
]
