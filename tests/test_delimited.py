import doctest
import math
from datetime import date

import pytest

from budgetflow.ingest import delimited, headers
from budgetflow.ingest.delimited import detect_delimiter, parse_currency, parse_date, split_line


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("a;b;c", ";"),
        ("a,b,c", ","),
        ("a\tb\tc", "\t"),
        ("abc", ","),
        # ties keep the earlier candidate
        ("a\tb;c", "\t"),
        ("a;b,c", ","),
    ],
)
def test_detect_delimiter(line, expected):
    assert detect_delimiter(line) == expected


@pytest.mark.parametrize(
    ("line", "delimiter", "expected"),
    [
        ('"Grocery, ""Store""",100', ",", ['Grocery, "Store"', "100"]),
        (' a ; "b;c" ;', ";", ["a", "b;c", ""]),
        # escaped quotes at the edges lose one quote each after unescaping
        ('"""x""",1', ",", ["x", "1"]),
        # quotes only toggle quoted mode and never reach the field
        ('"a"b,1', ",", ["ab", "1"]),
        ('12"" TV,1', ",", ["12 TV", "1"]),
        ('say ""hi"",2', ",", ["say hi", "2"]),
        ('"",3', ",", ["", "3"]),
    ],
)
def test_split_line_honors_quotes(line, delimiter, expected):
    assert split_line(line, delimiter) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("$1,234.56", 1234.56),
        ("(1,234.56)", -1234.56),
        ("-42", -42.0),
        ("USD 12.50", 12.5),
        ("1,000,000", 1_000_000.0),
        (".75", 0.75),
    ],
)
def test_parse_currency(raw, expected):
    assert parse_currency(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", ["", "abc", None, "()"])
def test_parse_currency_unreadable_is_nan(raw):
    assert math.isnan(parse_currency(raw))


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2024-01-15", date(2024, 1, 15)),
        ("2024-01-15T10:30:00", date(2024, 1, 15)),
        ("01/15/2024", date(2024, 1, 15)),
        ("15.01.2024", date(2024, 1, 15)),
        ("Jan 15, 2024", date(2024, 1, 15)),
        ("01/15/2024 09:00", date(2024, 1, 15)),
    ],
)
def test_parse_date(raw, expected):
    assert parse_date(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "yesterday", "2024-13-45", None])
def test_parse_date_rejects_garbage(raw):
    assert parse_date(raw) is None


@pytest.mark.parametrize("module", [delimited, headers])
def test_docstring_examples(module):
    result = doctest.testmod(module)

    assert result.attempted > 0
    assert result.failed == 0
