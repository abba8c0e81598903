from __future__ import annotations

import pytest

from exactmoney.domain.money import Money
from exactmoney.parsers.accounting import AccountingParser

parser = AccountingParser()


@pytest.mark.parametrize(
    "text, expected",
    [
        ("(99.00)", "-99"),
        ("($99.00)", "-99"),
        ("(1,234.56)", "-1234.56"),
        ("99.00", "99"),
        ("-100,000.00", "-100000"),
        ("$1,37", "1.37"),
        ("--0.123--", "-0.12"),
        ("1.000", "1"),
    ],
)
def test_parses_accounting_notation(text, expected):
    assert parser.parse(text) == Money(expected)


def test_empty_and_garbage():
    assert parser.parse("") == Money(0)
    assert parser.parse("no money", "USD") == Money(0, "USD")


def test_currency_is_kept():
    result = parser.parse("($12.50)", "CAD")
    assert result == Money("-12.50", "CAD")
    assert result.currency.iso_code == "CAD"


@pytest.mark.parametrize("text", ["(.)", "($,)", "(-.)", "-."])
def test_marks_without_digits(text):
    assert parser.parse(text) == Money(0)
