from __future__ import annotations

import pytest

from exactmoney.domain.currency import NULL_CURRENCY
from exactmoney.domain.money import Money
from exactmoney.errors import ParseFailure, UnknownCurrency
from exactmoney.parsers.fuzzy import FuzzyParser
from exactmoney.settings import with_currency, with_settings

parser = FuzzyParser()


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1", "1"),
        ("10", "10"),
        ("$1", "1"),
        ("1.37", "1.37"),
        ("$1.37", "1.37"),
        ("10.0", "10"),
        ("Rubbish $1.00 Rubbish", "1"),
        ("Rubbish$1.00Rubbish", "1"),
        ("-100", "-100"),
        ("1.", "1"),
        ("100,000.", "100000"),
        (".12", "0.12"),
        ("100,000.00", "100000"),
        ("-100,000.00", "-100000"),
        ("1,000", "1000"),
        ("-0.90", "-0.90"),
        ("0.123", "0.12"),
        ("-0.123", "-0.12"),
        ("--0.123", "-0.12"),
        ("--0.123--", "-0.12"),
        ("1.11111111", "1.11"),
        ("1.111.111", "1111111"),
        ("50.1", "50.10"),
    ],
)
def test_dot_decimal_amounts(text, expected):
    assert parser.parse(text) == Money(expected)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("$1,00", "1"),
        ("$1,37", "1.37"),
        ("Rubbish $1,00 Rubbish", "1"),
        ("-100,00", "-100"),
        ("100.000,00", "100000"),
        ("-100.000,00", "-100000"),
        ("1,", "1"),
        ("100.000,", "100000"),
        ("0,123", "0.12"),
        ("-0,123", "-0.12"),
        ("1,11", "1.11"),
        ("1,11111111", "111111111"),
        ("1,111,111", "1111111"),
    ],
)
def test_comma_decimal_amounts(text, expected):
    assert parser.parse(text) == Money(expected)


@pytest.mark.parametrize(
    "text",
    [
        "1,234,567.89",
        "1 234 567.89",
        "1 234 567,89",
        "1.234.567,89",
        "1˙234˙567,89",
        "12,34,567.89",
        "1'234'567.89",
        "1'234'567,89",
        "123,4567.89",
    ],
)
def test_thousands_separators(text):
    assert parser.parse(text) == Money("1234567.89")


@pytest.mark.parametrize(
    "text, code, expected",
    [
        ("1,111", "JOD", "1111"),
        ("1.111.111", "JOD", "1111111"),
        ("1 111", "JOD", "1111"),
        ("1111,111", "JOD", "1111111"),
        ("1.111", "JOD", "1.111"),
        ("1,11", "JOD", "1.110"),
        ("1111.111", "JOD", "1111.111"),
        ("1.000", "JOD", "1"),
        ("1,000", "JOD", "1000"),
        ("1,111", "JPY", "1111"),
        ("1.111", "JPY", "1"),
        ("1 111", "JPY", "1111"),
        ("1,11", "JPY", "1"),
        ("1.11", "JPY", "1"),
        ("1111.111", "JPY", "1111"),
        ("1,111", "USD", "1111"),
        ("1.111", "USD", "1.11"),
        ("1,11", "USD", "1.11"),
        ("1111.111", "USD", "1111.11"),
        ("1.000", "EUR", "1000"),
        ("1,11111111", "CAD", "111111111"),
        ("12,34,567.89", "INR", "1234567.89"),
    ],
)
def test_currency_context(text, code, expected):
    assert parser.parse(text, code) == Money(expected, code)


def test_badly_formatted_input_gets_closest_amount():
    assert parser.parse("1..", "USD") == Money(1, "USD")
    assert parser.parse("1.000", "USD") == Money(1, "USD")
    assert parser.parse("1.1.1", "USD") == Money(111, "USD")
    assert parser.parse("1,1.11", "USD") == Money("11.11", "USD")
    assert parser.parse("1.1.11.111", "USD") == Money(1111111, "USD")
    assert parser.parse("1,1,11,111", "USD") == Money(1111111, "USD")


def test_empty_and_unparseable_input_is_zero():
    assert parser.parse("") == Money(0, NULL_CURRENCY)
    assert parser.parse("   ") == Money(0)
    assert parser.parse("no money", "USD") == Money(0, "USD")


@pytest.mark.parametrize("text", ["no money", "1..1", "1.1.11.111", "1,1,11,111"])
def test_strict_mode_raises(text):
    with pytest.raises(ParseFailure):
        parser.parse(text, strict=True)


def test_strict_mode_accepts_well_formed_input():
    assert parser.parse("1,234.56", "USD", strict=True) == Money("1234.56", "USD")


def test_numbers_pass_through():
    assert parser.parse(1) == Money(1)
    assert parser.parse(50) == Money(50)
    assert parser.parse(1.32) == Money("1.32")
    assert parser.parse(1.234) == Money("1.23")


def test_uses_scoped_currency():
    with with_currency("JOD"):
        result = parser.parse("1.000")
    assert result == Money(1, "JOD")
    assert result.currency.iso_code == "JOD"


def test_missing_currency():
    with with_settings(default_currency=None):
        with pytest.raises(UnknownCurrency):
            parser.parse("1")


def test_parser_uses_given_registry(registry):
    result = FuzzyParser(registry=registry).parse("1.000", "JOD")
    assert result.currency is registry.find_strict("JOD")


@pytest.mark.parametrize("text", ["-.", "+.", "$-,", "total: -'", "-..", "+,"])
def test_sign_and_marks_without_digits(text):
    assert parser.parse(text) == Money(0)
    with pytest.raises(ParseFailure):
        parser.parse(text, strict=True)
