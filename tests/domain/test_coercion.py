from __future__ import annotations

from decimal import Decimal
from fractions import Fraction

import pytest

from exactmoney.domain.coercion import value_to_currency, value_to_decimal
from exactmoney.domain.currency import NULL_CURRENCY
from exactmoney.domain.money import Money
from exactmoney.errors import InvalidAmount, UnknownCurrency
from exactmoney.settings import with_settings


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, Decimal(0)),
        ("", Decimal(0)),
        (3, Decimal(3)),
        (Decimal("1.25"), Decimal("1.25")),
        (" 1.5 ", Decimal("1.5")),
        (0.1, Decimal("0.1")),
        (1.1 + 2.2, Decimal("3.3")),
        (Fraction(1, 4), Decimal("0.25")),
        (Money("2.50", "USD"), Decimal("2.50")),
    ],
)
def test_value_to_decimal(value, expected):
    assert value_to_decimal(value) == expected


def test_negative_zero_becomes_zero():
    result = value_to_decimal(Decimal("-0"))
    assert result == 0
    assert not result.is_signed()


@pytest.mark.parametrize("value", [True, "1 000", "abc", float("nan"), [1]])
def test_value_to_decimal_rejects(value):
    with pytest.raises(InvalidAmount):
        value_to_decimal(value)


def test_value_to_currency_by_code(registry):
    assert value_to_currency("usd", registry=registry).iso_code == "USD"
    assert value_to_currency("XXX", registry=registry) is NULL_CURRENCY
    assert value_to_currency("xxx", registry=registry) is NULL_CURRENCY


def test_value_to_currency_passes_currency_objects_through(registry):
    eur = registry.find_strict("EUR")
    assert value_to_currency(eur) is eur
    assert value_to_currency(NULL_CURRENCY) is NULL_CURRENCY


def test_value_to_currency_uses_default():
    assert value_to_currency(None) is NULL_CURRENCY
    with with_settings(default_currency="CAD"):
        assert value_to_currency("").iso_code == "CAD"


def test_value_to_currency_without_default():
    with with_settings(default_currency=None):
        with pytest.raises(UnknownCurrency, match="missing currency"):
            value_to_currency(None)


def test_value_to_currency_rejects_other_types():
    with pytest.raises(UnknownCurrency):
        value_to_currency(840)
