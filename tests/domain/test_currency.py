from __future__ import annotations

import pytest

from exactmoney.domain.currency import NULL_CURRENCY, Currency, NullCurrency


def _currency(**overrides) -> Currency:
    fields = dict(
        iso_code="abc",
        iso_numeric="001",
        name="Test Dollar",
        symbol="T$",
        disambiguate_symbol=None,
        subunit_symbol=None,
        subunit_to_unit=1000,
        smallest_denomination=1,
        decimal_mark=".",
    )
    fields.update(overrides)
    return Currency(**fields)


def test_currency_normalizes_code_and_derives_minor_units():
    c = _currency()
    assert c.iso_code == "ABC"
    assert c.code == "ABC"
    assert c.minor_units == 3
    assert c.disambiguate_symbol == "T$"


def test_minor_units_by_subunit_to_unit():
    assert _currency(subunit_to_unit=1).minor_units == 0
    assert _currency(subunit_to_unit=100).minor_units == 2
    assert _currency(subunit_to_unit=1_000_000).minor_units == 6


@pytest.mark.parametrize("subunit_to_unit", [0, -1])
def test_subunit_to_unit_must_be_positive(subunit_to_unit):
    with pytest.raises(ValueError):
        _currency(subunit_to_unit=subunit_to_unit)


def test_iso_code_is_required():
    with pytest.raises(ValueError):
        _currency(iso_code="  ")


def test_equality_is_by_code():
    assert _currency() == _currency(name="Other name")
    assert _currency() != _currency(iso_code="ABD")
    assert hash(_currency()) == hash(_currency(name="Other name"))


def test_str_and_repr():
    assert str(_currency()) == "ABC"
    assert repr(_currency()) == "<Currency ABC>"


def test_compatible():
    abc = _currency()
    assert abc.compatible(_currency())
    assert abc.compatible(NULL_CURRENCY)
    assert not abc.compatible(_currency(iso_code="XYZ"))


def test_null_currency_metadata():
    assert NULL_CURRENCY.iso_code == "XXX"
    assert NULL_CURRENCY.iso_numeric == "999"
    assert NULL_CURRENCY.name == "No Currency"
    assert NULL_CURRENCY.symbol == "$"
    assert NULL_CURRENCY.subunit_to_unit == 100
    assert NULL_CURRENCY.minor_units == 2
    assert NULL_CURRENCY.decimal_mark == "."
    assert NULL_CURRENCY.smallest_denomination == 1


def test_null_currency_is_compatible_with_everything():
    assert NULL_CURRENCY.compatible(_currency())
    assert NULL_CURRENCY.compatible(NullCurrency())
    assert not NULL_CURRENCY.compatible("ABC")


def test_null_currency_renders_empty():
    assert str(NULL_CURRENCY) == ""
    assert NULL_CURRENCY == NullCurrency()
    assert NULL_CURRENCY != _currency()
