from __future__ import annotations

from typing import Optional

import pytest
from pydantic import BaseModel, ValidationError

from exactmoney.domain.money import Money
from exactmoney.integrations.pydantic_types import CurrencyCode, MoneyField


class InvoiceLine(BaseModel):
    label: str
    total: MoneyField
    discount: Optional[MoneyField] = None


class Account(BaseModel):
    currency: CurrencyCode


def test_accepts_money_dicts_and_numbers():
    assert InvoiceLine(label="a", total=Money(5, "USD")).total == Money(5, "USD")
    line = InvoiceLine.model_validate({"label": "b", "total": {"value": "1.50", "currency": "CAD"}})
    assert line.total == Money("1.50", "CAD")
    assert line.total.currency.iso_code == "CAD"
    assert InvoiceLine(label="c", total="2.5").total == Money("2.50")
    assert InvoiceLine(label="d", total=3).total == Money(3)


@pytest.mark.parametrize(
    "bad",
    [
        {"value": "1.00", "currency": "ZZZ"},
        {"value": "abc", "currency": "USD"},
        {"value": "1.00"},
        "1,000",
        [1, 2],
        True,
    ],
)
def test_invalid_values(bad):
    with pytest.raises(ValidationError):
        InvoiceLine(label="x", total=bad)


def test_json_dump_uses_structured_form():
    line = InvoiceLine(label="a", total=Money("1.234", "JOD"))
    assert line.model_dump(mode="json") == {
        "label": "a",
        "total": {"value": "1.234", "currency": "JOD"},
        "discount": None,
    }
    assert line.model_dump()["total"] == Money("1.234", "JOD")


def test_json_round_trip():
    line = InvoiceLine(label="a", total=Money("9.99", "EUR"), discount=Money(1, "EUR"))
    assert InvoiceLine.model_validate_json(line.model_dump_json()) == line


def test_currency_code_is_canonicalized():
    assert Account(currency="usd").currency == "USD"
    assert Account(currency="RMB").currency == "CNY"


def test_currency_code_rejects_unknown():
    with pytest.raises(ValidationError):
        Account(currency="ZZZ")
    with pytest.raises(ValidationError):
        Account(currency="")
