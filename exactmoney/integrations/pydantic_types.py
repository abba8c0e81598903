from __future__ import annotations

from decimal import Decimal
from fractions import Fraction
from typing import Annotated, Any, Mapping

from pydantic import AfterValidator, PlainSerializer, PlainValidator

from exactmoney.domain.money import Money
from exactmoney.repositories.currency_repository import get_currency_registry
from exactmoney.settings import current_settings


def _to_money(value: Any) -> Money:
    if isinstance(value, Money):
        return value
    if isinstance(value, Mapping):
        return Money.from_dict(value)
    if isinstance(value, bool):
        raise ValueError(f"invalid money value {value!r}")
    if isinstance(value, (int, float, Decimal, Fraction, str)):
        return Money(value)
    raise ValueError(f"invalid money value {value!r}")


def _dump_money(money: Money) -> dict[str, str]:
    return money.to_dict()


def _canonical_code(code: str) -> str:
    experimental = current_settings().experimental_currencies
    return get_currency_registry().find_strict(code, experimental=experimental).iso_code


# {"value": "12.30", "currency": "USD"} on the wire, Money in Python
MoneyField = Annotated[
    Money,
    PlainValidator(_to_money),
    PlainSerializer(_dump_money, return_type=dict, when_used="json"),
]

# upper-cased, known ISO code ("usd" -> "USD", "RMB" -> "CNY")
CurrencyCode = Annotated[str, AfterValidator(_canonical_code)]
