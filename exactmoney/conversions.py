from __future__ import annotations

import logging
import warnings
from typing import Optional

from exactmoney.domain.coercion import value_to_currency
from exactmoney.domain.money import Money
from exactmoney.errors import InvalidAmount, ParseFailure
from exactmoney.parsers.base import MoneyParser
from exactmoney.settings import current_settings

log = logging.getLogger(__name__)


def deprecate(message: str) -> None:
    log.warning("DEPRECATION WARNING: %s", message)
    warnings.warn(message, DeprecationWarning, stacklevel=3)


def to_money(value: object, currency: object = None, *, parser: Optional[MoneyParser] = None) -> Money:
    """
    Money from a number, a numeric string or another Money.

    Strings must be plain decimals ("1234.56"). With the
    ``legacy_deprecations`` setting on, other strings ("1,234.56",
    "$12") still go through ``parser`` (a FuzzyParser by default) and emit a
    DeprecationWarning, since such input will be rejected eventually.
    """
    if isinstance(value, Money):
        return value.to_money(currency)
    if not isinstance(value, str):
        return Money(value, currency)

    currency = value_to_currency(currency)
    try:
        return Money(value, currency)
    except InvalidAmount:
        if not current_settings().legacy_deprecations:
            raise

    if parser is None:
        from exactmoney.parsers.fuzzy import FuzzyParser

        parser = FuzzyParser()

    money = parser.parse(value, currency)
    if money is None:
        raise ParseFailure(f"could not parse {value!r} as money")

    deprecate(
        f'to_money("{value}") will soon behave like Money("{value}") and raise an InvalidAmount '
        "error. Parse money strings with the user's locale instead."
    )
    return money
