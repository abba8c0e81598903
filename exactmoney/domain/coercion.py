from __future__ import annotations

from decimal import Decimal, InvalidOperation, localcontext
from fractions import Fraction
from typing import TYPE_CHECKING, Optional

from exactmoney.domain.currency import NULL_CURRENCY, AnyCurrency, Currency, NullCurrency
from exactmoney.errors import InvalidAmount, UnknownCurrency
from exactmoney.settings import current_settings

if TYPE_CHECKING:
    from exactmoney.repositories.currency_repository import CurrencyRegistry

DECIMAL_ZERO = Decimal(0)

# significant digits kept when turning floats and fractions into decimals
FLOAT_DIGITS = 15
MAX_DECIMAL = 21


def value_to_decimal(num: object) -> Decimal:
    """
    Exact decimal for any accepted amount input.

    Floats go through their 15-significant-digit rendering so that binary
    artifacts (0.1 + 0.2) do not leak into amounts.
    """
    from exactmoney.domain.money import Money

    if isinstance(num, Money):
        value = num.amount
    elif num is None or (isinstance(num, str) and num.strip() == ""):
        value = DECIMAL_ZERO
    elif isinstance(num, bool):
        raise InvalidAmount(f"could not parse as decimal {num!r}")
    elif isinstance(num, Decimal):
        value = num
    elif isinstance(num, int):
        value = Decimal(num)
    elif isinstance(num, float):
        value = Decimal(format(num, f".{FLOAT_DIGITS}g"))
    elif isinstance(num, Fraction):
        value = fraction_to_decimal(num)
    elif isinstance(num, str):
        try:
            value = Decimal(num.strip())
        except InvalidOperation as exc:
            raise InvalidAmount(f"could not parse as decimal {num!r}") from exc
    else:
        raise InvalidAmount(f"could not parse as decimal {num!r}")

    if value.is_nan():
        raise InvalidAmount("amount cannot be NaN")
    if value.is_infinite():
        raise InvalidAmount("amount cannot be infinite")
    if value.is_zero():
        return DECIMAL_ZERO
    return value


def fraction_to_decimal(value: Fraction, units: int = 0) -> Decimal:
    with localcontext() as ctx:
        # large amounts keep every integer digit plus `units` decimals
        ctx.prec = max(MAX_DECIMAL, len(str(abs(int(value)))) + units + 2)
        return Decimal(value.numerator) / Decimal(value.denominator)


def value_to_currency(
    currency: object,
    *,
    registry: Optional["CurrencyRegistry"] = None,
    experimental: Optional[bool] = None,
) -> AnyCurrency:
    """Resolve a code, Currency or NullCurrency; None or "" means the configured default."""
    if isinstance(currency, (Currency, NullCurrency)):
        return currency

    settings = current_settings()
    if currency is None or currency == "":
        default = settings.default_currency
        if default is None or default == "":
            raise UnknownCurrency("missing currency")
        return value_to_currency(default, registry=registry, experimental=experimental)

    if not isinstance(currency, str):
        raise UnknownCurrency(f"could not parse as currency {currency!r}")

    if currency.strip().upper() == NULL_CURRENCY.iso_code:
        return NULL_CURRENCY

    if registry is None:
        from exactmoney.repositories.currency_repository import get_currency_registry

        registry = get_currency_registry()
    if experimental is None:
        experimental = settings.experimental_currencies
    return registry.find_strict(currency, experimental=experimental)
