from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import TYPE_CHECKING

from exactmoney.domain.coercion import value_to_currency, value_to_decimal
from exactmoney.domain.currency import AnyCurrency

if TYPE_CHECKING:
    from exactmoney.domain.money import Money


class Converter(ABC):
    """Converts between Money and an integer count of subunits."""

    def to_subunits(self, money: "Money") -> int:
        if money is None:
            raise ValueError("money cannot be None")
        ratio = self.subunit_to_unit(money.currency)
        with localcontext() as ctx:
            # wide enough for the exact product
            ctx.prec = max(ctx.prec, len(money.amount.as_tuple().digits) + len(str(ratio)))
            scaled = money.amount * ratio
            return int(scaled.to_integral_value(rounding=ROUND_HALF_UP))

    def from_subunits(self, subunits: int, currency: object) -> "Money":
        from exactmoney.domain.money import Money

        currency = value_to_currency(currency)
        ratio = self.subunit_to_unit(currency)
        subunits = value_to_decimal(subunits)
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, subunits.adjusted() + len(str(ratio)) + currency.minor_units + 2)
            value = subunits / Decimal(ratio)
        return Money(value, currency)

    @abstractmethod
    def subunit_to_unit(self, currency: AnyCurrency) -> int:
        raise NotImplementedError
