from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import String
from sqlalchemy.orm import composite
from sqlalchemy.types import TypeDecorator

from exactmoney.domain.coercion import value_to_currency
from exactmoney.domain.currency import AnyCurrency
from exactmoney.domain.money import Money


class CurrencyType(TypeDecorator):
    """Stores a Currency as its ISO code; accepts codes or Currency objects on write."""

    impl = String(8)
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Any) -> Optional[str]:
        if value is None:
            return None
        return value_to_currency(value).iso_code

    def process_result_value(self, value: Optional[str], dialect: Any) -> Optional[AnyCurrency]:
        if value is None:
            return None
        return value_to_currency(value)


def money_composite(amount_column: Any, currency_column: Any, **kwargs: Any):
    """
    Money attribute over an amount column and a currency column.

        class InvoiceRow(Base):
            amount: Mapped[Decimal] = mapped_column(Numeric(20, 6))
            currency: Mapped[Currency] = mapped_column(CurrencyType())
            total: Mapped[Money] = money_composite("amount", "currency")

    The currency column should use CurrencyType.
    """
    return composite(Money, amount_column, currency_column, **kwargs)
