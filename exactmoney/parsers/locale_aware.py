from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Callable, Optional

from exactmoney.domain.money import Money
from exactmoney.errors import ParseFailure
from exactmoney.parsers.base import MoneyParser

if TYPE_CHECKING:
    from exactmoney.repositories.currency_repository import CurrencyRegistry

DecimalSeparatorResolver = Callable[[], Optional[str]]

# full-width minus, digits and separators
_ASCII = str.maketrans("－０１２３４５６７８９．，、､", "-0123456789.,,,")


class LocaleAwareParser(MoneyParser):
    """
    Parses amounts formatted for a known locale.

    The decimal separator comes from ``decimal_separator`` or, when not
    given, from ``resolver`` (e.g. the current request's locale). Every
    character other than digits, "-" and that separator is dropped, so
    "1.234,56" with "," reads as 1234.56 and "1 234,56 €" does too.
    """

    def __init__(
        self,
        decimal_separator: Optional[str] = None,
        *,
        resolver: Optional[DecimalSeparatorResolver] = None,
        registry: Optional["CurrencyRegistry"] = None,
    ) -> None:
        super().__init__(registry=registry)
        self._decimal_separator = decimal_separator
        self._resolver = resolver

    def decimal_separator(self) -> Optional[str]:
        if self._decimal_separator is not None:
            return self._decimal_separator
        if self._resolver is not None:
            return self._resolver()
        return None

    def parse(
        self,
        input: object,
        currency: object = None,
        *,
        strict: bool = False,
        decimal_separator: Optional[str] = None,
    ) -> Optional[Money]:
        separator = decimal_separator or self.decimal_separator()
        if not separator:
            raise ValueError("decimal separator cannot be None")

        currency = self._currency(currency)
        text = str(input).translate(_ASCII)
        text = re.sub(rf"[^\d\-{re.escape(separator)}]", "", text)
        text = text.replace(separator, ".")

        try:
            amount = Decimal(text)
        except InvalidOperation:
            amount = None
        if amount is not None and amount.is_finite():
            return Money(amount, currency)
        if strict:
            raise ParseFailure(f'unable to parse input="{input}" currency="{currency}"')
        return None
