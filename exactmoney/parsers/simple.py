from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from exactmoney.domain.money import Money
from exactmoney.errors import ParseFailure
from exactmoney.parsers.base import MoneyParser

SIGNED_DECIMAL_REGEX = re.compile(r"-?\d*(?:\.\d*)?")


class SimpleParser(MoneyParser):
    """
    Dot-decimal amounts only, like "-1234.5": no grouping marks, no symbols.

    Meant for APIs and machine-written input where no locale applies.
    """

    def parse(self, input: object, currency: object = None, *, strict: bool = False) -> Optional[Money]:
        currency = self._currency(currency)
        text = "" if input is None else str(input)

        amount = None
        if SIGNED_DECIMAL_REGEX.fullmatch(text):
            try:
                amount = Decimal(text)
            except InvalidOperation:
                amount = None

        if amount is not None:
            return Money(amount, currency)
        if strict:
            raise ParseFailure(f'unable to parse input="{input}" currency="{currency}"')
        return None
