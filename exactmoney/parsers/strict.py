from __future__ import annotations

import re

from exactmoney.domain.money import Money
from exactmoney.errors import ParseFailure
from exactmoney.parsers.base import MoneyParser

PLAIN_NUMBER_REGEX = re.compile(r"[+-]?(\d+|\d+\.\d+|\.\d+)")


class StrictParser(MoneyParser):
    """Plain ``[sign]digits[.digits]`` amounts; any grouping mark is an error."""

    def parse(self, input: object, currency: object = None, *, strict: bool = True) -> Money:
        if input is None:
            raise ValueError("value can't be None")

        value = str(input).strip()
        if value == "":
            return Money(0, self._currency(currency))

        if value.endswith("."):
            value = value[:-1]

        if not PLAIN_NUMBER_REGEX.fullmatch(value):
            raise ParseFailure(f"invalid money value {value}")

        return Money(value, self._currency(currency))
