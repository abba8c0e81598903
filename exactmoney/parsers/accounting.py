from __future__ import annotations

import re

from exactmoney.domain.money import Money
from exactmoney.parsers.fuzzy import FuzzyParser

# (123.45) and ($123.45) are negative
PARENTHESES_REGEX = re.compile(r"\(\$?(.*?)\)")


class AccountingParser(FuzzyParser):
    def parse(self, input: object, currency: object = None, *, strict: bool = False) -> Money:
        if isinstance(input, str):
            input = PARENTHESES_REGEX.sub(r"-\1", input)
        return super().parse(input, currency, strict=strict)
