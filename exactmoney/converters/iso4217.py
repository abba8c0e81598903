from __future__ import annotations

from exactmoney.converters.base import Converter
from exactmoney.domain.currency import AnyCurrency


class Iso4217Converter(Converter):
    def subunit_to_unit(self, currency: AnyCurrency) -> int:
        return currency.subunit_to_unit
