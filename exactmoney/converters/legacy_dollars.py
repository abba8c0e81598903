from __future__ import annotations

from exactmoney.converters.base import Converter
from exactmoney.domain.currency import AnyCurrency


class LegacyDollarsConverter(Converter):
    """Every currency counted in hundredths, as amounts were stored before currencies existed."""

    def subunit_to_unit(self, currency: AnyCurrency) -> int:
        return 100
