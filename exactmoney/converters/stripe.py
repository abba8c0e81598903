from __future__ import annotations

from types import MappingProxyType

from exactmoney.converters.iso4217 import Iso4217Converter
from exactmoney.domain.currency import AnyCurrency

# https://docs.stripe.com/currencies#special-cases and #zero-decimal
STRIPE_SUBUNIT_TO_UNIT = MappingProxyType({
    "ISK": 100,
    "UGX": 100,
    "HUF": 100,
    "TWD": 100,
    "BIF": 1,
    "CLP": 1,
    "DJF": 1,
    "GNF": 1,
    "JPY": 1,
    "KMF": 1,
    "KRW": 1,
    "MGA": 1,
    "PYG": 1,
    "RWF": 1,
    "VND": 1,
    "VUV": 1,
    "XAF": 1,
    "XOF": 1,
    "XPF": 1,
    "USDC": 1_000_000,
})


class StripeConverter(Iso4217Converter):
    """ISO 4217 subunits, except where the payment processor counts them differently."""

    def subunit_to_unit(self, currency: AnyCurrency) -> int:
        override = STRIPE_SUBUNIT_TO_UNIT.get(currency.iso_code)
        if override is not None:
            return override
        return super().subunit_to_unit(currency)
