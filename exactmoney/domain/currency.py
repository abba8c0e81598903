from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True, eq=False)
class Currency:
    """
    Immutable currency metadata, identified by its ISO code.

    Instances are built by the CurrencyRegistry from the currency tables;
    two instances with the same code are equal even if they come from
    different registries.
    """
    iso_code: str
    iso_numeric: Optional[str]
    name: str
    symbol: Optional[str]
    disambiguate_symbol: Optional[str]
    subunit_symbol: Optional[str]
    subunit_to_unit: int
    smallest_denomination: int
    decimal_mark: str
    minor_units: int = field(init=False)

    def __post_init__(self) -> None:
        if not isinstance(self.iso_code, str) or self.iso_code.strip() == "":
            raise ValueError("iso_code cannot be empty")
        if not isinstance(self.subunit_to_unit, int) or self.subunit_to_unit < 1:
            raise ValueError("subunit_to_unit must be a positive integer")

        object.__setattr__(self, "iso_code", self.iso_code.strip().upper())
        if self.disambiguate_symbol is None:
            object.__setattr__(self, "disambiguate_symbol", self.symbol)
        object.__setattr__(self, "minor_units", round(math.log10(self.subunit_to_unit)))

    @property
    def code(self) -> str:
        return self.iso_code

    def compatible(self, other: object) -> bool:
        return isinstance(other, NullCurrency) or self == other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Currency):
            return NotImplemented
        return self.iso_code == other.iso_code

    def __hash__(self) -> int:
        return hash((Currency, self.iso_code))

    def __str__(self) -> str:
        return self.iso_code

    def __repr__(self) -> str:
        return f"<Currency {self.iso_code}>"


@dataclass(frozen=True, eq=False)
class NullCurrency:
    """
    Placeholder for amounts that carry no currency (ISO 4217 "XXX").

    It behaves like a two-decimal dollar and is compatible with every real
    currency: combining it with one yields a result in that currency.
    Prefer ``Money(0, currency)`` over currency-less amounts where possible.
    """
    iso_code: str = "XXX"
    iso_numeric: str = "999"
    name: str = "No Currency"
    symbol: str = "$"
    disambiguate_symbol: Optional[str] = None
    subunit_symbol: Optional[str] = None
    subunit_to_unit: int = 100
    smallest_denomination: int = 1
    decimal_mark: str = "."
    minor_units: int = 2

    @property
    def code(self) -> str:
        return self.iso_code

    def compatible(self, other: object) -> bool:
        return isinstance(other, (Currency, NullCurrency))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NullCurrency):
            return NotImplemented
        return True

    def __hash__(self) -> int:
        return hash((NullCurrency, self.iso_code))

    def __str__(self) -> str:
        return ""

    def __repr__(self) -> str:
        return "<NullCurrency>"


NULL_CURRENCY = NullCurrency()

AnyCurrency = Union[Currency, NullCurrency]
