from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal, localcontext
from fractions import Fraction
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional, Union

from exactmoney.domain.coercion import (
    DECIMAL_ZERO,
    fraction_to_decimal,
    value_to_currency,
    value_to_decimal,
)
from exactmoney.domain.currency import AnyCurrency, NullCurrency
from exactmoney.errors import IncompatibleCurrency, InvalidPartyCount
from exactmoney.settings import current_settings

if TYPE_CHECKING:
    from exactmoney.engine.splitter import Splitter

_NUMBER_TYPES = (int, float, Decimal, Fraction)

# str() keeps the historical two-decimal rendering whatever the currency
LEGACY_DISPLAY_UNITS = 2

Amount = Union["Money", Decimal, int, float, Fraction, str, None]


def _quantize(value: Decimal, units: int) -> Decimal:
    exp = Decimal(1).scaleb(-units)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + units + 2)
        q = value.quantize(exp, rounding=ROUND_HALF_UP)
    if q.is_zero() and q.is_signed():
        q = q.copy_abs()
    return q


def _digits(value: Decimal) -> int:
    return len(value.as_tuple().digits)


def _exact_sum(a: Decimal, b: Decimal) -> Decimal:
    bottom = min(a.as_tuple().exponent, b.as_tuple().exponent)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, max(a.adjusted(), b.adjusted()) - bottom + 2)
        return a + b


def _is_number(value: object) -> bool:
    return isinstance(value, _NUMBER_TYPES) and not isinstance(value, bool)


@dataclass(frozen=True, eq=False)
class Money:
    """
    Exact amount of a currency.

    ``amount`` accepts a Decimal, int, float, Fraction, numeric string or
    another Money and is rounded half-up to the currency's minor units once,
    here. ``currency`` accepts a code, a Currency or NullCurrency; when
    omitted the configured default currency is used.

        Money("10.005", "USD")      # 10.01 USD
        Money(5, "JPY") + Money(1)  # 6 JPY, currency-less amounts adopt the other side

    Money cannot be divided: use ``split`` or ``allocate`` so that no
    subunit is lost.
    """
    amount: Any
    currency: Any = None

    def __post_init__(self) -> None:
        value = self.amount
        if isinstance(value, Money):
            currency = self._currency_for_existing(value, self.currency)
            value = value.amount
        else:
            currency = value_to_currency(self.currency)
            value = value_to_decimal(value)

        object.__setattr__(self, "currency", currency)
        object.__setattr__(self, "amount", _quantize(value, currency.minor_units))

    @staticmethod
    def _currency_for_existing(money: "Money", requested: object) -> AnyCurrency:
        if requested is None:
            return money.currency
        currency = value_to_currency(requested)
        if money.no_currency():
            return currency
        if money.currency.compatible(currency):
            return money.currency
        raise IncompatibleCurrency(
            f"Money(Money({money.to_fs('amount')}, {money.currency}), {currency}) "
            "is changing the currency of an existing money object"
        )

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_amount(cls, amount: Amount = 0, currency: object = None) -> "Money":
        return cls(amount, currency)

    @classmethod
    def zero(cls, currency: object = None) -> "Money":
        return cls(DECIMAL_ZERO, currency)

    @classmethod
    def from_subunits(cls, subunits: int, currency: object, *, format: Optional[str] = None) -> "Money":
        from exactmoney.converters.registry import for_format

        return for_format(format).from_subunits(subunits, currency)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Money":
        try:
            return cls(data["value"], data["currency"])
        except KeyError as exc:
            raise ValueError(f"money hash is missing {exc.args[0]!r}") from exc

    @classmethod
    def from_json(cls, raw: str) -> "Money":
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("money JSON must be an object")
        return cls.from_dict(data)

    @staticmethod
    def rational(money1: "Money", money2: "Money") -> Fraction:
        """Exact ratio money1 / money2 of two compatible amounts."""
        money1._ensure_compatible(
            money2.currency,
            f"cannot compute a ratio between currencies {money1.currency} and {money2.currency}",
        )
        return Fraction(money1.amount) / Fraction(money2.amount)

    # ------------------------------------------------------------------
    # Predicates and conversions
    # ------------------------------------------------------------------

    def no_currency(self) -> bool:
        return isinstance(self.currency, NullCurrency)

    def is_zero(self) -> bool:
        return self.amount.is_zero()

    def is_positive(self) -> bool:
        return self.amount > 0

    def is_negative(self) -> bool:
        return self.amount < 0

    def subunits(self, *, format: Optional[str] = None) -> int:
        from exactmoney.converters.registry import for_format

        return for_format(format).to_subunits(self)

    def to_decimal(self) -> Decimal:
        return self.amount

    def to_money(self, currency: object = None) -> "Money":
        if currency is None:
            return self
        if self.no_currency():
            return Money(self.amount, currency)
        self._ensure_compatible(
            value_to_currency(currency),
            f"to_money is attempting to change currency of an existing money object "
            f"from {self.currency} to {currency}",
        )
        return self

    def __int__(self) -> int:
        return int(self.amount)

    def __float__(self) -> float:
        return float(self.amount)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __neg__(self) -> "Money":
        return Money(self.amount.copy_negate(), self.currency)

    def __pos__(self) -> "Money":
        return self

    def __add__(self, other: object) -> "Money":
        money = self._operand(other)
        if money is None:
            return NotImplemented
        if money.is_zero() and not self.no_currency():
            return self
        return Money(_exact_sum(self.amount, money.amount), self._calculated_currency(money.currency))

    def __radd__(self, other: object) -> "Money":
        # sum() starts from 0
        return self.__add__(other)

    def __sub__(self, other: object) -> "Money":
        money = self._operand(other)
        if money is None:
            return NotImplemented
        if money.is_zero() and not self.no_currency():
            return self
        return Money(_exact_sum(self.amount, money.amount.copy_negate()), self._calculated_currency(money.currency))

    def __rsub__(self, other: object) -> "Money":
        money = self._operand(other)
        if money is None:
            return NotImplemented
        return money - self

    def __mul__(self, other: object) -> "Money":
        if isinstance(other, Money) or not _is_number(other):
            raise TypeError("Money objects can only be multiplied by a number")
        if other == 1:
            return self
        if isinstance(other, Fraction):
            product = fraction_to_decimal(Fraction(self.amount) * other, self.currency.minor_units)
        else:
            factor = value_to_decimal(other)
            with localcontext() as ctx:
                ctx.prec = max(ctx.prec, _digits(self.amount) + _digits(factor))
                product = self.amount * factor
        return Money(product, self.currency)

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> "Money":
        raise TypeError("dividing money objects can lose subunits, use split() or allocate() instead")

    __floordiv__ = __truediv__
    __rtruediv__ = __truediv__
    __rfloordiv__ = __truediv__

    def __abs__(self) -> "Money":
        return self.abs()

    def abs(self) -> "Money":
        if not self.amount.is_signed():
            return self
        return Money(self.amount.copy_abs(), self.currency)

    def floor(self) -> "Money":
        floor = self.amount.to_integral_value(rounding=ROUND_FLOOR)
        if floor == self.amount:
            return self
        return Money(floor, self.currency)

    def round(self, ndigits: int = 0) -> "Money":
        rounded = _quantize(self.amount, ndigits)
        if rounded == self.amount:
            return self
        return Money(rounded, self.currency)

    def __round__(self, ndigits: Optional[int] = None) -> "Money":
        return self.round(ndigits or 0)

    def fraction(self, rate: Union[Decimal, int, float, Fraction]) -> "Money":
        """Amount before ``rate`` was added on top, i.e. amount / (1 + rate)."""
        rate = value_to_decimal(rate)
        if rate < 0:
            raise ValueError("rate should be positive")
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, self.amount.adjusted() + self.currency.minor_units + 4)
            result = self.amount / (1 + rate)
        return Money(result, self.currency)

    def clamp(self, minimum: object, maximum: object) -> "Money":
        """Self when within [minimum, maximum], otherwise the nearest bound."""
        low = self._bound(minimum)
        high = self._bound(maximum)
        if low > high:
            raise ValueError("min cannot be greater than max")

        if self.amount < low:
            return Money(low, self.currency)
        if self.amount > high:
            return Money(high, self.currency)
        return self

    def _bound(self, value: object) -> Decimal:
        if isinstance(value, Money):
            self._ensure_compatible(
                value.currency,
                f"cannot clamp {self.currency} with a bound in {value.currency}",
            )
        return value_to_decimal(value)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        if not self.currency.compatible(other.currency):
            return False
        return self.amount == other.amount

    def __hash__(self) -> int:
        return hash(self.amount)

    def _compare(self, other: object) -> Optional[int]:
        if isinstance(other, Money):
            self._ensure_compatible(
                other.currency,
                f"cannot compare Money objects with different currencies {other.currency} and {self.currency}",
            )
            theirs = other.amount
        elif _is_number(other):
            theirs = value_to_decimal(other)
        else:
            return None
        return (self.amount > theirs) - (self.amount < theirs)

    def __lt__(self, other: object) -> bool:
        cmp = self._compare(other)
        return NotImplemented if cmp is None else cmp < 0

    def __le__(self, other: object) -> bool:
        cmp = self._compare(other)
        return NotImplemented if cmp is None else cmp <= 0

    def __gt__(self, other: object) -> bool:
        cmp = self._compare(other)
        return NotImplemented if cmp is None else cmp > 0

    def __ge__(self, other: object) -> bool:
        cmp = self._compare(other)
        return NotImplemented if cmp is None else cmp >= 0

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def to_fs(self, style: Optional[str] = None) -> str:
        """
        String rendering of the amount.

        ``None`` and ``"legacy_dollars"`` always use two decimals (the
        historical behaviour of ``str()``, kept on purpose even for JPY or
        JOD). ``"amount"`` uses the currency's own minor units.
        """
        if style is None or style == "legacy_dollars":
            units = LEGACY_DISPLAY_UNITS
        elif style == "amount":
            units = self.currency.minor_units
        else:
            raise ValueError(f"Unexpected format: {style}")

        rounded = _quantize(self.amount, units)
        if units == 0:
            return f"{rounded:f}"
        return f"{rounded:.{units}f}"

    def __str__(self) -> str:
        return self.to_fs()

    def __repr__(self) -> str:
        return f"<Money value:{self.to_fs('amount')} currency:{self.currency}>"

    def to_dict(self) -> dict[str, str]:
        return {"value": self.to_fs("amount"), "currency": str(self.currency)}

    def as_json(self, *, legacy_format: bool = False) -> Union[str, dict[str, str]]:
        if legacy_format or current_settings().legacy_json_format:
            return str(self)
        return self.to_dict()

    def to_json(self, *, legacy_format: bool = False) -> str:
        return json.dumps(self.as_json(legacy_format=legacy_format))

    # ------------------------------------------------------------------
    # Splitting
    # ------------------------------------------------------------------

    def allocate(self, splits: Iterable[object], strategy: str = "roundrobin") -> list["Money"]:
        """See ``exactmoney.engine.allocator.Allocator.allocate``."""
        from exactmoney.engine.allocator import Allocator

        return Allocator(self).allocate(splits, strategy)

    def allocate_max_amounts(self, maximums: Iterable[object]) -> list["Money"]:
        """See ``exactmoney.engine.allocator.Allocator.allocate_max_amounts``."""
        from exactmoney.engine.allocator import Allocator

        return Allocator(self).allocate_max_amounts(maximums)

    def split(self, num: object) -> "Splitter":
        """
        Split evenly between ``num`` parties without losing subunits.

            list(Money(100, "USD").split(3))  # [33.34, 33.33, 33.33]
        """
        from exactmoney.engine.splitter import Splitter

        return Splitter(self, num)

    def calculate_splits(self, num: object) -> dict["Money", int]:
        """
        Distinct split values and how many parties receive each, the value
        carrying the extra subunit first.

            Money(100, "USD").calculate_splits(3)  # {33.34: 1, 33.33: 2}
        """
        return dict(self.split(num).buckets)

    def per_unit(self, quantity: int, *, take: int = 1) -> "Money":
        """
        Unit price for ``quantity`` units, summed over ``take`` units.

        Units carrying the extra subunit are taken first, so taking every
        unit gives back the original amount.
        """
        if take < 0:
            raise ValueError("take should be positive")
        if quantity <= 0:
            raise InvalidPartyCount("quantity should be positive")
        if take > quantity:
            raise ValueError("take cannot be greater than quantity")
        return self._sum_units(self.calculate_splits(quantity).items(), take)

    def reverse_per_unit(self, quantity: int, *, take: int = 1) -> "Money":
        """Like ``per_unit`` but units without the extra subunit are taken first."""
        # take must be at least 1, so quantity 0 fails on the take check below
        if quantity < 0:
            raise InvalidPartyCount("quantity should be positive")
        if take <= 0:
            raise ValueError("take should be positive")
        if take > quantity:
            raise ValueError("take cannot be greater than quantity")
        return self._sum_units(reversed(list(self.calculate_splits(quantity).items())), take)

    def _sum_units(self, buckets: Iterable[tuple["Money", int]], take: int) -> "Money":
        total = Money.zero(self.currency)
        for value, count in buckets:
            count = min(take, count)
            take -= count
            total = total + value * count
        return total

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _operand(self, other: object) -> Optional["Money"]:
        if isinstance(other, Money):
            self._ensure_compatible(
                other.currency,
                f"mathematical operation not permitted for Money objects with different "
                f"currencies {other.currency} and {self.currency}.",
            )
            return other
        if _is_number(other):
            return Money(other, self.currency)
        return None

    def _ensure_compatible(self, other_currency: object, msg: str) -> None:
        if self.currency.compatible(other_currency):
            return
        raise IncompatibleCurrency(msg)

    def _calculated_currency(self, other: AnyCurrency) -> AnyCurrency:
        return other if self.no_currency() else self.currency
