from __future__ import annotations

import logging
import math
import sys
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Iterable, Sequence

from exactmoney.domain.coercion import value_to_decimal
from exactmoney.domain.currency import NULL_CURRENCY, AnyCurrency
from exactmoney.domain.money import Money
from exactmoney.errors import (
    IncompatibleCurrency,
    InvalidPartyCount,
    InvalidStrategy,
    SplitsExceedWhole,
)

log = logging.getLogger(__name__)

_EPSILON = Fraction(sys.float_info.epsilon)


class AllocationStrategy(str, Enum):
    # leftover subunits go to the first parties, left to right
    ROUNDROBIN = "roundrobin"
    # leftover subunits go to the last parties, right to left
    ROUNDROBIN_REVERSE = "roundrobin_reverse"
    # leftover subunits go to the parties closest to their next whole subunit
    NEAREST = "nearest"


@dataclass(frozen=True)
class _Share:
    whole_subunits: int
    fractional_subunits: Fraction


class Allocator:
    """
    Splits a Money amount between parties without losing or creating a
    subunit. A subunit is the smallest unit of a currency that cannot be
    divided further: cents for USD, yen for JPY. $1 split three ways gives
    [34¢, 33¢, 33¢]: one party has to receive the extra cent.

        Allocator(Money(5, "USD")).allocate([0.3, 0.7])        # [1.50, 3.50]
        Allocator(Money(100, "USD")).allocate([0.33] * 3)      # [33.34, 33.33, 33.33]
        Allocator(Money(30, "USD")).allocate([0.667, 0.333])   # [20.01, 9.99]
        Allocator(Money(30, "USD")).allocate([Fraction(2, 3), Fraction(1, 3)])  # [20.00, 10.00]
        Allocator(Money(10.01, "USD")).allocate([0.5, 0.5], "roundrobin_reverse")  # [5.00, 5.01]
        Allocator(Money(10.55, "USD")).allocate([0.25, 0.5, 0.25], "nearest")  # [2.64, 5.27, 2.64]
    """

    def __init__(self, money: Money) -> None:
        if not isinstance(money, Money):
            raise TypeError("Allocator needs a Money")
        self._money = money

    @property
    def money(self) -> Money:
        return self._money

    def allocate(
        self,
        splits: Iterable[object],
        strategy: AllocationStrategy | str = AllocationStrategy.ROUNDROBIN,
    ) -> list[Money]:
        """
        One Money per ratio in ``splits``, in the same order.

        Ratios may add up to less than 1: they are scaled up against their
        own total so the whole amount is always handed out. Floats are read
        through their decimal rendering, so pass Fractions when the ratios
        are not exact decimals. Leftover subunits are placed according to
        ``strategy``.
        """
        ratios = [_to_ratio(split) for split in splits]
        if not ratios:
            raise InvalidPartyCount("at least one split must be provided")

        total = sum(ratios, Fraction(0))
        if total - 1 > _EPSILON:
            raise SplitsExceedWhole("allocations add to more than 100%")
        if total == 0:
            raise ValueError("allocations cannot add up to zero")

        strategy = _strategy(strategy)
        currency = self._money.currency
        shares, left_over = _shares_from_ratios(ratios, total, self._money.subunits())

        order = _leftover_order(shares, strategy)
        wholes = [share.whole_subunits for share in shares]
        for i in range(left_over):
            wholes[order[i % len(order)]] += 1

        return [Money.from_subunits(whole, currency) for whole in wholes]

    def allocate_max_amounts(self, maximums: Iterable[object]) -> list[Money]:
        """
        Allocates up to a per-party maximum, weighted by those maxima.

        Leftover subunits go round-robin to parties still under their
        maximum; whatever cannot be placed is dropped.

            Allocator(Money(30.75)).allocate_max_amounts([Money(26), Money(4.75)])  # [26, 4.75]
            Allocator(Money(30.75)).allocate_max_amounts([Money(26), Money(4.74)])  # [26, 4.74]
            Allocator(Money(1)).allocate_max_amounts([Money(33)] * 3)            # [0.34, 0.33, 0.33]
            Allocator(Money(100)).allocate_max_amounts([Money(5), Money(2)])     # [5, 2]
        """
        maximums = list(maximums)
        currency = _extract_currency([*maximums, self._money])
        maxima = [_to_money(maximum, currency) for maximum in maximums]
        maxima_total = sum(maxima, Money.zero(currency))

        if maxima_total.is_zero():
            ratios = [Fraction(0) for _ in maxima]
        else:
            ratios = [Money.rational(maximum, maxima_total) for maximum in maxima]

        allocatable = min(maxima_total.subunits(), self._money.to_money(currency).subunits())
        shares, left_over = _shares_from_ratios(ratios, Fraction(1), allocatable)
        wholes = [share.whole_subunits for share in shares]

        for index, amount in enumerate(wholes):
            if left_over <= 0:
                break
            cap = Fraction(maxima[index].amount) * currency.subunit_to_unit
            if amount >= cap:
                continue
            left_over -= 1
            wholes[index] += 1

        if left_over > 0:
            log.debug("allocate_max_amounts dropped %d subunit(s): every party is at its maximum", left_over)

        return [Money.from_subunits(whole, currency) for whole in wholes]


def _to_ratio(split: object) -> Fraction:
    if isinstance(split, bool):
        raise TypeError(f"invalid split {split!r}")
    if isinstance(split, Fraction):
        return split
    if isinstance(split, (int, Decimal)):
        return Fraction(split)
    if isinstance(split, (float, str)):
        return Fraction(value_to_decimal(split))
    raise TypeError(f"invalid split {split!r}")


def _strategy(value: AllocationStrategy | str) -> AllocationStrategy:
    try:
        return AllocationStrategy(value)
    except ValueError:
        valid = ", ".join(s.value for s in AllocationStrategy)
        raise InvalidStrategy(f"Invalid strategy {value!r}. Valid options: {valid}") from None


def _shares_from_ratios(
    ratios: Sequence[Fraction], total: Fraction, subunits: int
) -> tuple[list[_Share], int]:
    left_over = subunits
    shares: list[_Share] = []
    for ratio in ratios:
        exact = subunits * ratio / total
        whole = math.floor(exact)
        left_over -= whole
        shares.append(_Share(whole_subunits=whole, fractional_subunits=exact - whole))
    return shares, left_over


def _leftover_order(shares: Sequence[_Share], strategy: AllocationStrategy) -> list[int]:
    indexes = list(range(len(shares)))
    if strategy is AllocationStrategy.ROUNDROBIN:
        return indexes
    if strategy is AllocationStrategy.ROUNDROBIN_REVERSE:
        return indexes[::-1]
    # nearest to the next whole subunit first, e.g. [1.1, 1.5, 1.9] ranks 2, 1, 0;
    # ties keep their original order
    return sorted(indexes, key=lambda i: 1 - shares[i].fractional_subunits)


def _extract_currency(values: Sequence[object]) -> AnyCurrency:
    currencies: list[AnyCurrency] = []
    for value in values:
        if isinstance(value, Money) and not value.no_currency() and value.currency not in currencies:
            currencies.append(value.currency)
    if len(currencies) > 1:
        joined = ", ".join(str(c) for c in currencies)
        raise IncompatibleCurrency(
            f"operation not permitted for Money objects with different currencies {joined}"
        )
    return currencies[0] if currencies else NULL_CURRENCY


def _to_money(value: object, currency: AnyCurrency) -> Money:
    if isinstance(value, Money):
        return value.to_money(currency)
    return Money(value, currency)
