from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Iterator, Optional, Union, overload

from exactmoney.domain.money import Money
from exactmoney.errors import InvalidPartyCount

Bucket = tuple[Money, int]


def _party_count(num: object) -> int:
    if isinstance(num, bool) or not isinstance(num, (int, float, Decimal)):
        raise InvalidPartyCount(f"need at least one party, got {num!r}")
    count = int(num)
    if count != num or count < 1:
        raise InvalidPartyCount(f"need at least one party, got {num!r}")
    return count


class Splitter(Sequence):
    """
    Even split of a Money amount between ``num`` parties.

    Only two values are ever involved: ``low`` (amount // num subunits) and
    ``high`` (one subunit more), so the parties are stored as two buckets
    and expanded on access. Parties receiving the extra subunit come first.

        parts = Money(100, "USD").split(3)
        parts[0], parts[-1]       # 33.34, 33.33
        parts.first(2)            # [33.34, 33.33]
        list(parts.reverse())     # [33.33, 33.33, 33.34]
    """

    def __init__(self, money: Money, num: object) -> None:
        self._num = _party_count(num)
        self._money = money
        self._buckets: Optional[tuple[Bucket, ...]] = None

    @property
    def buckets(self) -> tuple[Bucket, ...]:
        if self._buckets is None:
            self._buckets = self._compute_buckets()
        return self._buckets

    def _compute_buckets(self) -> tuple[Bucket, ...]:
        currency = self._money.currency
        subunits = self._money.subunits()
        low = Money.from_subunits(subunits // self._num, currency)
        high = Money.from_subunits(low.subunits() + 1, currency)
        num_high = subunits % self._num

        buckets: list[Bucket] = []
        if num_high > 0:
            buckets.append((high, num_high))
        buckets.append((low, self._num - num_high))
        return tuple(buckets)

    def __len__(self) -> int:
        return sum(count for _, count in self.buckets)

    @overload
    def __getitem__(self, index: int) -> Money: ...

    @overload
    def __getitem__(self, index: slice) -> list[Money]: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[Money, list[Money]]:
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]

        size = len(self)
        if index < 0:
            index += size
        if index < 0 or index >= size:
            raise IndexError("split index out of range")

        offset = 0
        for money, count in self.buckets:
            offset += count
            if index < offset:
                return money
        raise IndexError("split index out of range")

    def __iter__(self) -> Iterator[Money]:
        for money, count in self.buckets:
            for _ in range(count):
                yield money

    def __reversed__(self) -> Iterator[Money]:
        for money, count in reversed(self.buckets):
            for _ in range(count):
                yield money

    def first(self, count: Optional[int] = None) -> Union[Money, list[Money]]:
        if count is None:
            return self[0]
        return self[:max(count, 0)]

    def last(self, count: Optional[int] = None) -> Union[Money, list[Money]]:
        if count is None:
            return self[-1]
        if count <= 0:
            return []
        return self[-count:]

    def reverse(self) -> "Splitter":
        copy = Splitter(self._money, self._num)
        copy._buckets = tuple(reversed(self.buckets))
        return copy

    def __repr__(self) -> str:
        parts = ", ".join(f"{money.to_fs('amount')} x{count}" for money, count in self.buckets)
        return f"<Splitter {self._money.currency} [{parts}]>"
