from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from exactmoney.domain.coercion import value_to_currency
from exactmoney.domain.currency import AnyCurrency

if TYPE_CHECKING:
    from exactmoney.domain.money import Money
    from exactmoney.repositories.currency_repository import CurrencyRegistry


class MoneyParser:
    """
    Common shape of every parser: ``parse(input, currency=None, strict=False)``.

    Parsers resolve currency codes through ``registry`` (the shared registry
    when omitted) and are otherwise stateless, so one instance can be shared.
    """

    def __init__(self, *, registry: Optional["CurrencyRegistry"] = None) -> None:
        self._registry = registry

    def parse(self, input: object, currency: object = None, *, strict: bool = False) -> Optional["Money"]:
        raise NotImplementedError

    def _currency(self, currency: object) -> AnyCurrency:
        return value_to_currency(currency, registry=self._registry)
