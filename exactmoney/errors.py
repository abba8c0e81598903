from __future__ import annotations


class MoneyError(Exception):
    """Base class for every error raised by exactmoney."""


class UnknownCurrency(MoneyError, ValueError):
    pass


class IncompatibleCurrency(MoneyError, ValueError):
    pass


class InvalidAmount(MoneyError, ValueError):
    pass


class SplitsExceedWhole(MoneyError, ValueError):
    pass


class InvalidStrategy(MoneyError, ValueError):
    pass


class InvalidPartyCount(MoneyError, ValueError):
    pass


class ParseFailure(MoneyError, ValueError):
    pass


class UnknownFormat(MoneyError, ValueError):
    pass
