from exactmoney.conversions import to_money
from exactmoney.domain.currency import NULL_CURRENCY, Currency, NullCurrency
from exactmoney.domain.money import Money
from exactmoney.engine.allocator import AllocationStrategy, Allocator
from exactmoney.engine.splitter import Splitter
from exactmoney.errors import (
    IncompatibleCurrency,
    InvalidAmount,
    InvalidPartyCount,
    InvalidStrategy,
    MoneyError,
    ParseFailure,
    SplitsExceedWhole,
    UnknownCurrency,
    UnknownFormat,
)
from exactmoney.parsers.accounting import AccountingParser
from exactmoney.parsers.fuzzy import FuzzyParser
from exactmoney.parsers.locale_aware import LocaleAwareParser
from exactmoney.parsers.simple import SimpleParser
from exactmoney.parsers.strict import StrictParser
from exactmoney.repositories.currency_repository import CurrencyRegistry, get_currency_registry
from exactmoney.settings import Settings, current_settings, get_settings, with_currency, with_settings

__version__ = "1.0.0"

__all__ = [
    "AccountingParser",
    "AllocationStrategy",
    "Allocator",
    "Currency",
    "CurrencyRegistry",
    "FuzzyParser",
    "IncompatibleCurrency",
    "InvalidAmount",
    "InvalidPartyCount",
    "InvalidStrategy",
    "LocaleAwareParser",
    "Money",
    "MoneyError",
    "NULL_CURRENCY",
    "NullCurrency",
    "ParseFailure",
    "Settings",
    "SimpleParser",
    "SplitsExceedWhole",
    "Splitter",
    "StrictParser",
    "UnknownCurrency",
    "UnknownFormat",
    "current_settings",
    "get_currency_registry",
    "get_settings",
    "to_money",
    "with_currency",
    "with_settings",
]
