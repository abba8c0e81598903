from __future__ import annotations

import threading
from typing import Optional, Type

from exactmoney.converters.base import Converter
from exactmoney.converters.iso4217 import Iso4217Converter
from exactmoney.converters.legacy_dollars import LegacyDollarsConverter
from exactmoney.converters.stripe import StripeConverter
from exactmoney.errors import UnknownFormat
from exactmoney.settings import current_settings

_lock = threading.Lock()
_converters: dict[str, Type[Converter]] = {
    "iso4217": Iso4217Converter,
    "legacy_dollar": LegacyDollarsConverter,
    "stripe": StripeConverter,
}


def register(key: str, converter: Type[Converter]) -> None:
    if not (isinstance(converter, type) and issubclass(converter, Converter)):
        raise TypeError("converter must be a Converter subclass")
    with _lock:
        _converters[str(key)] = converter


def unregister(key: str) -> None:
    with _lock:
        _converters.pop(str(key), None)


def registered_formats() -> list[str]:
    return sorted(_converters)


def for_format(format: Optional[str] = None) -> Converter:
    """Converter registered under ``format``, or the configured default format."""
    key = format or current_settings().default_subunit_format
    converter = _converters.get(str(key))
    if converter is None:
        raise UnknownFormat(f"unknown format: '{key}'")
    return converter()
