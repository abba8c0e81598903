from __future__ import annotations

import os
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from functools import lru_cache
from pathlib import Path
from typing import Iterator, Optional

_TRUTHY = {"1", "true", "yes", "on"}

_PACKAGED_DATA_DIR = Path(__file__).resolve().parent / "data"


@dataclass(frozen=True)
class Settings:
    # None or "" means callers must always pass a currency
    default_currency: Optional[str] = "XXX"
    default_subunit_format: str = "iso4217"
    legacy_json_format: bool = False
    legacy_deprecations: bool = False
    experimental_currencies: bool = False
    data_dir: Path = _PACKAGED_DATA_DIR


def _env_flag(name: str) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return False
    return raw.strip().lower() in _TRUTHY


@lru_cache
def get_settings() -> Settings:
    # 1) env vars
    # 2) defaults
    default_currency: Optional[str] = "XXX"
    env_currency = os.getenv("EXACTMONEY_DEFAULT_CURRENCY")
    if env_currency is not None:
        default_currency = env_currency.strip() or None

    subunit_format = os.getenv("EXACTMONEY_SUBUNIT_FORMAT")
    if subunit_format is None or not subunit_format.strip():
        subunit_format = "iso4217"

    env_dir = os.getenv("EXACTMONEY_DATA_DIR")
    if env_dir and env_dir.strip():
        data_dir = Path(env_dir).expanduser()
    else:
        data_dir = _PACKAGED_DATA_DIR

    return Settings(
        default_currency=default_currency,
        default_subunit_format=subunit_format.strip(),
        legacy_json_format=_env_flag("EXACTMONEY_LEGACY_JSON"),
        legacy_deprecations=_env_flag("EXACTMONEY_LEGACY_DEPRECATIONS"),
        experimental_currencies=_env_flag("EXACTMONEY_EXPERIMENTAL_CURRENCIES"),
        data_dir=data_dir,
    )


_current: ContextVar[Optional[Settings]] = ContextVar("exactmoney_settings", default=None)


def current_settings() -> Settings:
    """Settings in effect for the running thread or task."""
    override = _current.get()
    if override is not None:
        return override
    return get_settings()


@contextmanager
def with_settings(**changes) -> Iterator[Settings]:
    """Temporarily override settings, e.g. ``with with_settings(legacy_json_format=True):``."""
    scoped = replace(current_settings(), **changes)
    token = _current.set(scoped)
    try:
        yield scoped
    finally:
        _current.reset(token)


@contextmanager
def with_currency(currency) -> Iterator[Settings]:
    # accepts a code or a Currency/NullCurrency instance
    if currency is None:
        code = current_settings().default_currency
    else:
        code = getattr(currency, "iso_code", currency)
    with with_settings(default_currency=code) as scoped:
        yield scoped
