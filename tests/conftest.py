from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from exactmoney.repositories.currency_repository import CurrencyRegistry, get_currency_registry
from exactmoney.settings import get_settings

PACKAGED_DATA_DIR = Path(__file__).resolve().parents[1] / "exactmoney" / "data"

ENV_VARS = (
    "EXACTMONEY_DEFAULT_CURRENCY",
    "EXACTMONEY_SUBUNIT_FORMAT",
    "EXACTMONEY_LEGACY_JSON",
    "EXACTMONEY_LEGACY_DEPRECATIONS",
    "EXACTMONEY_EXPERIMENTAL_CURRENCIES",
    "EXACTMONEY_DATA_DIR",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_currency_registry.cache_clear()
    yield
    get_settings.cache_clear()
    get_currency_registry.cache_clear()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    for src in PACKAGED_DATA_DIR.glob("*.json"):
        shutil.copy(src, tmp_path / src.name)
    return tmp_path


@pytest.fixture
def registry(data_dir: Path) -> CurrencyRegistry:
    return CurrencyRegistry(data_dir=data_dir)
