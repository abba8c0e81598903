from __future__ import annotations

import json
import logging
import threading
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from exactmoney.domain.currency import Currency
from exactmoney.errors import UnknownCurrency
from exactmoney.settings import get_settings

log = logging.getLogger(__name__)

# later files win on duplicate keys
STANDARD_TABLES = ("currency_historic.json", "currency_non_iso.json", "currency_iso.json")
EXPERIMENTAL_TABLES = ("crypto.json",)
NORMALIZATION_TABLE = "currency_normalization.json"


class CurrencyRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    iso_code: str = Field(min_length=1)
    iso_numeric: Optional[str] = None
    name: str
    symbol: Optional[str] = None
    disambiguate_symbol: Optional[str] = None
    subunit_symbol: Optional[str] = None
    subunit_to_unit: int = Field(ge=1)
    smallest_denomination: int = Field(default=1, ge=0)
    decimal_mark: str = Field(default=".", min_length=1, max_length=1)

    def to_currency(self) -> Currency:
        return Currency(
            iso_code=self.iso_code,
            iso_numeric=self.iso_numeric,
            name=self.name,
            symbol=self.symbol,
            disambiguate_symbol=self.disambiguate_symbol,
            subunit_symbol=self.subunit_symbol,
            subunit_to_unit=self.subunit_to_unit,
            smallest_denomination=self.smallest_denomination,
            decimal_mark=self.decimal_mark,
        )


class CurrencyRegistry:
    """
    Currency lookup backed by the JSON currency tables in ``data_dir``.

    Tables are read once, on first use. Each canonical code maps to a
    single Currency instance, even when several threads look it up for the
    first time concurrently. Experimental (crypto) currencies live in a
    separate table and cache and are only visible with ``experimental=True``.
    """

    def __init__(self, *, data_dir: Path | None = None) -> None:
        self._data_dir = Path(data_dir) if data_dir is not None else get_settings().data_dir
        self._lock = threading.Lock()
        self._tables: dict[bool, Mapping[str, CurrencyRecord]] = {}
        self._normalization: Optional[Mapping[str, str]] = None
        self._instances: dict[bool, dict[str, Currency]] = {False: {}, True: {}}

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def currencies(self, *, experimental: bool = False) -> Mapping[str, CurrencyRecord]:
        table = self._tables.get(experimental)
        if table is not None:
            return table
        with self._lock:
            table = self._tables.get(experimental)
            if table is None:
                table = self._load_tables(experimental)
                self._tables[experimental] = table
        return table

    def normalization_map(self) -> Mapping[str, str]:
        if self._normalization is not None:
            return self._normalization
        with self._lock:
            if self._normalization is None:
                self._normalization = self._load_normalization()
        return self._normalization

    def normalize(self, code: object, *, experimental: bool = False) -> str:
        """Return the table key (lowercase canonical code) for ``code`` or an alias of it."""
        key = _clean_code(code)
        table = self.currencies(experimental=experimental)
        if key in table:
            return key

        canonical = self.normalization_map().get(key.upper())
        if canonical is not None and canonical.lower() in table:
            log.debug("currency code %s normalized to %s", key.upper(), canonical)
            return canonical.lower()

        raise UnknownCurrency(f"Invalid currency '{code}'")

    def find_strict(self, code: object, *, experimental: bool = False) -> Currency:
        key = self.normalize(code, experimental=experimental)
        cache = self._instances[experimental]

        cached = cache.get(key)
        if cached is not None:
            return cached

        record = self.currencies(experimental=experimental)[key]
        with self._lock:
            cached = cache.get(key)
            if cached is None:
                cached = record.to_currency()
                cache[key] = cached
        return cached

    def find(self, code: object, *, experimental: bool = False) -> Optional[Currency]:
        try:
            return self.find_strict(code, experimental=experimental)
        except UnknownCurrency:
            return None

    def is_valid_code(self, code: object, *, experimental: bool = False) -> bool:
        return self.find(code, experimental=experimental) is not None

    # -------- internals --------
    def _load_tables(self, experimental: bool) -> Mapping[str, CurrencyRecord]:
        files = STANDARD_TABLES + (EXPERIMENTAL_TABLES if experimental else ())
        merged: dict[str, CurrencyRecord] = {}
        for name in files:
            merged.update(self._read_table(self._data_dir / name))
        log.debug(
            "loaded %d currencies from %s (experimental=%s)", len(merged), self._data_dir, experimental
        )
        return MappingProxyType(merged)

    @staticmethod
    def _read_table(path: Path) -> dict[str, CurrencyRecord]:
        if not path.exists():
            return {}
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{path.name}: expected an object keyed by currency code")

        out: dict[str, CurrencyRecord] = {}
        for key, raw in data.items():
            try:
                out[str(key).lower()] = CurrencyRecord.model_validate(raw)
            except ValidationError as e:
                raise ValueError(f"{path.name}: invalid record for '{key}': {e}") from e
        return out

    def _load_normalization(self) -> Mapping[str, str]:
        path = self._data_dir / NORMALIZATION_TABLE
        if not path.exists():
            return MappingProxyType({})
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{path.name}: expected an object of alias -> code")
        return MappingProxyType({str(k).upper(): str(v).upper() for k, v in data.items()})


def _clean_code(code: object) -> str:
    if code is None:
        raise UnknownCurrency("Currency can't be blank")
    key = str(code).strip().lower()
    if key == "":
        raise UnknownCurrency("Currency can't be blank")
    return key


@lru_cache
def get_currency_registry() -> CurrencyRegistry:
    return CurrencyRegistry()
