from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Iterator, Optional, Tuple, TYPE_CHECKING

from .base import DocumentSource, RatesStoreConfig
from .cache_file import CacheFile
from .loader import Clock, RatesLoader, utcnow
from .providers import DEFAULT_API_BASE_URL, OpenExchangeRatesSource
from .resolver import RateResolver
from .table import RateTable

if TYPE_CHECKING:  # pragma: no cover
    from oxr_rates.core.config import Settings

"""Rates store facade.

Purpose:
    Single entry point wiring RateTable, RatesLoader and RateResolver
    together from one immutable RatesStoreConfig.

Design:
    - The table is owned here and shared by loader (reset) and resolver
      (lookup + memoized derived pairs).
    - A remote source is created only when a credential (app_id) is set;
      a cache file only when cache_path is set.
    - Every query calls loader.ensure_fresh() first, so refresh is lazy and
      pull-based; there is no background refresh.
"""


class RatesStore:
    def __init__(
        self,
        config: RatesStoreConfig,
        *,
        source: Optional[DocumentSource] = None,
        cache_file: Optional[CacheFile] = None,
        clock: Clock = utcnow,
        api_base_url: str = DEFAULT_API_BASE_URL,
        http_timeout: float = 10.0,
    ):
        self.config = config
        if source is None and config.app_id:
            source = OpenExchangeRatesSource(
                config.app_id,
                config.source,
                base_url=api_base_url,
                timeout=http_timeout,
            )
        if cache_file is None and config.cache_path is not None:
            cache_file = CacheFile(config.cache_path)
        self._source = source
        self._table = RateTable()
        self._loader = RatesLoader(
            self._table, config, source=source, cache_file=cache_file, clock=clock
        )
        self._resolver = RateResolver(self._table, self._loader, config.source)

    @property
    def source(self) -> str:
        return self.config.source

    @property
    def loaded(self) -> bool:
        return not self._table.is_empty()

    @property
    def last_updated_at(self) -> Optional[datetime]:
        return self._table.last_updated_at

    @property
    def remote_enabled(self) -> bool:
        return self._loader.remote_enabled

    @property
    def api_url(self) -> Optional[str]:
        return getattr(self._source, "api_url", None)

    def __len__(self) -> int:
        return len(self._table)

    def stale(self) -> bool:
        return self._loader.stale()

    def load(self) -> None:
        self._loader.ensure_fresh()

    def refresh(self) -> None:
        """Reload from the remote source now, ignoring staleness."""
        self._loader.load_from_api()

    def get_rate(self, from_currency: str, to_currency: str) -> Decimal:
        return self._resolver.rate(from_currency, to_currency)

    def add_rate(self, from_currency: str, to_currency: str, rate: Decimal) -> Decimal:
        rate = Decimal(str(rate)) if isinstance(rate, float) else Decimal(rate)
        self._table.put(from_currency, to_currency, rate)
        return rate

    def each_rate(self) -> Iterator[Tuple[str, str, Decimal]]:
        for (from_currency, to_currency), rate in self._table.snapshot().items():
            yield from_currency, to_currency, rate


def build_rates_store(settings: "Settings") -> RatesStore:
    return RatesStore(
        RatesStoreConfig.from_settings(settings),
        api_base_url=settings.api_base_url,
        http_timeout=settings.http_timeout_seconds,
    )
