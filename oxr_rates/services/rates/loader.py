from __future__ import annotations

"""Loader: keeps the rate table populated and fresh.

Data comes from the local cache file (first load only, regardless of age)
and from the remote source when a credential is configured and the table is
empty or stale. Every load goes through a single RateTable.reset, so the
table only ever holds one complete document.
"""
import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Optional

from oxr_rates.models.rates import RatesDocument
from .base import DocumentSource, RateLookupTable, RatesStoreConfig
from .cache_file import CacheFile
from .document import parse_rates_document
from .staleness import is_stale

logger = logging.getLogger("oxr_rates.rates.loader")

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RatesLoader:
    def __init__(
        self,
        table: RateLookupTable,
        config: RatesStoreConfig,
        *,
        source: Optional[DocumentSource] = None,
        cache_file: Optional[CacheFile] = None,
        clock: Clock = utcnow,
    ):
        self._table = table
        self.config = config
        self._source = source
        self._cache_file = cache_file
        self._clock = clock
        # serializes refreshes; reentrant so a forced reload can run inside
        self._refresh_lock = threading.RLock()

    @property
    def remote_enabled(self) -> bool:
        return self._source is not None

    @property
    def cache_file(self) -> Optional[CacheFile]:
        return self._cache_file

    def stale(self) -> bool:
        return is_stale(self._table.last_updated_at, self.config.max_age, self._clock())

    def ensure_fresh(self) -> None:
        with self._refresh_lock:
            if (
                self._table.is_empty()
                and self._cache_file is not None
                and self._cache_file.exists()
            ):
                self.load_from_cache()
            if self._source is not None and (self._table.is_empty() or self.stale()):
                self.load_from_api()

    def load_from_cache(self) -> None:
        if self._cache_file is None:
            return
        with self._refresh_lock:
            document = parse_rates_document(self._cache_file.read_text())
            self._apply(document, origin="cache")

    def load_from_api(self) -> None:
        if self._source is None:
            return
        with self._refresh_lock:
            text = self._source.fetch()
            document = parse_rates_document(text)
            self._apply(document, origin="api")
            if self._cache_file is not None:
                self._cache_file.write_text(text)

    def _apply(self, document: RatesDocument, *, origin: str) -> None:
        source = self.config.source
        if document.base is not None and document.base != source:
            logger.warning(
                "rates document base %s differs from configured source %s",
                document.base,
                source,
            )
        self._table.reset(source, document.rates, document.updated_at)
        logger.info(
            "rates loaded from %s",
            origin,
            extra={
                "source": source,
                "pairs": len(document.rates),
                "rates_timestamp": document.updated_at.isoformat(),
            },
        )
