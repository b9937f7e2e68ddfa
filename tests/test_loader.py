import threading
import time
from datetime import timedelta
from decimal import Decimal

import pytest

from oxr_rates.services.http_client import HttpError
from oxr_rates.services.rates.base import RatesStoreConfig
from oxr_rates.services.rates.cache_file import CacheFile
from oxr_rates.services.rates.exceptions import DocumentParseError
from oxr_rates.services.rates.loader import RatesLoader
from oxr_rates.services.rates.table import RateTable

from conftest import DOCUMENT, DOCUMENT_TIME, NEWER_DOCUMENT, FakeSource


def make_loader(tmp_path=None, source=None, max_age=None, clock=None, cached=None):
    cache_file = None
    if tmp_path is not None:
        cache_file = CacheFile(tmp_path / "latest.json")
        if cached is not None:
            cache_file.write_text(cached)
    config = RatesStoreConfig(
        app_id="secret" if source else None,
        cache_path=cache_file.path if cache_file else None,
        max_age=max_age,
    )
    table = RateTable()
    kwargs = {"source": source, "cache_file": cache_file}
    if clock is not None:
        kwargs["clock"] = clock
    return table, RatesLoader(table, config, **kwargs)


def test_nothing_configured_is_a_noop():
    table, loader = make_loader()
    loader.ensure_fresh()
    assert table.is_empty()
    assert not loader.remote_enabled


def test_cache_is_accepted_regardless_of_age(tmp_path, clock):
    clock.advance(days=3650)
    table, loader = make_loader(
        tmp_path, max_age=timedelta(hours=1), clock=clock, cached=DOCUMENT
    )
    loader.ensure_fresh()
    assert table.get("USD", "EUR") == Decimal("0.9")
    assert table.last_updated_at == DOCUMENT_TIME
    assert loader.stale()


def test_empty_table_fetches_and_writes_cache(tmp_path):
    source = FakeSource(DOCUMENT)
    table, loader = make_loader(tmp_path, source=source)
    loader.ensure_fresh()
    assert source.calls == 1
    assert table.get("USD", "GBP") == Decimal("0.8")
    assert (tmp_path / "latest.json").read_text(encoding="utf-8") == DOCUMENT


def test_remote_without_cache_path():
    source = FakeSource(DOCUMENT)
    table, loader = make_loader(source=source)
    loader.ensure_fresh()
    loader.ensure_fresh()
    assert source.calls == 1
    assert table.get("USD", "EUR") == Decimal("0.9")


def test_fresh_cache_skips_remote(tmp_path, clock):
    source = FakeSource(NEWER_DOCUMENT)
    table, loader = make_loader(
        tmp_path, source=source, max_age=timedelta(hours=1), clock=clock, cached=DOCUMENT
    )
    loader.ensure_fresh()
    assert source.calls == 0
    assert table.get("USD", "EUR") == Decimal("0.9")


def test_stale_cache_is_replaced_from_remote(tmp_path, clock):
    clock.advance(hours=2)
    source = FakeSource(NEWER_DOCUMENT)
    table, loader = make_loader(
        tmp_path, source=source, max_age=timedelta(hours=1), clock=clock, cached=DOCUMENT
    )
    loader.ensure_fresh()
    assert source.calls == 1
    assert table.get("USD", "EUR") == Decimal("0.95")
    assert table.get("USD", "JPY") == Decimal("110")
    assert (tmp_path / "latest.json").read_text(encoding="utf-8") == NEWER_DOCUMENT


def test_refetch_only_once_stale(clock):
    source = FakeSource(DOCUMENT, NEWER_DOCUMENT)
    table, loader = make_loader(source=source, max_age=timedelta(hours=1), clock=clock)
    loader.ensure_fresh()
    clock.advance(minutes=30)
    loader.ensure_fresh()
    assert source.calls == 1
    clock.advance(hours=1)
    loader.ensure_fresh()
    assert source.calls == 2
    assert table.get("USD", "EUR") == Decimal("0.95")


def test_fetch_failure_keeps_last_good_state(tmp_path, clock):
    clock.advance(hours=2)
    source = FakeSource(HttpError("HTTP 503"))
    table, loader = make_loader(
        tmp_path, source=source, max_age=timedelta(hours=1), clock=clock, cached=DOCUMENT
    )
    with pytest.raises(HttpError):
        loader.ensure_fresh()
    assert table.get("USD", "EUR") == Decimal("0.9")
    assert table.last_updated_at == DOCUMENT_TIME


def test_malformed_remote_document_is_not_cached(tmp_path, clock):
    clock.advance(hours=2)
    source = FakeSource('{"timestamp": 1, "rates": {"EUR": "oops"}}')
    table, loader = make_loader(
        tmp_path, source=source, max_age=timedelta(hours=1), clock=clock, cached=DOCUMENT
    )
    with pytest.raises(DocumentParseError):
        loader.ensure_fresh()
    assert table.get("USD", "EUR") == Decimal("0.9")
    assert (tmp_path / "latest.json").read_text(encoding="utf-8") == DOCUMENT


def test_malformed_cache_file_raises(tmp_path):
    table, loader = make_loader(tmp_path, cached="{not json")
    with pytest.raises(DocumentParseError):
        loader.ensure_fresh()
    assert table.is_empty()


def test_forced_reload_ignores_staleness():
    source = FakeSource(DOCUMENT, NEWER_DOCUMENT)
    table, loader = make_loader(source=source)
    loader.ensure_fresh()
    loader.load_from_api()
    assert source.calls == 2
    assert table.get("USD", "EUR") == Decimal("0.95")


def test_concurrent_callers_share_one_refresh():
    class SlowSource(FakeSource):
        def fetch(self):
            time.sleep(0.05)
            return super().fetch()

    source = SlowSource(DOCUMENT)
    table, loader = make_loader(source=source)
    threads = [threading.Thread(target=loader.ensure_fresh) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)
    assert source.calls == 1
    assert table.get("USD", "EUR") == Decimal("0.9")
