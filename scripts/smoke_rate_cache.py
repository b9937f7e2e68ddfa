"""Smoke script for the rates store cache / refresh cycle.

Demonstrates:
 1. First query loads the table (cache file if present, else remote).
 2. Repeated queries reuse the table; derived pairs are memoized.
 3. Forced refresh reloads from the remote source (needs OXR_APP_ID).

Reads the same OXR_* environment variables as the service. NOTE: this is a
lightweight diagnostic and not a formal test.
"""

from pprint import pprint

from oxr_rates.core.config import get_settings
from oxr_rates.services.money import decimal_to_str
from oxr_rates.services.rates.store import build_rates_store

PAIRS = (("USD", "EUR"), ("EUR", "USD"), ("EUR", "GBP"))


def run():
    settings = get_settings()
    store = build_rates_store(settings)
    out = {"initial": {}, "second": {}, "forced_refresh": None}

    for f, t in PAIRS:
        out["initial"][f"{f}->{t}"] = decimal_to_str(store.get_rate(f, t))
    out["pairs_after_initial"] = len(store)
    out["last_updated_at"] = str(store.last_updated_at)

    for f, t in PAIRS:
        out["second"][f"{f}->{t}"] = decimal_to_str(store.get_rate(f, t))
    out["pairs_after_second"] = len(store)

    if store.remote_enabled:
        store.refresh()
        out["forced_refresh"] = {
            "pairs": len(store),
            "last_updated_at": str(store.last_updated_at),
        }

    pprint(out)


if __name__ == "__main__":
    run()
