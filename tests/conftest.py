from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from oxr_rates.services.rates.table import RateTable

DOCUMENT = '{"timestamp":1000000000,"rates":{"EUR":0.9,"GBP":0.8}}'
NEWER_DOCUMENT = '{"timestamp":1000086400,"rates":{"EUR":0.95,"GBP":0.85,"JPY":110}}'
DOCUMENT_TIME = datetime.fromtimestamp(1000000000, tz=timezone.utc)


class FakeSource:
    """Serves queued documents in order (the last one repeats); counts fetches."""

    def __init__(self, *documents):
        self.documents = list(documents) or [DOCUMENT]
        self.calls = 0
        self.api_url = "https://example.test/latest.json?app_id=secret"

    def fetch(self) -> str:
        self.calls += 1
        item = self.documents[min(self.calls, len(self.documents)) - 1]
        if isinstance(item, Exception):
            raise item
        return item


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(DOCUMENT_TIME + timedelta(minutes=5))


@pytest.fixture
def loaded_table():
    table = RateTable()
    table.reset("USD", {"EUR": Decimal("0.9"), "GBP": Decimal("0.8")}, DOCUMENT_TIME)
    return table
