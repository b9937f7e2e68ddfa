from __future__ import annotations

"""In-memory rate table guarded by a reader-writer lock.

Keys are ordered (from, to) pairs. Reverse and cross pairs are never added
implicitly; the resolver derives and stores them on demand.
"""
import threading
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterator, Mapping, Optional, Tuple

Pair = Tuple[str, str]


class ReadWriteLock:
    """Many readers or a single writer. Writers are preferred once waiting."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            while self._writer or self._readers:
                self._cond.wait()
            self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class RateTable:
    def __init__(self):
        self._lock = ReadWriteLock()
        self._rates: Dict[Pair, Decimal] = {}
        self._last_updated_at: Optional[datetime] = None
        self._generation = 0

    @property
    def generation(self) -> int:
        """Bumped by every reset; derived entries are tagged against it."""
        with self._lock.read():
            return self._generation

    @property
    def last_updated_at(self) -> Optional[datetime]:
        with self._lock.read():
            return self._last_updated_at

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._rates)

    def is_empty(self) -> bool:
        return len(self) == 0

    def get(self, from_currency: str, to_currency: str) -> Optional[Decimal]:
        with self._lock.read():
            return self._rates.get((from_currency, to_currency))

    def put(self, from_currency: str, to_currency: str, rate: Decimal) -> None:
        with self._lock.write():
            self._rates[(from_currency, to_currency)] = rate

    def put_if_generation(
        self, generation: int, from_currency: str, to_currency: str, rate: Decimal
    ) -> bool:
        """Store rate unless a reset happened since generation was read."""
        with self._lock.write():
            if generation != self._generation:
                return False
            self._rates[(from_currency, to_currency)] = rate
            return True

    def reset(
        self, base: str, entries: Mapping[str, Decimal], timestamp: datetime
    ) -> None:
        """Replace every pair with (base -> code) entries and stamp the table.

        The replacement mapping is built before the lock is taken, so a bad
        entry leaves the current contents untouched.
        """
        fresh: Dict[Pair, Decimal] = {
            (base, code): Decimal(rate) for code, rate in entries.items()
        }
        with self._lock.write():
            self._rates = fresh
            self._last_updated_at = timestamp
            self._generation += 1

    def snapshot(self) -> Dict[Pair, Decimal]:
        with self._lock.read():
            return dict(self._rates)
