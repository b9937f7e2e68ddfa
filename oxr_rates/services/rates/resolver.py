from __future__ import annotations

"""Rate resolution against the base-anchored table.

Lookup order for rate(from, to), first match wins:
    1. exact pair in the table
    2. from is the base: the miss is definitive -> UnsupportedCurrency(to)
    3. inverse pair present: 1 / inverse
    4. to is the base: definitive miss -> UnsupportedCurrency(from)
    5. triangulate: rate(from, base) * rate(base, to)

Results of 3 and 5 are written back into the table (memoization on read), so
the next query for the same pair is a plain lookup. The write is tagged with
the table generation seen when the query started; if a reset landed in
between, the derived value is returned but not stored.

Each triangulation leg has the base on one side, so steps 2 and 4 end it
before it could triangulate again. MAX_TRIANGULATION_DEPTH states that bound
in code; no query through rate() reaches it.
"""
import logging
from decimal import Decimal

from .base import RateLookupTable, SupportsEnsureFresh
from .exceptions import UnsupportedCurrency

logger = logging.getLogger("oxr_rates.rates.resolver")

MAX_TRIANGULATION_DEPTH = 1


class RateResolver:
    def __init__(
        self, table: RateLookupTable, loader: SupportsEnsureFresh, base: str
    ):
        self._table = table
        self._loader = loader
        self.base = base

    def rate(self, from_currency: str, to_currency: str) -> Decimal:
        self._loader.ensure_fresh()
        generation = self._table.generation
        return self._resolve(from_currency, to_currency, generation, depth=0)

    def _resolve(
        self, from_currency: str, to_currency: str, generation: int, depth: int
    ) -> Decimal:
        found = self._table.get(from_currency, to_currency)
        if found is not None:
            return found
        if from_currency == self.base:
            raise UnsupportedCurrency(to_currency)

        inverse = self._table.get(to_currency, from_currency)
        if inverse is not None:
            derived = Decimal(1) / inverse
            self._remember(generation, from_currency, to_currency, derived, "inverse")
            return derived
        if to_currency == self.base:
            raise UnsupportedCurrency(from_currency)

        if depth >= MAX_TRIANGULATION_DEPTH:
            raise UnsupportedCurrency(from_currency)
        to_base = self._resolve(from_currency, self.base, generation, depth + 1)
        from_base = self._resolve(self.base, to_currency, generation, depth + 1)
        derived = to_base * from_base
        self._remember(generation, from_currency, to_currency, derived, "triangulated")
        return derived

    def _remember(
        self,
        generation: int,
        from_currency: str,
        to_currency: str,
        rate: Decimal,
        how: str,
    ) -> None:
        if self._table.put_if_generation(generation, from_currency, to_currency, rate):
            logger.debug("%s rate %s->%s = %s", how, from_currency, to_currency, rate)
        else:
            logger.debug(
                "%s rate %s->%s not stored, table reloaded meanwhile",
                how,
                from_currency,
                to_currency,
            )
