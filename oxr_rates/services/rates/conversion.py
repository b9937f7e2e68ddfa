"""Amount conversion on top of the rates store.

Same-currency conversions use rate 1 but still check the code against the
base (which also loads the table), so an unknown code fails the same way a
rate query does.

Rounding (half-up, 2 places) is applied once, to the converted amount only;
the rate itself is reported at full precision.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

from oxr_rates.services.money import round_money


class SupportsRateLookup(Protocol):
    @property
    def source(self) -> str: ...

    def get_rate(self, from_currency: str, to_currency: str) -> Decimal: ...


@dataclass(frozen=True)
class ConversionResult:
    amount: Decimal
    from_currency: str
    to_currency: str
    rate: Decimal
    converted: Decimal


def convert_amount(
    amount: Decimal,
    from_currency: str,
    to_currency: str,
    rates: SupportsRateLookup,
) -> ConversionResult:
    if from_currency == to_currency:
        if from_currency != rates.source:
            rates.get_rate(from_currency, rates.source)
        rate = Decimal(1)
    else:
        rate = rates.get_rate(from_currency, to_currency)
    return ConversionResult(
        amount=amount,
        from_currency=from_currency,
        to_currency=to_currency,
        rate=rate,
        converted=round_money(amount * rate),
    )
