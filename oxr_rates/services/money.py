"""Money / rounding helpers.

Decimal in, Decimal out; rounding happens once, at the edge where an amount
is reported.
"""

from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP


def round_money(value: Decimal, places: int = 2) -> Decimal:
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def decimal_to_str(value: Decimal) -> str:
    """Plain notation, no exponent (1E+2 -> '100')."""
    return format(value, "f")
