from __future__ import annotations
from pydantic import BaseModel, Field, field_validator
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional


class RatesDocument(BaseModel):
    """Latest-rates document: 1 unit of base = rates[code] units of code."""

    timestamp: int
    rates: Dict[str, Decimal]
    base: Optional[str] = None

    @field_validator("timestamp", mode="before")
    @classmethod
    def numeric_timestamp(cls, v: Any) -> int:
        if isinstance(v, bool) or not isinstance(v, (int, Decimal)):
            raise ValueError("timestamp must be a number")
        if isinstance(v, Decimal):
            if not v.is_finite() or v != v.to_integral_value():
                raise ValueError("timestamp must be a whole number of seconds")
            v = int(v)
        return v

    @field_validator("rates", mode="before")
    @classmethod
    def decimal_rates(cls, v: Any) -> Dict[str, Decimal]:
        if not isinstance(v, dict):
            raise ValueError("rates must be an object")
        parsed: Dict[str, Decimal] = {}
        for code, raw in v.items():
            # bool is an int subclass; floats only appear for NaN/Infinity
            if isinstance(raw, (bool, float)) or raw is None:
                raise ValueError(f"rate for {code} is not a number: {raw!r}")
            try:
                rate = Decimal(raw)
            except (ArithmeticError, TypeError, ValueError):
                raise ValueError(f"rate for {code} is not a number: {raw!r}")
            if not rate.is_finite() or rate <= 0:
                raise ValueError(f"rate for {code} must be positive: {raw!r}")
            parsed[code] = rate
        return parsed

    @property
    def updated_at(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc)


class RateQuote(BaseModel):
    from_currency: str = Field(..., alias="from")
    to_currency: str = Field(..., alias="to")
    rate: str

    model_config = {"populate_by_name": True}


class RatesStatus(BaseModel):
    base: str
    loaded: bool
    stale: bool
    last_updated_at: Optional[datetime] = None
    pairs: int
    remote_enabled: bool
    cache_path: Optional[str] = None


class RatesListing(BaseModel):
    base: str
    last_updated_at: Optional[datetime] = None
    rates: List[RateQuote]


class ConversionOut(BaseModel):
    amount: str
    from_currency: str = Field(..., alias="from")
    to_currency: str = Field(..., alias="to")
    rate: str
    converted: str

    model_config = {"populate_by_name": True}
