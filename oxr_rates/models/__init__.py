"""Pydantic models for the rates service."""

from .rates import (
    RatesDocument,
    RateQuote,
    RatesStatus,
    RatesListing,
    ConversionOut,
)  # re-export

__all__ = [
    "RatesDocument",
    "RateQuote",
    "RatesStatus",
    "RatesListing",
    "ConversionOut",
]
