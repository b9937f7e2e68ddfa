from __future__ import annotations

"""Parsing of latest-rates JSON documents.

Rates are decoded straight to Decimal (json parse_float hook) so the literal
digits of the source text survive; a float never appears between the
document and the rate table.
"""
import json
from decimal import Decimal
from typing import Union

from pydantic import ValidationError

from oxr_rates.models.rates import RatesDocument
from .exceptions import DocumentParseError


def parse_rates_document(text: Union[str, bytes]) -> RatesDocument:
    try:
        data = json.loads(text, parse_float=Decimal)
    except (ValueError, UnicodeDecodeError) as e:
        raise DocumentParseError(f"rates document is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise DocumentParseError("rates document must be a JSON object")
    try:
        document = RatesDocument.model_validate(data)
    except ValidationError as e:
        raise DocumentParseError(f"malformed rates document: {e}") from e
    try:
        document.updated_at
    except (OverflowError, OSError, ValueError) as e:
        raise DocumentParseError(
            f"timestamp out of range: {document.timestamp}"
        ) from e
    return document
