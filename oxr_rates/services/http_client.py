from __future__ import annotations

"""Minimal HTTP GET helper for rate documents.

Single attempt with a bounded timeout; callers decide whether to try again.
Query parameters may carry credentials, so only the bare URL is logged.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from oxr_rates.services.rates.exceptions import DataAcquisitionFailure

logger = logging.getLogger("oxr_rates.http")


class HttpError(DataAcquisitionFailure):
    pass


def get_text(
    url: str,
    *,
    params: Optional[Dict[str, Any]] = None,
    timeout: float = 10.0,
    client: Optional[httpx.Client] = None,
) -> str:
    try:
        if client is not None:
            resp = client.get(url, params=params, timeout=timeout)
        else:
            resp = httpx.get(url, params=params, timeout=timeout)
        resp.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise HttpError(f"HTTP {e.response.status_code} for {url}") from e
    except httpx.HTTPError as e:
        raise HttpError(f"Failed to fetch {url}: {e.__class__.__name__}") from e
    logger.debug("fetched %s (%d bytes)", url, len(resp.content))
    return resp.text
