from __future__ import annotations

"""Remote rates document sources.

OpenExchangeRatesSource reads the latest.json endpoint. The credential is
passed through unchanged as the app_id query parameter.
"""
from typing import Optional

import httpx

from oxr_rates.services.http_client import get_text

DEFAULT_API_BASE_URL = "https://openexchangerates.org/api"


class OpenExchangeRatesSource:
    def __init__(
        self,
        app_id: str,
        source: str = "USD",
        *,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ):
        self.app_id = app_id
        self.source = source
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    @property
    def latest_url(self) -> str:
        return f"{self.base_url}/latest.json"

    @property
    def api_url(self) -> str:
        return str(httpx.URL(self.latest_url, params=self._params()))

    def _params(self):
        return {"app_id": self.app_id, "base": self.source}

    def fetch(self) -> str:
        return get_text(
            self.latest_url,
            params=self._params(),
            timeout=self.timeout,
            client=self._client,
        )
