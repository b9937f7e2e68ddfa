from __future__ import annotations

"""Engine configuration and collaborator interfaces.

The resolver and loader depend on these protocols, not on concrete classes,
so tests and alternative sources can be plugged in.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Mapping, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from oxr_rates.core.config import Settings


@dataclass(frozen=True)
class RatesStoreConfig:
    app_id: Optional[str] = None
    source: str = "USD"
    cache_path: Optional[Path] = None
    max_age: Optional[timedelta] = None

    @classmethod
    def from_settings(cls, settings: "Settings") -> "RatesStoreConfig":
        max_age = None
        if settings.max_age_seconds is not None:
            max_age = timedelta(seconds=settings.max_age_seconds)
        return cls(
            app_id=settings.app_id,
            source=settings.source,
            cache_path=settings.cache_path,
            max_age=max_age,
        )


class RateLookupTable(Protocol):
    def is_empty(self) -> bool: ...

    def get(self, from_currency: str, to_currency: str) -> Optional[Decimal]: ...

    def put(self, from_currency: str, to_currency: str, rate: Decimal) -> None: ...

    def put_if_generation(
        self, generation: int, from_currency: str, to_currency: str, rate: Decimal
    ) -> bool: ...

    @property
    def generation(self) -> int: ...

    def reset(
        self, base: str, entries: Mapping[str, Decimal], timestamp: datetime
    ) -> None: ...

    @property
    def last_updated_at(self) -> Optional[datetime]: ...


class DocumentSource(Protocol):
    def fetch(self) -> str:
        """Return the raw text of the latest rates document."""
        ...


class SupportsEnsureFresh(Protocol):
    def ensure_fresh(self) -> None: ...
