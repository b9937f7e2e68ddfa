from functools import lru_cache
from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variables are prefixed with OXR_ (e.g. OXR_APP_ID, OXR_SOURCE,
    OXR_CACHE_PATH, OXR_MAX_AGE_SECONDS). A .env file is read if present.
    """

    # Basic app metadata
    app_name: str = "OXR Rates Service"
    debug: bool = False
    version: str = "0.1.0"

    # Remote source; leaving app_id unset disables remote refresh
    app_id: Optional[str] = None
    source: str = "USD"
    api_base_url: str = "https://openexchangerates.org/api"
    http_timeout_seconds: float = 10.0

    # Local persistence & staleness (unset max age = never stale once loaded)
    cache_path: Optional[Path] = None
    max_age_seconds: Optional[int] = None

    model_config = SettingsConfigDict(
        env_prefix="OXR_", env_file=".env", case_sensitive=False, extra="ignore"
    )

    def init_post_load(self) -> None:
        """Normalize / validate fields and ensure the cache directory exists."""
        self.source = self.source.strip().upper()
        if not self.source:
            raise ValueError("source currency must not be empty")
        if self.max_age_seconds is not None and self.max_age_seconds <= 0:
            raise ValueError(
                f"max_age_seconds must be positive, got {self.max_age_seconds}"
            )
        if self.http_timeout_seconds <= 0:
            raise ValueError("http_timeout_seconds must be positive")
        if self.cache_path is not None:
            self.cache_path.parent.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
