"""Application settings loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven configuration with sensible defaults."""

    content_root: Path = Field(default=Path("site"), alias="CONTENT_ROOT")
    content_base_url: str | None = Field(default=None, alias="CONTENT_BASE_URL")
    index_name: str = Field(default="posts.json", alias="INDEX_NAME")
    pages_dir: str = Field(default="pages", alias="PAGES_DIR")
    http_timeout_seconds: float = Field(default=10.0, alias="HTTP_TIMEOUT_SECONDS")
    date_format: str = Field(default="%Y. %m. %d", alias="DATE_FORMAT")
    log_level: str = Field(default="info", alias="LOG_LEVEL")
    metrics_enabled: bool = Field(default=True, alias="METRICS_ENABLED")
    version: str = Field(default="0.1.0", alias="POSTDECK_VERSION")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
    )

    @property
    def uses_http(self) -> bool:
        return bool(self.content_base_url)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()
