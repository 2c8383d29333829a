from __future__ import annotations

from functools import cache

from pydantic_settings import BaseSettings, SettingsConfigDict

DOLARHOY_URL = "https://dolarhoy.com/"
AMBITO_ECONOMIA_RSS_URL = "https://www.ambito.com/rss/pages/economia.xml"


class AppSettings(BaseSettings):
    api_key: str | None = None
    app_version: str = "1.0.0"

    quotes_url: str = DOLARHOY_URL
    news_url: str = AMBITO_ECONOMIA_RSS_URL

    http_timeout_seconds: float = 10.0
    http_max_retries: int = 3
    http_retry_delay_ms: int = 1000
    http_max_redirects: int = 5
    # dolarhoy.com has been served with broken certificate chains before.
    http_verify_tls: bool = False

    cache_ttl_seconds: int = 120

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@cache
def config() -> AppSettings:
    return AppSettings()
