"""Application configuration via environment variables."""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    app_name: str = Field("Patent Content Service", description="Human-readable service name.")
    debug: bool = Field(False, description="Enable FastAPI debug mode.")
    log_level: str = Field("INFO", description="Root logging level.")

    api_v1_prefix: str = Field("/api", description="Root prefix for versioned API routes.")
    frontend_origin: Optional[HttpUrl] = Field(
        None, description="Optional frontend origin allowed for CORS policies."
    )

    serpapi_api_key: Optional[str] = Field(
        None, description="API key used for SerpApi Google Patents queries."
    )
    serpapi_base_url: str = Field(
        "https://serpapi.com", description="Base URL of the SerpApi service."
    )
    patents_base_url: str = Field(
        "https://patents.google.com",
        description="Base URL for fetching patent document pages.",
    )
    request_timeout_seconds: float = Field(
        30.0, description="Timeout applied to every upstream HTTP call."
    )
    default_language: str = Field(
        "en", description="Language segment appended to canonical patent keys."
    )

    allowed_hosts: List[str] = Field(
        default_factory=lambda: ["*"], description="Hosts allowed to access the service."
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


@lru_cache()
def get_settings() -> Settings:
    """Provide a cached Settings instance."""

    return Settings()
