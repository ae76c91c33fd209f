"""Application settings and configuration."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Apify configuration
    APIFY_TOKEN: str
    APIFY_ACTOR_ID: str = "apricot_blackberry/saas-pricing-intelligence"
    APIFY_BASE_URL: str = "https://api.apify.com"

    # Remote run configuration
    REQUEST_TIMEOUT: int = 90
    RUN_WAIT_SECS: int = 60

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = DEFAULT_LOG_FORMAT

    @field_validator("APIFY_TOKEN")
    @classmethod
    def _token_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("APIFY_TOKEN must not be empty")
        return value


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
