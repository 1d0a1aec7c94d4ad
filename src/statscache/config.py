"""Configuration module using Pydantic Settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from statscache.errors import ConfigError

# Plausible custom-prop-values report for "Artist Click" goals, top 100 by visitors
API_URL = (
    "https://plausible.canine.tools/api/stats/artistgrid.cx/custom-prop-values/name/"
    "?period=all&date=2025-11-07"
    "&filters=%5B%5B%22is%22%2C%22event%3Agoal%22%2C%5B%22Artist%20Click%22%5D%5D%5D"
    "&with_imported=true&detailed=true"
    "&order_by=%5B%5B%22visitors%22%2C%22desc%22%5D%5D&limit=100&page=1"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Upstream credential
    bearer_token: str | None = None

    # Cache
    cache_ttl_seconds: float = 600.0  # 10 minutes

    # HTTP Client
    upstream_timeout: float = 30.0

    # Logging
    log_level: str = "INFO"

    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = 3000

    @property
    def authorization_header(self) -> str:
        """Value of the Authorization header sent upstream."""
        return f"Bearer {self.bearer_token}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def load_settings() -> Settings:
    """
    Get settings and check that the bearer token is present.

    Returns:
        Validated Settings instance

    Raises:
        ConfigError: If BEARER_TOKEN is unset or blank
    """
    settings = get_settings()
    if not settings.bearer_token or not settings.bearer_token.strip():
        raise ConfigError("BEARER_TOKEN must be set in environment or .env file")
    return settings
