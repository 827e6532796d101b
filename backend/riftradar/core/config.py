"""Configuration settings for the RiftRadar gateway."""

from __future__ import annotations

from typing import List, Literal, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Riot API Configuration
    riot_api_key: Optional[str] = Field(default=None)
    riot_user_agent: str = Field(default="RiftRadar-Gateway/1.0")

    # HTTP client timeouts (seconds)
    http_connect_timeout: float = Field(default=5.0)
    http_read_timeout: float = Field(default=10.0)
    http_pool_timeout: float = Field(default=10.0)

    # Rate limiting
    rate_limiting_enabled: bool = Field(default=True)
    rate_limit_backend: Literal["redis", "memory"] = Field(default="redis")
    rate_limit_per_subject: bool = Field(default=True)
    rate_limit_short_requests: int = Field(default=20)
    rate_limit_short_window: float = Field(default=1.0)
    rate_limit_long_requests: int = Field(default=100)
    rate_limit_long_window: float = Field(default=120.0)
    rate_limit_prefix: str = Field(default="ratelimit:riotapi")

    # Inbound throttling of the gateway's own endpoints (slowapi syntax)
    inbound_rate_limiting_enabled: bool = Field(default=True)
    inbound_rate_limit: str = Field(default="120/minute")

    # Counter store
    redis_url: Optional[str] = Field(default=None)

    # Static data (Data Dragon / Community Dragon)
    ddragon_locale: str = Field(default="en_US")
    ddragon_fallback_patch: str = Field(default="14.10.1")

    # Application Configuration
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # CORS Configuration
    cors_origins: str = Field(default="http://localhost:3000,http://127.0.0.1:3000")

    @field_validator("riot_api_key")
    @classmethod
    def blank_key_is_missing(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty or whitespace-only key as not configured."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("rate_limit_short_requests", "rate_limit_long_requests")
    @classmethod
    def positive_budget(cls, v: int) -> int:
        """Rate limit budgets must admit at least one request."""
        if v < 1:
            raise ValueError("Rate limit budget must be at least 1 request")
        return v

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [
            origin.strip() for origin in self.cors_origins.split(",") if origin.strip()
        ]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


# Create a global settings instance lazily
settings: Settings | None = None


def get_global_settings() -> Settings:
    """Get or create the global settings instance."""
    global settings
    if settings is None:
        settings = get_settings()
    return settings


def get_riot_api_key() -> Optional[str]:
    """
    Get the Riot API key from the environment.

    Returns None when no key is configured; callers decide whether that is
    fatal (the upstream client raises ConfigurationMissingError per call).
    """
    return get_global_settings().riot_api_key
