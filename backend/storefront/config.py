"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
    - Payment and push credentials default to empty; their routes fail with a
      500 envelope until configured
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://storefront:storefront@db:5432/storefront"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    # Local development only; production schema is managed by alembic
    database_create_tables: bool = False

    # API
    cors_origins: list[str] = ["*"]
    public_base_url: str = "http://localhost:8000"

    # Change feed: per-observer queue capacity before events are dropped
    broadcast_queue_size: int = 256

    # Stripe
    stripe_secret_key: str = ""
    stripe_publishable_key: str = ""
    stripe_api_version: str = "2023-10-16"
    stripe_base_url: str = "https://api.stripe.com/v1"

    # Razorpay
    razorpay_key: str = ""

    # OneSignal
    onesignal_app_id: str = ""
    onesignal_rest_api_key: str = ""
    onesignal_base_url: str = "https://onesignal.com/api/v1"

    external_timeout_seconds: float = 15.0

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
