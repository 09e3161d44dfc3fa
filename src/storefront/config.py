"""Storefront application settings.

Loaded from environment variables (or a ``.env`` file) with pydantic-settings.
Persistence is configured separately by Protean.
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "dev-secret-change-in-production"

LOCAL_ENVIRONMENTS = {"", "local", "dev", "development", "test"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # App
    app_name: str = "Storefront"
    app_env: str = "development"
    store_name: str = "Bakery Boutique"
    cors_origins: list[str] = ["*"]

    # Sessions
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    session_token_ttl_days: int = 30
    password_hash_rounds: int = 12

    # One-time codes
    otp_ttl_minutes: int = 10
    expose_dev_otp: bool = False

    # Orders
    default_delivery_fee: float = 5.0
    recent_orders_limit: int = 5

    # Notifications
    email_adapter: str = "fake"
    sms_adapter: str = "fake"
    sendgrid_api_key: str = ""
    email_from: str = "orders@storefront.local"

    @property
    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    @property
    def is_local(self) -> bool:
        return self.app_env.strip().lower() in LOCAL_ENVIRONMENTS

    @model_validator(mode="after")
    def _require_real_secret_outside_local(self):
        if not self.is_local and self.jwt_secret == DEFAULT_JWT_SECRET:
            raise ValueError("JWT_SECRET must be set outside local environments")
        if self.email_adapter == "sendgrid" and not self.sendgrid_api_key:
            raise ValueError("SENDGRID_API_KEY is required when EMAIL_ADAPTER=sendgrid")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
