"""Application settings, read from the environment (or a local ``.env`` file)."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Relational store; the in-memory provider is used when unset
    database_url: str | None = None

    jwt_secret: str = Field(min_length=8)
    access_token_minutes: int = Field(default=15, gt=0)
    refresh_token_days: int = Field(default=7, gt=0)
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)
    cookie_secure: bool = False

    # Allowed client origin, also the base of checkout redirect URLs
    frontend_url: str

    payment_gateway: str = Field(default="fake", pattern="^(fake|stripe)$")
    stripe_secret_key: str = ""
    stripe_webhook_secret: str = ""

    vat_rate: float = Field(default=0.2, ge=0)
    currency: str = Field(default="GBP", min_length=3, max_length=3)

    @property
    def refresh_token_max_age(self) -> int:
        """Refresh cookie lifetime in seconds."""
        return self.refresh_token_days * 24 * 60 * 60


@lru_cache
def get_settings() -> Settings:
    return Settings()
