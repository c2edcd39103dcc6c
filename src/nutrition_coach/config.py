"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    telegram_bot_token: str | None = None
    admin_chat_id: int | None = None
    openfoodfacts_enabled: bool = True
    openfoodfacts_base_url: str = "https://world.openfoodfacts.org"
    meal_plan_generator_url: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def error_reports_enabled(self) -> bool:
        """Return True when admin chat reporting is fully configured."""
        return bool(self.telegram_bot_token) and self.admin_chat_id is not None
