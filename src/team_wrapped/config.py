"""Application configuration."""

import os
from datetime import datetime

from pydantic_settings import BaseSettings, SettingsConfigDict

from team_wrapped.services.window import GameWindow

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    session_secret: str
    admin_token: str
    session_ttl_days: int = 7
    game_start_at: datetime | None = None
    game_end_at: datetime | None = None
    photo_bucket: str = "photos"
    max_photo_bytes: int = 5 * 1024 * 1024
    require_full_registration: bool = True
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def secure_cookies(self) -> bool:
        return self.environment == "production"


def build_game_window(settings: Settings) -> GameWindow:
    """Build the game availability window from configured bounds."""
    return GameWindow(start=settings.game_start_at, end=settings.game_end_at)
