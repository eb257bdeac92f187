from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "Antragsbot"
    debug: bool = False

    # Discord
    discord_token: str = ""
    discord_guild_id: Optional[int] = None  # Sync commands to a single guild when set
    message_tts: bool = True

    # Record Service
    record_service_url: str = ""
    record_service_token: str = ""
    record_service_timeout: int = 30  # Seconds

    # Correlation Store
    database_path: str = "antragsbot.db"

    model_config = ConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
