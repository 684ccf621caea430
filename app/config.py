"""Application settings loaded from the environment and an optional .env file."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    APP_DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Root of the JSON document store; each collection gets a subdirectory.
    DATA_DIR: Path = BASE_DIR / "data"


settings = Settings()
