"""Configuration loaded from the environment and an optional .env file."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Attributes:
        mw_api_key: Merriam-Webster API key; enables the online dictionary
        cache_dir: Directory holding the HTTP response cache
        dictionary_file: Word file used as the dictionary
        start_words_file: Root word list used instead of the bundled one
        log_file: Optional path of a log file written alongside the game
        log_level: Log level for the log file
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    mw_api_key: str | None = None
    cache_dir: str = ".cache/"
    dictionary_file: str | None = None
    start_words_file: str | None = None
    log_file: str | None = None
    log_level: str = "INFO"

    @field_validator("mw_api_key")
    @classmethod
    def strip_api_key(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        if not value:
            msg = "mw_api_key cannot be blank; unset it to play offline"
            raise ValueError(msg)
        return value

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
