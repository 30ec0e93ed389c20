"""
chainlog - configuration
"""
from functools import lru_cache
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide defaults read from the environment"""

    # Service identity
    SERVICE_NAME: str = "Nest"

    # Rendering
    NO_COLOR: bool = False

    # Diagnostics of the library itself
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("NO_COLOR", mode="before")
    @classmethod
    def _parse_no_color(cls, value):
        # Any non-empty value turns colors off
        if isinstance(value, str):
            return value != ""
        return bool(value)


@lru_cache()
def get_settings() -> Settings:
    """Settings singleton"""
    return Settings()
