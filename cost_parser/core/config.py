from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_env: str = "dev"
    log_level: str = "info"
    log_dir: Path = Path("logs")
    default_style: Literal["auto", "new", "old"] = "auto"
    customer_registry_path: Path | None = None

    @field_validator("default_style", mode="before")
    @classmethod
    def _lowercase_style(cls, value: str) -> str:
        """Accept NEW/Old/... from the environment."""

        return str(value).strip().lower()

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level


settings = Settings()
