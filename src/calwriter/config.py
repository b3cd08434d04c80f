# src/calwriter/config.py
"""
Centralized configuration for calwriter.
- Loads environment variables (CALWRITER_*, or a .env file in dev) using Pydantic BaseSettings
- Provides typed settings with sane defaults
- Exposes a singleton `settings` for convenience, plus `get_settings()` for DI
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from calwriter.ical.value import Value


APP_NAME = "calwriter"
APP_VERSION = "0.1.0"
DEFAULT_PRODUCT_IDENTIFIER = f"-//{APP_NAME}//{APP_NAME} {APP_VERSION}//EN"


class Settings(BaseSettings):
    """Typed, validated library configuration.

    Usage:
        from calwriter.config import settings
        prodid = settings.product_identifier
    """

    model_config = SettingsConfigDict(
        env_prefix="CALWRITER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- serialization ---
    product_identifier: str = Field(
        default=DEFAULT_PRODUCT_IDENTIFIER,
        description="PRODID used by calendars that do not set their own",
    )
    mark_all_day_start: bool = Field(
        default=False,
        description="Emit DTSTART;VALUE=DATE for all-day events instead of a bare DTSTART",
    )

    # --- logging ---
    log_level: str = Field(default="WARNING")
    log_json: bool = Field(default=False, description="Emit logs as JSON if True, pretty if False")
    log_dir: Optional[Path] = Field(default=None, description="Enables the rotating file handler when set")
    log_file: str = Field(default="calwriter.log")
    log_max_bytes: int = Field(default=2 * 1024 * 1024)  # 2MB
    log_backup_count: int = Field(default=3)
    redact_emails_in_logs: bool = Field(default=True)

    @property
    def log_path(self) -> Optional[Path]:
        if self.log_dir is None:
            return None
        return self.log_dir / self.log_file

    @field_validator("log_dir")
    @classmethod
    def _expand_user(cls, v: Optional[Path]) -> Optional[Path]:
        if v is None:
            return None
        return Path(os.path.expanduser(str(v)))

    @field_validator("product_identifier")
    @classmethod
    def _valid_value(cls, v: str) -> str:
        # InvalidValueError is a ValueError, so pydantic reports it as a validation error
        return Value(v).as_str()

    def ensure_dirs(self) -> None:
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)


# Singleton-ish settings instance for convenience
settings = Settings()


def get_settings() -> Settings:
    """Factory to retrieve settings (handy for dependency injection in tests)."""
    return settings
