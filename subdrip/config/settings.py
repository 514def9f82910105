"""
Configuration Management for Subdrip

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: Settings describe the host, not the core.
Display preferences (currency, dark mode, notifications) are read here for
the presentation layer; the core only ever receives the currency code as an
explicit argument.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from subdrip.services.currency import SUPPORTED_CURRENCIES


class DisplaySettings(BaseSettings):
    """User display preferences."""

    model_config = SettingsConfigDict(
        env_prefix="SUBDRIP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    currency_code: str = Field(
        default="USD",
        description="Currency amounts are displayed in"
    )
    is_dark_mode: bool = Field(
        default=True,
        description="Dark display theme"
    )
    notifications_enabled: bool = Field(
        default=True,
        description="Payment reminders enabled"
    )

    @field_validator('currency_code')
    @classmethod
    def validate_currency_code(cls, v: str) -> str:
        """Only allow currencies the converter knows."""
        code = v.strip().upper()
        if code not in SUPPORTED_CURRENCIES:
            raise ValueError(
                f"Unsupported currency: {v}. Allowed: {', '.join(SUPPORTED_CURRENCIES)}"
            )
        return code


class StorageSettings(BaseSettings):
    """Where subscriptions are persisted."""

    model_config = SettingsConfigDict(
        env_prefix="SUBDRIP_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: Literal["memory", "json_file"] = Field(
        default="json_file",
        description="Storage backend"
    )
    path: str = Field(
        default="subdrip_data.json",
        description="JSON file used by the json_file backend"
    )
    key: str = Field(
        default="subdrip.subscriptions",
        min_length=1,
        description="Key the subscription list is stored under"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum log level"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Note: These are loaded lazily to allow partial configuration

    @property
    def display(self) -> DisplaySettings:
        return DisplaySettings()

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries for groups that failed.
    """
    results = {}

    settings = get_settings()

    for name in ("display", "storage", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
