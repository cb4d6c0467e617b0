"""Application settings for tenant-clock."""

import os

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tenant_clock.formatting import DEFAULT_DISPLAY_PATTERN
from tenant_clock.ranges import normalize_range_preset
from tenant_clock.runtime_config import current_runtime_config
from tenant_clock.zones import DEFAULT_TENANT_ZONE, load_zone


class Settings(BaseSettings):
    """Display and default-range settings for dashboard consumers."""

    model_config = SettingsConfigDict(
        env_prefix="TENANT_CLOCK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    display_pattern: str = DEFAULT_DISPLAY_PATTERN
    default_preset: str = "last30days"
    default_timezone: str = Field(default=DEFAULT_TENANT_ZONE)
    log_level: str = "WARNING"

    @field_validator("default_preset")
    @classmethod
    def _normalize_preset(cls, value: str) -> str:
        return normalize_range_preset(value)

    @field_validator("default_timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        return load_zone(value).key

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper() or "WARNING"

    @classmethod
    def from_runtime(cls) -> "Settings":
        """Construct settings from runtime config; TENANT_CLOCK_* env values win."""
        runtime = current_runtime_config()
        values = {
            "display_pattern": runtime.display_pattern,
            "default_preset": runtime.default_preset,
            "default_timezone": runtime.default_timezone,
            "log_level": runtime.log_level,
        }
        explicit = {
            key: value
            for key, value in values.items()
            if not os.environ.get(f"TENANT_CLOCK_{key.upper()}", "").strip()
        }
        return cls(**explicit)
