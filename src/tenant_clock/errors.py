"""Error types for tenant clock operations."""

from __future__ import annotations


class TenantClockError(ValueError):
    """Base error for tenant clock operations."""


class InvalidTimeZoneError(TenantClockError):
    """Raised when a time zone id is not in the IANA database."""

    def __init__(self, tz_name: object, reason: str = "") -> None:
        self.tz_name = tz_name
        message = f"invalid time zone: {tz_name!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidInstantError(TenantClockError):
    """Raised when an instant value cannot be interpreted."""


class InvalidRangeError(TenantClockError):
    """Raised when a date range would end before it starts."""


class CLIError(TenantClockError):
    """User-facing CLI error for tenant-clock commands."""
