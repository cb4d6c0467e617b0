"""Tenant time zone boundary engine: local days, range presets, date keys."""

from tenant_clock.boundaries import (
    end_of_local_date_utc,
    end_of_local_day_utc,
    local_day_bounds,
    start_of_local_date_utc,
    start_of_local_day_utc,
)
from tenant_clock.civil import CivilDateTime, to_local_civil, to_local_datetime, to_utc_instant
from tenant_clock.contracts import CustomRange, DateRange
from tenant_clock.errors import (
    InvalidInstantError,
    InvalidRangeError,
    InvalidTimeZoneError,
    TenantClockError,
)
from tenant_clock.formatting import (
    DEFAULT_DISPLAY_PATTERN,
    format_local,
    format_range,
    local_date_key,
)
from tenant_clock.ranges import (
    FALLBACK_PRESET,
    RANGE_PRESETS,
    RangePreset,
    lookback_days,
    normalize_range_preset,
    resolve_range,
)
from tenant_clock.tenant import Tenant, TenantClock
from tenant_clock.time_utils import coerce_instant, from_epoch_ms, iso_z, to_epoch_ms
from tenant_clock.zones import is_valid_zone, load_zone

__all__ = [
    "CivilDateTime",
    "CustomRange",
    "DEFAULT_DISPLAY_PATTERN",
    "DateRange",
    "FALLBACK_PRESET",
    "InvalidInstantError",
    "InvalidRangeError",
    "InvalidTimeZoneError",
    "RANGE_PRESETS",
    "RangePreset",
    "Tenant",
    "TenantClock",
    "TenantClockError",
    "coerce_instant",
    "end_of_local_date_utc",
    "end_of_local_day_utc",
    "format_local",
    "format_range",
    "from_epoch_ms",
    "is_valid_zone",
    "iso_z",
    "load_zone",
    "local_date_key",
    "local_day_bounds",
    "lookback_days",
    "normalize_range_preset",
    "resolve_range",
    "start_of_local_date_utc",
    "start_of_local_day_utc",
    "to_epoch_ms",
    "to_local_civil",
    "to_local_datetime",
    "to_utc_instant",
]
