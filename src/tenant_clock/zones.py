"""IANA zone lookup and the tenant zone catalog."""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from tenant_clock.errors import InvalidTimeZoneError
from tenant_clock.time_utils import InstantLike, coerce_instant

DEFAULT_TENANT_ZONE = "Australia/Perth"

TENANT_ZONE_CHOICES: tuple[tuple[str, str], ...] = (
    ("Australia/Perth", "Perth (AWST, UTC+8)"),
    ("Australia/Darwin", "Darwin (ACST, UTC+9:30, no DST)"),
    ("Australia/Adelaide", "Adelaide (ACST/ACDT, UTC+9:30/+10:30)"),
    ("Australia/Brisbane", "Brisbane (AEST, UTC+10, no DST)"),
    ("Australia/Sydney", "Sydney (AEST/AEDT, UTC+10/+11)"),
    ("Australia/Melbourne", "Melbourne (AEST/AEDT, UTC+10/+11)"),
    ("Australia/Hobart", "Hobart (AEST/AEDT, UTC+10/+11)"),
)


def load_zone(tz_name: str) -> ZoneInfo:
    """Resolve an IANA zone id, raising ``InvalidTimeZoneError`` when unknown."""
    if not isinstance(tz_name, str):
        raise InvalidTimeZoneError(tz_name, "zone id must be a string")
    cleaned = tz_name.strip()
    if not cleaned:
        raise InvalidTimeZoneError(tz_name, "zone id is empty")
    try:
        return ZoneInfo(cleaned)
    except ZoneInfoNotFoundError as exc:
        raise InvalidTimeZoneError(tz_name, "not found in tz database") from exc
    except (ValueError, OSError) as exc:
        # ZoneInfo rejects absolute/relative paths with ValueError and some
        # platforms surface unreadable tzdata entries as OSError.
        raise InvalidTimeZoneError(tz_name, "malformed zone id") from exc


def is_valid_zone(tz_name: str) -> bool:
    try:
        load_zone(tz_name)
    except InvalidTimeZoneError:
        return False
    return True


def zone_label(tz_name: str) -> str:
    """Return the display label for a catalog zone, else the zone id itself."""
    for value, label in TENANT_ZONE_CHOICES:
        if value == tz_name:
            return label
    return tz_name


def utc_offset_label(tz_name: str, at: InstantLike) -> str:
    """Return ``UTC+HH:MM`` for the offset in force in ``tz_name`` at ``at``."""
    zone = load_zone(tz_name)
    local = coerce_instant(at).astimezone(zone)
    return _format_offset(local)


def _format_offset(local: datetime) -> str:
    offset = local.utcoffset()
    total_minutes = int(offset.total_seconds() // 60) if offset is not None else 0
    sign = "+" if total_minutes >= 0 else "-"
    hours, minutes = divmod(abs(total_minutes), 60)
    if minutes:
        return f"UTC{sign}{hours}:{minutes:02d}"
    return f"UTC{sign}{hours}"
