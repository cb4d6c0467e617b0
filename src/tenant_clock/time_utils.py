"""Shared UTC instant helpers."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from tenant_clock.errors import InvalidInstantError

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

InstantLike = datetime | int | float | str


def utc_now() -> datetime:
    """Return current UTC time with millisecond precision.

    Only the CLI calls this; engine functions always take ``now`` explicitly.
    """
    now = datetime.now(UTC)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def iso_z(value: datetime) -> str:
    """Format a datetime as ISO-8601 with trailing Z in UTC."""
    normalized = value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)
    timespec = "milliseconds" if normalized.microsecond else "seconds"
    return normalized.isoformat(timespec=timespec).replace("+00:00", "Z")


def parse_iso_z(value: str) -> datetime | None:
    """Parse an ISO timestamp and normalize to UTC."""
    raw = value.strip()
    if not raw:
        return None
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def from_epoch_ms(value: int | float) -> datetime:
    """Return the UTC instant for epoch milliseconds."""
    try:
        return _EPOCH + timedelta(milliseconds=value)
    except (OverflowError, TypeError, ValueError) as exc:
        raise InvalidInstantError(f"epoch milliseconds out of range: {value!r}") from exc


def to_epoch_ms(value: datetime) -> int:
    """Return whole epoch milliseconds for an instant."""
    delta = coerce_instant(value) - _EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


def coerce_instant(value: InstantLike) -> datetime:
    """Normalize an instant-like value to an aware UTC datetime.

    Accepts aware datetimes, naive datetimes (read as UTC), epoch milliseconds
    and ISO-8601 strings.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
    if isinstance(value, bool):
        raise InvalidInstantError(f"invalid instant: {value!r}")
    if isinstance(value, (int, float)):
        return from_epoch_ms(value)
    if isinstance(value, str):
        parsed = parse_iso_z(value)
        if parsed is None:
            raise InvalidInstantError(f"invalid instant: {value!r}")
        return parsed
    raise InvalidInstantError(f"unsupported instant type: {type(value).__name__}")
