"""Local-time rendering and per-day grouping keys."""

from __future__ import annotations

from tenant_clock.civil import to_local_datetime
from tenant_clock.contracts import DateRange
from tenant_clock.time_utils import InstantLike

DEFAULT_DISPLAY_PATTERN = "%Y-%m-%d %H:%M:%S"
DATE_KEY_PATTERN = "%Y-%m-%d"


def format_local(
    instant: InstantLike,
    tz_name: str,
    pattern: str | None = DEFAULT_DISPLAY_PATTERN,
) -> str:
    """Render ``instant`` on the wall clock of ``tz_name`` with a strftime pattern."""
    local = to_local_datetime(instant, tz_name)
    return local.strftime(pattern or DEFAULT_DISPLAY_PATTERN)


def local_date_key(instant: InstantLike, tz_name: str) -> str:
    """Return the ``YYYY-MM-DD`` local date of ``instant`` in ``tz_name``."""
    return to_local_datetime(instant, tz_name).date().isoformat()


def format_range(
    date_range: DateRange,
    tz_name: str,
    pattern: str | None = DATE_KEY_PATTERN,
) -> str:
    start = format_local(date_range.start, tz_name, pattern or DATE_KEY_PATTERN)
    end = format_local(date_range.end, tz_name, pattern or DATE_KEY_PATTERN)
    return f"{start} to {end}"
