"""UTC boundaries of a tenant's local calendar day."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta

from tenant_clock.civil import CivilDateTime, to_local_civil, to_utc_instant
from tenant_clock.contracts import DateRange
from tenant_clock.time_utils import InstantLike

START_OF_DAY = time(0, 0, 0, 0)
LAST_TICK = timedelta(milliseconds=1)


def start_of_local_date_utc(day: date, tz_name: str) -> datetime:
    """Return the UTC instant of local midnight opening ``day``."""
    return to_utc_instant(CivilDateTime.at(day, START_OF_DAY, tz_name))


def end_of_local_date_utc(day: date, tz_name: str) -> datetime:
    """Return the last UTC millisecond before the local midnight that closes ``day``.

    Derived from the next day's start so a repeated final hour stays inside
    the day.
    """
    return start_of_local_date_utc(day + timedelta(days=1), tz_name) - LAST_TICK


def start_of_local_day_utc(instant: InstantLike, tz_name: str) -> datetime:
    """Return local midnight of ``instant``'s local day, as UTC."""
    return start_of_local_date_utc(to_local_civil(instant, tz_name).date(), tz_name)


def end_of_local_day_utc(instant: InstantLike, tz_name: str) -> datetime:
    """Return the last local millisecond of ``instant``'s local day, as UTC."""
    return end_of_local_date_utc(to_local_civil(instant, tz_name).date(), tz_name)


def local_day_bounds(instant: InstantLike, tz_name: str) -> DateRange:
    """Return both boundaries of one local day from a single anchor."""
    local_day = to_local_civil(instant, tz_name).date()
    return DateRange(
        start=start_of_local_date_utc(local_day, tz_name),
        end=end_of_local_date_utc(local_day, tz_name),
    )
