"""Instant to wall-clock conversion in a tenant time zone.

Gap and fold handling is delegated to ``zoneinfo`` (PEP 495):

- a wall time inside a spring-forward gap is read with the offset in force
  before the transition, which lands after the gap (skip-forward);
- a wall time inside a fall-back overlap with ``fold=0`` resolves to the
  earlier of the two instants, ``fold=1`` to the later one.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime, time

from tenant_clock.time_utils import InstantLike, coerce_instant
from tenant_clock.zones import load_zone


@dataclass(frozen=True)
class CivilDateTime:
    """Wall-clock reading of an instant in ``tz_name``."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    microsecond: int
    tz_name: str
    fold: int = 0

    @property
    def millisecond(self) -> int:
        return self.microsecond // 1000

    def date(self) -> date:
        return date(self.year, self.month, self.day)

    def time(self) -> time:
        return time(self.hour, self.minute, self.second, self.microsecond, fold=self.fold)

    def to_naive(self) -> datetime:
        return datetime.combine(self.date(), self.time())

    @classmethod
    def from_local(cls, local: datetime, tz_name: str) -> CivilDateTime:
        return cls(
            year=local.year,
            month=local.month,
            day=local.day,
            hour=local.hour,
            minute=local.minute,
            second=local.second,
            microsecond=local.microsecond,
            tz_name=tz_name,
            fold=local.fold,
        )

    @classmethod
    def at(cls, day: date, wall: time, tz_name: str) -> CivilDateTime:
        return cls.from_local(datetime.combine(day, wall), tz_name)


def to_local_datetime(instant: InstantLike, tz_name: str) -> datetime:
    """Return ``instant`` as an aware datetime in ``tz_name``."""
    zone = load_zone(tz_name)
    return coerce_instant(instant).astimezone(zone)


def to_local_civil(instant: InstantLike, tz_name: str) -> CivilDateTime:
    """Project an absolute instant onto the wall clock of ``tz_name``."""
    return CivilDateTime.from_local(to_local_datetime(instant, tz_name), tz_name.strip())


def to_utc_instant(civil: CivilDateTime, tz_name: str | None = None) -> datetime:
    """Return the UTC instant at which a clock in the zone reads ``civil``."""
    zone = load_zone(civil.tz_name if tz_name is None else tz_name)
    local = civil.to_naive().replace(tzinfo=zone)
    return local.astimezone(UTC)
