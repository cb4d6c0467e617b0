"""Tenant records and a zone-bound facade over the boundary engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from tenant_clock.boundaries import local_day_bounds
from tenant_clock.civil import CivilDateTime, to_local_civil
from tenant_clock.contracts import CustomRange, DateRange
from tenant_clock.formatting import DEFAULT_DISPLAY_PATTERN, format_local, local_date_key
from tenant_clock.ranges import resolve_range
from tenant_clock.time_utils import InstantLike
from tenant_clock.zones import DEFAULT_TENANT_ZONE, load_zone, zone_label


class TenantClock:
    """Boundary engine bound to one tenant zone.

    The zone is validated once here; every method is pure and may be called
    concurrently.
    """

    def __init__(self, tz_name: str, *, display_pattern: str = DEFAULT_DISPLAY_PATTERN) -> None:
        load_zone(tz_name)
        self.tz_name = tz_name.strip()
        self.display_pattern = display_pattern

    def __repr__(self) -> str:
        return f"TenantClock({self.tz_name!r})"

    def civil(self, instant: InstantLike) -> CivilDateTime:
        return to_local_civil(instant, self.tz_name)

    def day_bounds(self, instant: InstantLike) -> DateRange:
        return local_day_bounds(instant, self.tz_name)

    def range(
        self,
        preset: str,
        now: InstantLike,
        custom: CustomRange | None = None,
    ) -> DateRange:
        return resolve_range(preset, self.tz_name, now, custom)

    def format(self, instant: InstantLike, pattern: str | None = None) -> str:
        return format_local(instant, self.tz_name, pattern or self.display_pattern)

    def date_key(self, instant: InstantLike) -> str:
        return local_date_key(instant, self.tz_name)


@dataclass(frozen=True)
class Tenant:
    """Tenant row as stored by the dashboard (``id, name, slug, timezone``)."""

    id: str
    name: str
    slug: str
    timezone: str = DEFAULT_TENANT_ZONE

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Tenant:
        tz_name = row.get("timezone")
        return cls(
            id=str(row["id"]),
            name=str(row.get("name", "")),
            slug=str(row.get("slug", "")),
            timezone=DEFAULT_TENANT_ZONE if tz_name is None else str(tz_name),
        )

    @property
    def timezone_label(self) -> str:
        return zone_label(self.timezone)

    def clock(self, *, display_pattern: str = DEFAULT_DISPLAY_PATTERN) -> TenantClock:
        return TenantClock(self.timezone, display_pattern=display_pattern)
