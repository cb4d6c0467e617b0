"""Preset date-range resolution anchored at a caller-supplied ``now``."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Literal

from tenant_clock.boundaries import end_of_local_date_utc, start_of_local_date_utc
from tenant_clock.civil import to_local_civil
from tenant_clock.contracts import CustomRange, DateRange
from tenant_clock.time_utils import InstantLike, coerce_instant
from tenant_clock.zones import load_zone

logger = logging.getLogger(__name__)

RangePreset = Literal["today", "last7days", "last30days", "last90days", "custom"]

RANGE_PRESETS: tuple[RangePreset, ...] = (
    "today",
    "last7days",
    "last30days",
    "last90days",
    "custom",
)
FALLBACK_PRESET: RangePreset = "last30days"

RANGE_PRESET_LABELS: dict[RangePreset, str] = {
    "today": "Today",
    "last7days": "Last 7 days",
    "last30days": "Last 30 days",
    "last90days": "Last 90 days",
    "custom": "Custom range",
}

_LOOKBACK_DAYS: dict[RangePreset, int] = {
    "today": 0,
    "last7days": 7,
    "last30days": 30,
    "last90days": 90,
}

# Preset ids used by older dashboard builds.
_LEGACY_ALIASES: dict[str, RangePreset] = {
    "7days": "last7days",
    "30days": "last30days",
    "90days": "last90days",
}


def is_known_preset(value: str) -> bool:
    cleaned = str(value).strip().lower()
    return cleaned in RANGE_PRESETS or cleaned in _LEGACY_ALIASES


def normalize_range_preset(value: str) -> RangePreset:
    """Map a preset id onto the supported vocabulary.

    Unknown ids resolve to ``FALLBACK_PRESET``.
    """
    cleaned = str(value).strip().lower()
    if cleaned in RANGE_PRESETS:
        return cleaned  # type: ignore[return-value]
    if cleaned in _LEGACY_ALIASES:
        return _LEGACY_ALIASES[cleaned]
    logger.warning("unknown range preset %r; using %s", value, FALLBACK_PRESET)
    return FALLBACK_PRESET


def lookback_days(preset: str) -> int | None:
    """Return the local-day lookback for a rolling preset, ``None`` for custom."""
    return _LOOKBACK_DAYS.get(normalize_range_preset(preset))


def _rolling_range(tz_name: str, now: InstantLike, days: int) -> DateRange:
    today = to_local_civil(now, tz_name).date()
    return DateRange(
        start=start_of_local_date_utc(today - timedelta(days=days), tz_name),
        end=end_of_local_date_utc(today, tz_name),
    )


def _custom_range(tz_name: str, now: InstantLike, custom: CustomRange | None) -> DateRange:
    if custom is None or not custom.is_complete:
        logger.warning("custom range incomplete; using %s", FALLBACK_PRESET)
        return _rolling_range(tz_name, now, _LOOKBACK_DAYS[FALLBACK_PRESET])
    first_day = to_local_civil(custom.from_, tz_name).date()
    last_day = to_local_civil(custom.to, tz_name).date()
    if first_day > last_day:
        logger.warning(
            "custom range %s..%s is inverted; using %s",
            first_day.isoformat(),
            last_day.isoformat(),
            FALLBACK_PRESET,
        )
        return _rolling_range(tz_name, now, _LOOKBACK_DAYS[FALLBACK_PRESET])
    return DateRange(
        start=start_of_local_date_utc(first_day, tz_name),
        end=end_of_local_date_utc(last_day, tz_name),
    )


def resolve_range(
    preset: str,
    tz_name: str,
    now: InstantLike,
    custom: CustomRange | None = None,
) -> DateRange:
    """Resolve a preset to an inclusive UTC ``DateRange`` in ``tz_name``.

    Rolling presets start at local midnight N local calendar days before
    ``now``'s local date and end at the close of ``now``'s local day, so the
    window always spans whole local days regardless of DST changes in between.
    ``custom`` widens the caller's pair to whole local days; an incomplete or
    inverted pair falls back to ``last30days``.
    """
    load_zone(tz_name)
    anchor = coerce_instant(now)
    resolved = normalize_range_preset(preset)
    if resolved == "custom":
        result = _custom_range(tz_name, anchor, custom)
    else:
        result = _rolling_range(tz_name, anchor, _LOOKBACK_DAYS[resolved])
    logger.debug(
        "resolved range preset=%s tz=%s start=%s end=%s",
        resolved,
        tz_name,
        result.start.isoformat(),
        result.end.isoformat(),
    )
    return result
