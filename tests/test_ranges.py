from __future__ import annotations

import logging
from datetime import UTC, date, datetime, time, timedelta

import pytest

from tenant_clock.boundaries import end_of_local_day_utc, start_of_local_date_utc
from tenant_clock.civil import to_local_civil
from tenant_clock.contracts import CustomRange, DateRange
from tenant_clock.errors import InvalidTimeZoneError
from tenant_clock.ranges import (
    FALLBACK_PRESET,
    RANGE_PRESET_LABELS,
    RANGE_PRESETS,
    is_known_preset,
    lookback_days,
    normalize_range_preset,
    resolve_range,
)

NY = "America/New_York"
SPRING_FORWARD_NOON = datetime(2024, 3, 10, 12, 0, tzinfo=UTC)


def test_today_on_spring_forward_spans_23_hours() -> None:
    result = resolve_range("today", NY, SPRING_FORWARD_NOON)

    assert result.start == datetime(2024, 3, 10, 5, 0, tzinfo=UTC)
    assert result.end == datetime(2024, 3, 11, 3, 59, 59, 999_000, tzinfo=UTC)
    assert result.duration + timedelta(milliseconds=1) == timedelta(hours=23)


def test_today_in_sydney_starts_previous_utc_day() -> None:
    result = resolve_range("today", "Australia/Sydney", datetime(2024, 1, 15, 0, 0, tzinfo=UTC))

    assert result.start == datetime(2024, 1, 14, 13, 0, tzinfo=UTC)
    assert result.end == datetime(2024, 1, 15, 12, 59, 59, 999_000, tzinfo=UTC)


@pytest.mark.parametrize("preset", ["today", "last7days", "last30days", "last90days"])
@pytest.mark.parametrize("tz_name", [NY, "Australia/Adelaide", "Europe/London", "UTC"])
def test_rolling_presets_end_at_close_of_today(preset: str, tz_name: str) -> None:
    result = resolve_range(preset, tz_name, SPRING_FORWARD_NOON)

    assert result.end == end_of_local_day_utc(SPRING_FORWARD_NOON, tz_name)
    assert result.start <= result.end


@pytest.mark.parametrize("preset,days", [("last7days", 7), ("last30days", 30), ("last90days", 90)])
def test_rolling_presets_start_n_local_days_back(preset: str, days: int) -> None:
    result = resolve_range(preset, NY, SPRING_FORWARD_NOON)
    expected_day = date(2024, 3, 10) - timedelta(days=days)

    local_start = to_local_civil(result.start, NY)
    assert local_start.date() == expected_day
    assert local_start.time() == time(0, 0)
    assert result.start == start_of_local_date_utc(expected_day, NY)


def test_last7days_across_spring_forward_counts_calendar_days() -> None:
    now = datetime(2024, 3, 12, 16, 0, tzinfo=UTC)

    result = resolve_range("last7days", NY, now)

    assert result.start == datetime(2024, 3, 5, 5, 0, tzinfo=UTC)
    assert to_local_civil(result.start, NY).date() == date(2024, 3, 5)
    assert result.duration + timedelta(milliseconds=1) == timedelta(days=8, hours=-1)


def test_last7days_just_after_local_midnight_across_dst() -> None:
    # 00:30 EDT on 2024-03-17; 168 hours earlier reads 23:30 EST on 2024-03-09.
    now = datetime(2024, 3, 17, 4, 30, tzinfo=UTC)

    result = resolve_range("last7days", NY, now)

    assert to_local_civil(result.start, NY).date() == date(2024, 3, 10)
    assert result.start == datetime(2024, 3, 10, 5, 0, tzinfo=UTC)


def test_custom_range_widens_to_local_days() -> None:
    custom = CustomRange(
        from_=datetime(2024, 2, 1, 3, 0, tzinfo=UTC),
        to=datetime(2024, 2, 10, 20, 0, tzinfo=UTC),
    )

    result = resolve_range("custom", NY, SPRING_FORWARD_NOON, custom)

    assert result == DateRange(
        start=datetime(2024, 1, 31, 5, 0, tzinfo=UTC),
        end=datetime(2024, 2, 11, 4, 59, 59, 999_000, tzinfo=UTC),
    )


def test_custom_range_accepts_strings_and_epoch_ms() -> None:
    custom = CustomRange(from_="2024-02-01T12:00:00Z", to=1_707_566_400_000)

    result = resolve_range("custom", "UTC", SPRING_FORWARD_NOON, custom)

    assert result.start == datetime(2024, 2, 1, 0, 0, tzinfo=UTC)
    assert result.end == datetime(2024, 2, 10, 23, 59, 59, 999_000, tzinfo=UTC)


def test_custom_single_day_range() -> None:
    instant = datetime(2024, 6, 15, 12, 0, tzinfo=UTC)

    result = resolve_range("custom", NY, SPRING_FORWARD_NOON, CustomRange(instant, instant))

    assert result == resolve_range("today", NY, instant)


@pytest.mark.parametrize(
    "custom",
    [
        None,
        CustomRange(),
        CustomRange(from_=datetime(2024, 2, 1, tzinfo=UTC)),
        CustomRange(to=datetime(2024, 2, 1, tzinfo=UTC)),
    ],
)
def test_custom_without_pair_falls_back_to_last30days(
    custom: CustomRange | None, caplog: pytest.LogCaptureFixture
) -> None:
    expected = resolve_range("last30days", NY, SPRING_FORWARD_NOON)

    with caplog.at_level(logging.WARNING, logger="tenant_clock.ranges"):
        result = resolve_range("custom", NY, SPRING_FORWARD_NOON, custom)

    assert result == expected
    assert "custom range incomplete" in caplog.text


def test_inverted_custom_pair_falls_back_to_last30days(caplog: pytest.LogCaptureFixture) -> None:
    custom = CustomRange(
        from_=datetime(2024, 2, 10, 12, tzinfo=UTC),
        to=datetime(2024, 2, 1, 12, tzinfo=UTC),
    )

    with caplog.at_level(logging.WARNING, logger="tenant_clock.ranges"):
        result = resolve_range("custom", NY, SPRING_FORWARD_NOON, custom)

    assert result == resolve_range("last30days", NY, SPRING_FORWARD_NOON)
    assert "inverted" in caplog.text


@pytest.mark.parametrize("preset", ["yesterday", "", "LAST_WEEK", "last365days"])
def test_unknown_preset_falls_back_to_last30days(
    preset: str, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING, logger="tenant_clock.ranges"):
        result = resolve_range(preset, NY, SPRING_FORWARD_NOON)

    assert result == resolve_range("last30days", NY, SPRING_FORWARD_NOON)
    assert "unknown range preset" in caplog.text


@pytest.mark.parametrize(
    "legacy,preset",
    [("7days", "last7days"), ("30days", "last30days"), ("90days", "last90days")],
)
def test_legacy_preset_ids_are_aliases(legacy: str, preset: str) -> None:
    assert normalize_range_preset(legacy) == preset
    assert resolve_range(legacy, NY, SPRING_FORWARD_NOON) == resolve_range(
        preset, NY, SPRING_FORWARD_NOON
    )


def test_normalize_range_preset_is_case_insensitive() -> None:
    assert normalize_range_preset(" Today ") == "today"
    assert normalize_range_preset("whatever") == FALLBACK_PRESET


def test_preset_vocabulary_helpers() -> None:
    assert set(RANGE_PRESET_LABELS) == set(RANGE_PRESETS)
    assert is_known_preset("last90days") is True
    assert is_known_preset("7days") is True
    assert is_known_preset("fortnight") is False
    assert lookback_days("today") == 0
    assert lookback_days("last7days") == 7
    assert lookback_days("custom") is None
    assert lookback_days("fortnight") == 30


@pytest.mark.parametrize("preset", list(RANGE_PRESETS) + ["unknown"])
def test_invalid_zone_raises_for_every_preset(preset: str) -> None:
    with pytest.raises(InvalidTimeZoneError):
        resolve_range(preset, "Not/AZone", SPRING_FORWARD_NOON)


def test_invalid_zone_raises_even_with_complete_custom_pair() -> None:
    custom = CustomRange(SPRING_FORWARD_NOON, SPRING_FORWARD_NOON)

    with pytest.raises(InvalidTimeZoneError):
        resolve_range("custom", "Not/AZone", SPRING_FORWARD_NOON, custom)


def test_resolve_range_accepts_naive_and_string_now() -> None:
    expected = resolve_range("today", NY, SPRING_FORWARD_NOON)

    assert resolve_range("today", NY, datetime(2024, 3, 10, 12, 0)) == expected
    assert resolve_range("today", NY, "2024-03-10T12:00:00Z") == expected
