from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from tenant_clock.errors import InvalidInstantError
from tenant_clock.time_utils import (
    coerce_instant,
    from_epoch_ms,
    iso_z,
    parse_iso_z,
    to_epoch_ms,
    utc_now,
)


def test_utc_now_is_utc_with_millisecond_precision() -> None:
    now = utc_now()

    assert now.tzinfo == UTC
    assert now.microsecond % 1000 == 0


def test_iso_z_normalizes_naive_datetime() -> None:
    value = datetime(2026, 2, 13, 10, 0, 0)

    assert iso_z(value) == "2026-02-13T10:00:00Z"


def test_iso_z_normalizes_non_utc_datetime() -> None:
    eastern = datetime(2026, 2, 13, 5, 0, 0, tzinfo=timezone(timedelta(hours=-5)))

    assert iso_z(eastern) == "2026-02-13T10:00:00Z"


def test_iso_z_keeps_milliseconds() -> None:
    value = datetime(2024, 3, 11, 3, 59, 59, 999_000, tzinfo=UTC)

    assert iso_z(value) == "2024-03-11T03:59:59.999Z"


def test_parse_iso_z_parses_z_and_naive() -> None:
    parsed_z = parse_iso_z("2026-02-13T10:00:00Z")
    parsed_naive = parse_iso_z("2026-02-13T10:00:00")

    assert parsed_z == datetime(2026, 2, 13, 10, 0, 0, tzinfo=UTC)
    assert parsed_naive == datetime(2026, 2, 13, 10, 0, 0, tzinfo=UTC)


def test_parse_iso_z_invalid_returns_none() -> None:
    assert parse_iso_z("not-a-date") is None
    assert parse_iso_z("   ") is None


def test_epoch_ms_conversions() -> None:
    instant = datetime(2024, 3, 10, 12, 0, 0, tzinfo=UTC)

    assert to_epoch_ms(instant) == 1_710_072_000_000
    assert from_epoch_ms(1_710_072_000_000) == instant
    assert to_epoch_ms(datetime(1969, 12, 31, 23, 59, 59, 999_000, tzinfo=UTC)) == -1


def test_coerce_instant_accepts_supported_inputs() -> None:
    expected = datetime(2024, 3, 10, 12, 0, 0, tzinfo=UTC)
    offset = datetime(2024, 3, 10, 8, 0, 0, tzinfo=timezone(timedelta(hours=-4)))

    assert coerce_instant(expected) == expected
    assert coerce_instant(offset) == expected
    assert coerce_instant(offset).tzinfo == UTC
    assert coerce_instant(datetime(2024, 3, 10, 12, 0, 0)) == expected
    assert coerce_instant(1_710_072_000_000) == expected
    assert coerce_instant("2024-03-10T12:00:00Z") == expected
    assert coerce_instant("2024-03-10T08:00:00-04:00") == expected


@pytest.mark.parametrize("value", ["yesterday", "", True, None, [1, 2]])
def test_coerce_instant_rejects_garbage(value: object) -> None:
    with pytest.raises(InvalidInstantError):
        coerce_instant(value)  # type: ignore[arg-type]
