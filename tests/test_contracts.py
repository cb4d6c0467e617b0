from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from tenant_clock.contracts import CustomRange, DateRange
from tenant_clock.errors import InvalidRangeError


def test_date_range_normalizes_to_utc() -> None:
    date_range = DateRange(start="2024-03-10T00:00:00-05:00", end=1_710_072_000_000)

    assert date_range.start == datetime(2024, 3, 10, 5, 0, tzinfo=UTC)
    assert date_range.end == datetime(2024, 3, 10, 12, 0, tzinfo=UTC)
    assert date_range.start.tzinfo == UTC
    assert date_range.duration == timedelta(hours=7)


def test_date_range_rejects_inverted_bounds() -> None:
    with pytest.raises(InvalidRangeError):
        DateRange(
            start=datetime(2024, 3, 11, tzinfo=UTC),
            end=datetime(2024, 3, 10, tzinfo=UTC),
        )


def test_date_range_is_inclusive() -> None:
    date_range = DateRange(
        start=datetime(2024, 3, 10, tzinfo=UTC),
        end=datetime(2024, 3, 10, 23, 59, 59, 999_000, tzinfo=UTC),
    )

    assert date_range.contains(date_range.start)
    assert date_range.contains(date_range.end)
    assert not date_range.contains(datetime(2024, 3, 11, tzinfo=UTC))


def test_date_range_serializes() -> None:
    date_range = DateRange(
        start=datetime(2024, 3, 10, 5, 0, tzinfo=UTC),
        end=datetime(2024, 3, 11, 3, 59, 59, 999_000, tzinfo=UTC),
    )

    assert date_range.to_dict() == {
        "start": "2024-03-10T05:00:00Z",
        "end": "2024-03-11T03:59:59.999Z",
    }
    assert date_range.to_epoch_ms() == (1_710_046_800_000, 1_710_129_599_999)


def test_custom_range_completeness() -> None:
    assert CustomRange().is_complete is False
    assert CustomRange(from_=datetime(2024, 1, 1, tzinfo=UTC)).is_complete is False
    complete = CustomRange(datetime(2024, 1, 1, tzinfo=UTC), datetime(2024, 1, 2, tzinfo=UTC))
    assert complete.is_complete is True
