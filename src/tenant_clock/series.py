"""Per-local-day bucketing of UTC event timestamps with polars."""

from __future__ import annotations

from datetime import timedelta

import polars as pl

from tenant_clock.civil import to_local_civil
from tenant_clock.contracts import DateRange
from tenant_clock.time_utils import coerce_instant
from tenant_clock.zones import load_zone

DAY_COLUMN = "day"
COUNT_COLUMN = "count"


def _utc_column(frame: pl.DataFrame, column: str) -> pl.Expr | pl.Series:
    dtype = frame.schema[column]
    expr = pl.col(column)
    if dtype == pl.Utf8:
        parsed = [None if value is None else coerce_instant(value) for value in frame[column]]
        return pl.Series(column, parsed, dtype=pl.Datetime("us", "UTC"))
    if not isinstance(dtype, pl.Datetime):
        raise ValueError(f"column {column!r} must hold timestamps, got {dtype}")
    if dtype.time_zone is None:
        return expr.dt.replace_time_zone("UTC")
    return expr.dt.convert_time_zone("UTC")


def normalize_timestamps(frame: pl.DataFrame, column: str = "created_at") -> pl.DataFrame:
    """Return ``frame`` with ``column`` as a UTC-aware datetime column."""
    if column not in frame.columns:
        raise ValueError(f"missing timestamp column: {column}")
    return frame.with_columns(_utc_column(frame, column).alias(column))


def add_local_date_key(
    frame: pl.DataFrame,
    tz_name: str,
    column: str = "created_at",
    alias: str = DAY_COLUMN,
) -> pl.DataFrame:
    """Add a ``YYYY-MM-DD`` column holding each row's local date in ``tz_name``."""
    zone_name = load_zone(tz_name).key
    normalized = normalize_timestamps(frame, column)
    return normalized.with_columns(
        pl.col(column).dt.convert_time_zone(zone_name).dt.date().cast(pl.Utf8).alias(alias)
    )


def filter_to_range(
    frame: pl.DataFrame,
    date_range: DateRange,
    column: str = "created_at",
) -> pl.DataFrame:
    """Keep rows whose timestamp falls inside the inclusive range."""
    normalized = normalize_timestamps(frame, column)
    return normalized.filter(
        (pl.col(column) >= pl.lit(date_range.start)) & (pl.col(column) <= pl.lit(date_range.end))
    )


def local_days(date_range: DateRange, tz_name: str) -> list[str]:
    """Return the local date keys covered by ``date_range``, oldest first."""
    first = to_local_civil(date_range.start, tz_name).date()
    last = to_local_civil(date_range.end, tz_name).date()
    days: list[str] = []
    current = first
    while current <= last:
        days.append(current.isoformat())
        current += timedelta(days=1)
    return days


def daily_counts(
    frame: pl.DataFrame,
    tz_name: str,
    date_range: DateRange,
    column: str = "created_at",
) -> pl.DataFrame:
    """Count rows per local day across ``date_range``, zero-filling empty days."""
    keyed = add_local_date_key(filter_to_range(frame, date_range, column), tz_name, column)
    counts = keyed.group_by(DAY_COLUMN).agg(pl.len().cast(pl.Int64).alias(COUNT_COLUMN))
    calendar = pl.DataFrame(
        {DAY_COLUMN: local_days(date_range, tz_name)},
        schema={DAY_COLUMN: pl.Utf8},
    )
    return (
        calendar.join(counts, on=DAY_COLUMN, how="left")
        .with_columns(pl.col(COUNT_COLUMN).fill_null(0))
        .sort(DAY_COLUMN)
    )
