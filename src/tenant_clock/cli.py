"""CLI entrypoint for tenant-clock."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

import polars as pl
from pydantic import ValidationError

from tenant_clock.boundaries import local_day_bounds
from tenant_clock.contracts import CustomRange, DateRange
from tenant_clock.errors import CLIError, TenantClockError
from tenant_clock.formatting import format_local, local_date_key
from tenant_clock.logging_utils import setup_logger
from tenant_clock.ranges import (
    RANGE_PRESETS,
    RangePreset,
    normalize_range_preset,
    resolve_range,
)
from tenant_clock.runtime_config import load_runtime_config, set_current_runtime_config
from tenant_clock.series import daily_counts
from tenant_clock.settings import Settings
from tenant_clock.time_utils import coerce_instant, iso_z, utc_now
from tenant_clock.zones import utc_offset_label, zone_label

logger = logging.getLogger(__name__)


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, sort_keys=True, indent=2))


def _now_arg(raw: str) -> datetime:
    return coerce_instant(raw) if raw else utc_now()


def _tz_arg(args: argparse.Namespace, settings: Settings) -> str:
    value = str(getattr(args, "tz", "") or "").strip()
    return value or settings.default_timezone


def _range_payload(date_range: DateRange, tz_name: str, pattern: str) -> dict[str, Any]:
    start_ms, end_ms = date_range.to_epoch_ms()
    return {
        "tz": tz_name,
        "start": iso_z(date_range.start),
        "end": iso_z(date_range.end),
        "start_ms": start_ms,
        "end_ms": end_ms,
        "start_local": format_local(date_range.start, tz_name, pattern),
        "end_local": format_local(date_range.end, tz_name, pattern),
        "duration_hours": round(date_range.duration.total_seconds() / 3600, 3),
    }


def _cli_preset(args: argparse.Namespace, settings: Settings) -> RangePreset:
    return normalize_range_preset(str(args.preset or settings.default_preset))


def _resolve_cli_range(args: argparse.Namespace, tz_name: str, preset: RangePreset) -> DateRange:
    custom = None
    if args.from_ or args.to:
        custom = CustomRange(
            from_=coerce_instant(args.from_) if args.from_ else None,
            to=coerce_instant(args.to) if args.to else None,
        )
    return resolve_range(preset, tz_name, _now_arg(args.now), custom)


def _cmd_range(args: argparse.Namespace, settings: Settings) -> int:
    tz_name = _tz_arg(args, settings)
    preset = _cli_preset(args, settings)
    date_range = _resolve_cli_range(args, tz_name, preset)
    payload = _range_payload(date_range, tz_name, settings.display_pattern)
    payload["preset"] = preset
    _print_json(payload)
    return 0


def _cmd_day_bounds(args: argparse.Namespace, settings: Settings) -> int:
    tz_name = _tz_arg(args, settings)
    at = _now_arg(args.at)
    payload = _range_payload(local_day_bounds(at, tz_name), tz_name, settings.display_pattern)
    payload["day"] = local_date_key(at, tz_name)
    _print_json(payload)
    return 0


def _cmd_format(args: argparse.Namespace, settings: Settings) -> int:
    tz_name = _tz_arg(args, settings)
    at = _now_arg(args.at)
    print(format_local(at, tz_name, args.pattern or settings.display_pattern))
    return 0


def _cmd_day_key(args: argparse.Namespace, settings: Settings) -> int:
    tz_name = _tz_arg(args, settings)
    print(local_date_key(_now_arg(args.at), tz_name))
    return 0


def _cmd_zones(args: argparse.Namespace, settings: Settings, timezones: tuple[str, ...]) -> int:
    at = _now_arg(args.at)
    rows = [
        {
            "tz": tz_name,
            "label": zone_label(tz_name),
            "offset": utc_offset_label(tz_name, at),
            "default": tz_name == settings.default_timezone,
        }
        for tz_name in timezones
    ]
    _print_json({"at": iso_z(at), "zones": rows})
    return 0


def _cmd_daily_counts(args: argparse.Namespace, settings: Settings) -> int:
    tz_name = _tz_arg(args, settings)
    input_path = Path(args.input).expanduser()
    if not input_path.exists():
        raise CLIError(f"input file not found: {input_path}")
    frame = pl.read_csv(input_path, infer_schema_length=0)
    if args.column not in frame.columns:
        raise CLIError(f"input has no column {args.column!r}; columns: {', '.join(frame.columns)}")
    date_range = _resolve_cli_range(args, tz_name, _cli_preset(args, settings))
    counts = daily_counts(frame, tz_name, date_range, column=args.column)
    logger.info("bucketed %d rows into %d local days", frame.height, counts.height)
    payload = _range_payload(date_range, tz_name, settings.display_pattern)
    payload["days"] = counts.to_dicts()
    payload["total"] = int(counts["count"].sum())
    _print_json(payload)
    return 0


def _add_range_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--preset",
        default="",
        help=f"Range preset ({', '.join(RANGE_PRESETS)}); unknown values use last30days.",
    )
    parser.add_argument("--now", default="", help="Anchor instant (ISO-8601); default: now.")
    parser.add_argument("--from", dest="from_", default="", help="Custom range start instant.")
    parser.add_argument("--to", default="", help="Custom range end instant.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tenant-clock")
    parser.add_argument(
        "--config",
        default="",
        help="Path to runtime config TOML (default: config/runtime.toml).",
    )
    parser.add_argument("--log-level", default="", help="Override configured log level.")
    subparsers = parser.add_subparsers(dest="command")

    range_parser = subparsers.add_parser("range", help="Resolve a preset to UTC bounds")
    range_parser.add_argument("--tz", default="", help="IANA time zone id.")
    _add_range_args(range_parser)
    range_parser.set_defaults(func=_cmd_range)

    bounds = subparsers.add_parser("day-bounds", help="UTC bounds of one local day")
    bounds.add_argument("--tz", default="", help="IANA time zone id.")
    bounds.add_argument("--at", default="", help="Instant inside the day; default: now.")
    bounds.set_defaults(func=_cmd_day_bounds)

    fmt = subparsers.add_parser("format", help="Render an instant in local time")
    fmt.add_argument("--tz", default="", help="IANA time zone id.")
    fmt.add_argument("--at", default="", help="Instant to render; default: now.")
    fmt.add_argument("--pattern", default="", help="strftime pattern.")
    fmt.set_defaults(func=_cmd_format)

    day_key = subparsers.add_parser("day-key", help="Local YYYY-MM-DD for an instant")
    day_key.add_argument("--tz", default="", help="IANA time zone id.")
    day_key.add_argument("--at", default="", help="Instant to key; default: now.")
    day_key.set_defaults(func=_cmd_day_key)

    zones = subparsers.add_parser("zones", help="List configured tenant zones")
    zones.add_argument("--at", default="", help="Instant for offsets; default: now.")
    zones.set_defaults(func=_cmd_zones)

    counts = subparsers.add_parser("daily-counts", help="Count CSV events per local day")
    counts.add_argument("--tz", default="", help="IANA time zone id.")
    counts.add_argument("--input", required=True, help="CSV file with UTC timestamps.")
    counts.add_argument("--column", default="created_at", help="Timestamp column name.")
    _add_range_args(counts)
    counts.set_defaults(func=_cmd_daily_counts)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI."""
    parser = build_parser()
    args = parser.parse_args(list(argv) if isinstance(argv, list) else sys.argv[1:])
    config_path = Path(args.config).expanduser() if args.config else None
    try:
        runtime_config = load_runtime_config(config_path)
    except RuntimeError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    runtime_config = runtime_config.with_overrides(log_level=args.log_level.strip().upper())
    try:
        set_current_runtime_config(runtime_config)
        setup_logger("tenant_clock", runtime_config.log_level)
        func = getattr(args, "func", None)
        if func is None:
            parser.print_help()
            return 0
        try:
            settings = Settings.from_runtime()
            if func is _cmd_zones:
                return int(func(args, settings, runtime_config.timezones))
            return int(func(args, settings))
        except (TenantClockError, ValidationError, FileNotFoundError, ValueError) as exc:
            print(str(exc), file=sys.stderr)
            return 2
    finally:
        set_current_runtime_config(None)


if __name__ == "__main__":
    raise SystemExit(main())
