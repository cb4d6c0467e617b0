"""Runtime configuration loader (config-first, flag-overrides)."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from tenant_clock.formatting import DEFAULT_DISPLAY_PATTERN
from tenant_clock.zones import DEFAULT_TENANT_ZONE, TENANT_ZONE_CHOICES

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "runtime.toml"
DEFAULT_LOCAL_OVERRIDE_PATH = Path(__file__).resolve().parents[2] / "config" / "runtime.local.toml"


@dataclass(frozen=True)
class RuntimeConfig:
    """Materialized runtime configuration."""

    config_path: Path
    display_pattern: str
    default_preset: str
    default_timezone: str
    timezones: tuple[str, ...]
    log_level: str

    def with_overrides(
        self,
        *,
        log_level: str | None = None,
    ) -> RuntimeConfig:
        """Return copy with explicit CLI overrides applied."""
        return replace(
            self,
            log_level=log_level or self.log_level,
        )


def default_runtime_config(config_path: Path | None = None) -> RuntimeConfig:
    return RuntimeConfig(
        config_path=(config_path or DEFAULT_CONFIG_PATH).expanduser().resolve(),
        display_pattern=DEFAULT_DISPLAY_PATTERN,
        default_preset="last30days",
        default_timezone=DEFAULT_TENANT_ZONE,
        timezones=tuple(value for value, _ in TENANT_ZONE_CHOICES),
        log_level="WARNING",
    )


_CURRENT_RUNTIME_CONFIG: RuntimeConfig | None = None


def set_current_runtime_config(config: RuntimeConfig | None) -> None:
    global _CURRENT_RUNTIME_CONFIG
    _CURRENT_RUNTIME_CONFIG = config


def current_runtime_config() -> RuntimeConfig:
    config = _CURRENT_RUNTIME_CONFIG
    if config is not None:
        return config
    loaded = load_runtime_config()
    set_current_runtime_config(loaded)
    return loaded


def _deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    out = dict(base)
    for key, value in overlay.items():
        existing = out.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            out[key] = _deep_merge(existing, value)
        else:
            out[key] = value
    return out


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        payload = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise RuntimeError(f"failed reading runtime config: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise RuntimeError(f"invalid runtime config TOML: {path}") from exc
    if not isinstance(payload, dict):
        raise RuntimeError(f"runtime config root must be a table: {path}")
    return payload


def _as_table(payload: dict[str, Any], key: str) -> dict[str, Any]:
    value = payload.get(key, {})
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise RuntimeError(f"runtime config section [{key}] must be a table")
    return value


def _as_str(value: Any, *, default: str) -> str:
    if isinstance(value, str):
        stripped = value.strip()
        if stripped:
            return stripped
    return default


def _as_csv_list(values: Any, *, default: tuple[str, ...]) -> tuple[str, ...]:
    if isinstance(values, list):
        cleaned = [str(value).strip() for value in values if str(value).strip()]
        return tuple(cleaned) if cleaned else default
    if isinstance(values, str):
        cleaned = [part.strip() for part in values.split(",") if part.strip()]
        return tuple(cleaned) if cleaned else default
    return default


def load_runtime_config(config_path: Path | None = None) -> RuntimeConfig:
    """Load runtime config from `config/runtime.toml` plus optional local override.

    A missing default file yields built-in defaults; a missing explicit path
    is an error.
    """
    source = (config_path or DEFAULT_CONFIG_PATH).expanduser().resolve()
    defaults = default_runtime_config(source)
    if not source.exists():
        if config_path is None:
            return defaults
        raise RuntimeError(f"runtime config file not found: {source}")

    payload = _read_toml(source)
    if source == DEFAULT_CONFIG_PATH and DEFAULT_LOCAL_OVERRIDE_PATH.exists():
        payload = _deep_merge(payload, _read_toml(DEFAULT_LOCAL_OVERRIDE_PATH))

    display = _as_table(payload, "display")
    ranges = _as_table(payload, "ranges")
    tenant = _as_table(payload, "tenant")
    logging_table = _as_table(payload, "logging")

    return RuntimeConfig(
        config_path=source,
        display_pattern=_as_str(display.get("pattern"), default=defaults.display_pattern),
        default_preset=_as_str(ranges.get("default_preset"), default=defaults.default_preset),
        default_timezone=_as_str(
            tenant.get("default_timezone"),
            default=defaults.default_timezone,
        ),
        timezones=_as_csv_list(tenant.get("timezones"), default=defaults.timezones),
        log_level=_as_str(logging_table.get("level"), default=defaults.log_level).upper(),
    )
