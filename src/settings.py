from __future__ import annotations

"""
Application settings loader (YAML/JSON).

Responsibilities
- Load an optional settings file containing UI defaults and logging options.
- Apply defaults for missing keys and validate ranges with the field name in
  every error message.

Resolution order for the settings file:
1. explicit `path` argument
2. `GROWTH_SIM_SETTINGS` environment variable
3. `config/settings.yaml` if it exists
4. built-in defaults
"""

from dataclasses import dataclass
import json
import logging
import os
from pathlib import Path
from typing import Dict, Mapping, Optional

import yaml

from .io_paths import DEFAULT_SETTINGS_FILE, LOGS_DIR, PROJECT_ROOT

logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "GROWTH_SIM_SETTINGS"

DEFAULT_DOUBLING_TIME = 20
DEFAULT_BUSY_CLEAR_DELAY_MS = 200.0
MAX_BUSY_CLEAR_DELAY_MS = 5000.0


@dataclass(frozen=True)
class AppSettings:
    default_doubling_time: int = DEFAULT_DOUBLING_TIME
    busy_clear_delay_ms: float = DEFAULT_BUSY_CLEAR_DELAY_MS
    debug: bool = False
    log_dir: Path = LOGS_DIR

    @property
    def busy_clear_delay(self) -> float:
        """Busy-flag delay in seconds."""
        return self.busy_clear_delay_ms / 1000.0


def _coerce_numeric(value: object, field_name: str) -> float:
    """Coerce numbers and numeric strings to float; bools are rejected."""
    if isinstance(value, bool):
        raise ValueError(f"Non-numeric value for '{field_name}': {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as exc:  # re-raise with context
            raise ValueError(f"Non-numeric value for '{field_name}': {value!r}") from exc
    raise ValueError(f"Non-numeric value for '{field_name}': {value!r}")


def _coerce_bool(value: object, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "yes", "1", "on"}:
        return True
    if isinstance(value, str) and value.strip().lower() in {"false", "no", "0", "off"}:
        return False
    raise ValueError(f"Non-boolean value for '{field_name}': {value!r}")


def _load_raw_settings(path: Path) -> Dict[str, object]:
    """Load YAML/JSON as a plain dict; ensure the root is a mapping."""
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Settings file must deserialize to a mapping/dictionary at top level")
    return data


def settings_from_dict(raw: Mapping[str, object], *, base_dir: Path = PROJECT_ROOT) -> AppSettings:
    """Validate a raw mapping and build AppSettings.

    Relative `log_dir` values are resolved against `base_dir`.
    """
    known = {"default_doubling_time", "busy_clear_delay_ms", "debug", "log_dir"}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"Unknown settings keys: {unknown}. Allowed: {sorted(known)}")

    dt = _coerce_numeric(raw.get("default_doubling_time", DEFAULT_DOUBLING_TIME), "default_doubling_time")
    if dt <= 0 or not dt.is_integer():
        raise ValueError("default_doubling_time must be a positive integer")

    delay = _coerce_numeric(raw.get("busy_clear_delay_ms", DEFAULT_BUSY_CLEAR_DELAY_MS), "busy_clear_delay_ms")
    if not 0 <= delay <= MAX_BUSY_CLEAR_DELAY_MS:
        raise ValueError(f"busy_clear_delay_ms must be between 0 and {MAX_BUSY_CLEAR_DELAY_MS:g}")

    debug = _coerce_bool(raw.get("debug", False), "debug")

    log_dir_raw = raw.get("log_dir")
    if log_dir_raw is None:
        log_dir = LOGS_DIR
    else:
        log_dir = Path(str(log_dir_raw))
        if not log_dir.is_absolute():
            log_dir = base_dir / log_dir

    return AppSettings(
        default_doubling_time=int(dt),
        busy_clear_delay_ms=delay,
        debug=debug,
        log_dir=log_dir,
    )


def resolve_settings_path(path: Optional[Path | str] = None) -> Optional[Path]:
    """Pick the settings file per the resolution order; None means defaults."""
    if path:
        return Path(path)
    env = os.environ.get(SETTINGS_ENV_VAR)
    if env:
        return Path(env)
    if DEFAULT_SETTINGS_FILE.exists():
        return DEFAULT_SETTINGS_FILE
    return None


def load_settings(path: Optional[Path | str] = None) -> AppSettings:
    """Load and validate settings, falling back to defaults when no file applies."""
    resolved = resolve_settings_path(path)
    if resolved is None:
        return AppSettings()
    raw = _load_raw_settings(resolved)
    settings = settings_from_dict(raw)
    logger.debug("Loaded settings from %s: %s", resolved, settings)
    return settings


__all__ = [
    "SETTINGS_ENV_VAR",
    "AppSettings",
    "settings_from_dict",
    "resolve_settings_path",
    "load_settings",
]
