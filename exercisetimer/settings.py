"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/ExerciseTimer/settings.json

Usage::

    settings = load_settings()
    settings.work_seconds = 45
    save_settings(settings)
    engine.reconfigure(settings.session_config())
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .timer.engine import (
    SessionConfig,
    DEFAULT_WORK_SECONDS,
    DEFAULT_BREAK_SECONDS,
    DEFAULT_TOTAL_ROUNDS,
    TICK_INTERVAL_MS,
)


logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "ExerciseTimer"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


def clamp_seconds(value: object) -> int:
    """Coerce a form value to whole seconds, at least 1."""
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return 1
    if math.isnan(number) or math.isinf(number):
        return 1
    return max(1, int(number))


def clamp_rounds(value: object) -> int:
    """Coerce a form value to a round count, at least 1."""
    return clamp_seconds(value)


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    work_seconds: int = DEFAULT_WORK_SECONDS
    break_seconds: int = DEFAULT_BREAK_SECONDS
    total_rounds: int = DEFAULT_TOTAL_ROUNDS
    tick_interval_ms: int = TICK_INTERVAL_MS

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100

    # ── logging ───────────────────────────────────────────────────────
    log_level: str = "INFO"

    # ── window ────────────────────────────────────────────────────────
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 440
    window_height: int = 560

    def session_config(self) -> SessionConfig:
        """The engine configuration, clamped the way the form clamps."""
        return SessionConfig(
            work_seconds=clamp_seconds(self.work_seconds),
            break_seconds=clamp_seconds(self.break_seconds),
            total_rounds=clamp_rounds(self.total_rounds),
        )


_QT_INT_MAX = 2**31 - 1

_DEFAULTS = Settings()


def _field_ok(name: str, value: object) -> bool:
    """True if *value* has the type of the field's default."""
    default = getattr(_DEFAULTS, name)
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, str):
        return isinstance(value, str)
    # int fields, plus the optional window position
    if value is None:
        return default is None
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and -_QT_INT_MAX <= value <= _QT_INT_MAX
    )


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not SETTINGS_PATH.exists():
        return Settings()
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
        # Only use keys that exist in the dataclass
        valid_keys = {f.name for f in fields(Settings)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        for key in [k for k, v in filtered.items() if not _field_ok(k, v)]:
            bad = filtered.pop(key)
            logger.warning(
                "ignoring %s of type %s in %s", key, type(bad).__name__, SETTINGS_PATH,
            )
        return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("could not read %s (%s); using defaults", SETTINGS_PATH, exc)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
