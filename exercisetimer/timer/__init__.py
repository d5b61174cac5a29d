"""Timer package."""

from .engine import (
    TimerEngine,
    TimerState,
    Phase,
    SessionConfig,
    Snapshot,
    ConfigLocked,
    InvalidConfig,
    DEFAULT_WORK_SECONDS,
    DEFAULT_BREAK_SECONDS,
    DEFAULT_TOTAL_ROUNDS,
    TICK_INTERVAL_MS,
)

__all__ = [
    "TimerEngine",
    "TimerState",
    "Phase",
    "SessionConfig",
    "Snapshot",
    "ConfigLocked",
    "InvalidConfig",
    "DEFAULT_WORK_SECONDS",
    "DEFAULT_BREAK_SECONDS",
    "DEFAULT_TOTAL_ROUNDS",
    "TICK_INTERVAL_MS",
]
