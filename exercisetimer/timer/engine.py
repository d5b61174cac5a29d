"""Interval timer state machine for Exercise Timer.

Phases
------
WORK        Work interval counting up towards ``work_seconds``.
BREAK       Rest interval counting up towards ``break_seconds``.
COMPLETED   Terminal, the last work round has finished.

Transitions (on reaching the phase duration)
--------------------------------------------
WORK  (round < total)  → BREAK   (round unchanged)
WORK  (round == total) → COMPLETED, session ends
BREAK                  → WORK    (round + 1)
Any → WORK, round 1             (reset)

Elapsed time is always ``now - anchor`` on a monotonic clock, never
the sum of nominal tick increments, so scheduler jitter or a stalled
event loop cannot make the timer drift.
"""

from __future__ import annotations

import logging
import math
import numbers
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal


logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class Phase(Enum):
    WORK = "work"
    BREAK = "break"
    COMPLETED = "completed"


# ── errors ────────────────────────────────────────────────────────────────


class ConfigLocked(RuntimeError):
    """Raised when the configuration is replaced while the timer runs."""


class InvalidConfig(ValueError):
    """Raised when a duration or round count is non-numeric or below 1."""


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_WORK_SECONDS = 30
DEFAULT_BREAK_SECONDS = 20
DEFAULT_TOTAL_ROUNDS = 3
TICK_INTERVAL_MS = 100


# ── data ──────────────────────────────────────────────────────────────────


def _as_finite(value: object) -> float | None:
    """*value* as a finite float, or ``None`` for anything else."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


@dataclass(frozen=True)
class SessionConfig:
    """Durations and round count for one run of the timer."""

    work_seconds: float = DEFAULT_WORK_SECONDS
    break_seconds: float = DEFAULT_BREAK_SECONDS
    total_rounds: int = DEFAULT_TOTAL_ROUNDS

    def validate(self) -> None:
        """Raise :class:`InvalidConfig` unless every field is ≥ 1."""
        for name in ("work_seconds", "break_seconds", "total_rounds"):
            raw = getattr(self, name)
            value = _as_finite(raw)
            if value is None:
                raise InvalidConfig(
                    f"{name} must be a finite number, got {type(raw).__name__}"
                )
            if value < 1:
                raise InvalidConfig(f"{name} must be at least 1, got {raw!r}")
        if not isinstance(self.total_rounds, numbers.Integral):
            raise InvalidConfig(
                f"total_rounds must be a whole number, got {self.total_rounds!r}"
            )

    def clamped(self) -> SessionConfig:
        """Copy with every field forced into the valid range (≥ 1)."""
        work = _as_finite(self.work_seconds)
        brk = _as_finite(self.break_seconds)
        rounds = _as_finite(self.total_rounds)
        return SessionConfig(
            work_seconds=max(1.0, work) if work is not None else 1.0,
            break_seconds=max(1.0, brk) if brk is not None else 1.0,
            total_rounds=max(1, int(rounds)) if rounds is not None else 1,
        )

    def duration_for(self, phase: Phase) -> float:
        if phase == Phase.WORK:
            return self.work_seconds
        if phase == Phase.BREAK:
            return self.break_seconds
        return 0.0


@dataclass
class TimerState:
    """Engine-owned mutable state."""

    phase: Phase = Phase.WORK
    current_round: int = 1
    elapsed_seconds: float = 0.0
    is_running: bool = False
    anchor_timestamp: float | None = None


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of timer progress, emitted for rendering."""

    phase: Phase
    current_round: int
    total_rounds: int
    elapsed_seconds: float
    remaining_seconds: float
    progress_fraction: float
    is_running: bool = False


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Qt-based interval timer: work/break phases over N rounds.

    Signals
    -------
    snapshot_ready(snapshot: Snapshot)
        Emitted on every sample while running and after every command.
    phase_completed(phase: Phase, round_just_finished: int)
        Emitted exactly once per Work or Break boundary.
    session_completed()
        Emitted once, after the last Work phase.
    running_changed(is_running: bool)
        Emitted whenever ``is_running`` flips.
    config_changed(config: SessionConfig)
        Emitted after a successful :meth:`reconfigure`.
    timer_reset()
        Emitted by every :meth:`reset`, whatever the prior state.
    """

    snapshot_ready = pyqtSignal(object)
    phase_completed = pyqtSignal(object, int)
    session_completed = pyqtSignal()
    running_changed = pyqtSignal(bool)
    config_changed = pyqtSignal(object)
    timer_reset = pyqtSignal()

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        config: SessionConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
        interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)

        self._config: SessionConfig = self._checked(config or SessionConfig())
        self._clock = clock
        self._state = TimerState()

        # ── Qt timer ──────────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(max(1, int(interval_ms)))
        self._qt_timer.timeout.connect(self._on_timeout)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def state(self) -> TimerState:
        """A copy of the current state; mutating it has no effect."""
        return replace(self._state)

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def current_round(self) -> int:
        return self._state.current_round

    @property
    def total_rounds(self) -> int:
        return self._config.total_rounds

    @property
    def is_running(self) -> bool:
        return self._state.is_running

    @property
    def is_completed(self) -> bool:
        return self._state.phase == Phase.COMPLETED

    @property
    def is_sampling(self) -> bool:
        """True while the periodic sampling timer is active."""
        return self._qt_timer.isActive()

    @property
    def interval_ms(self) -> int:
        return self._qt_timer.interval()

    def set_interval(self, interval_ms: int) -> None:
        """Change the sampling cadence.  Does not affect elapsed time."""
        self._qt_timer.setInterval(max(1, int(interval_ms)))

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Start or resume.  Keeps any elapsed time from a pause."""
        st = self._state
        if st.is_running:
            return
        if st.phase == Phase.COMPLETED:
            logger.debug("start ignored: session completed, reset first")
            return
        now = self._clock()
        st.is_running = True
        st.anchor_timestamp = now - st.elapsed_seconds
        self._qt_timer.start()
        logger.debug(
            "started %s round %d at %.3fs elapsed",
            st.phase.value, st.current_round, st.elapsed_seconds,
        )
        self.running_changed.emit(True)
        self.snapshot_ready.emit(self.snapshot(now))

    def pause(self) -> None:
        """Freeze elapsed time.  A later :meth:`start` resumes from it."""
        st = self._state
        if not st.is_running:
            return
        now = self._clock()
        self._qt_timer.stop()
        st.elapsed_seconds = self.sample(now)
        st.is_running = False
        st.anchor_timestamp = None
        logger.debug("paused at %.3fs elapsed", st.elapsed_seconds)
        self.running_changed.emit(False)
        self.snapshot_ready.emit(self.snapshot(now))

    def reset(self) -> None:
        """Return to round 1, Work, zero elapsed.  Config is kept."""
        self._qt_timer.stop()
        was_running = self._state.is_running
        self._state = TimerState()
        logger.debug("reset")
        if was_running:
            self.running_changed.emit(False)
        self.timer_reset.emit()
        self.snapshot_ready.emit(self.snapshot())

    def reconfigure(self, config: SessionConfig, *, strict: bool = True) -> bool:
        """Replace the session configuration while the timer is idle.

        Raises :class:`ConfigLocked` while running, or returns ``False``
        when *strict* is off.  Invalid values are clamped to 1.
        """
        if self._state.is_running:
            logger.warning("reconfigure rejected: timer is running")
            if strict:
                raise ConfigLocked("cannot change configuration while running")
            return False

        self._config = self._checked(config)
        if self._state.current_round > self._config.total_rounds:
            self._state.current_round = self._config.total_rounds
        logger.debug("reconfigured: %s", self._config)
        self.config_changed.emit(self._config)
        self.snapshot_ready.emit(self.snapshot())
        return True

    # ══════════════════════════════════════════════════════════════════
    #  SAMPLING
    # ══════════════════════════════════════════════════════════════════

    def sample(self, now: float | None = None) -> float:
        """Elapsed seconds in the current phase.  Never mutates state."""
        st = self._state
        if not st.is_running or st.anchor_timestamp is None:
            return st.elapsed_seconds
        if now is None:
            now = self._clock()
        return max(0.0, now - st.anchor_timestamp)

    def snapshot(self, now: float | None = None) -> Snapshot:
        """Point-in-time view, clamped so progress never exceeds 1."""
        st = self._state
        if st.phase == Phase.COMPLETED:
            return Snapshot(
                phase=st.phase,
                current_round=st.current_round,
                total_rounds=self._config.total_rounds,
                elapsed_seconds=0.0,
                remaining_seconds=0.0,
                progress_fraction=1.0,
                is_running=False,
            )
        duration = self._config.duration_for(st.phase)
        elapsed = min(self.sample(now), duration)
        return self._make_snapshot(elapsed, duration)

    def tick(self, now: float | None = None) -> Snapshot | None:
        """Advance the state machine to *now*.

        Returns the emitted snapshot, or ``None`` when not running.
        """
        st = self._state
        if not st.is_running:
            return None
        if now is None:
            now = self._clock()

        duration = self._config.duration_for(st.phase)
        elapsed = self.sample(now)
        if elapsed < duration:
            snap = self._make_snapshot(elapsed, duration)
            self.snapshot_ready.emit(snap)
            return snap

        # ── phase boundary ────────────────────────────────────────────
        terminal = self._make_snapshot(duration, duration)
        self.snapshot_ready.emit(terminal)

        finished_phase = st.phase
        finished_round = st.current_round
        logger.info(
            "%s phase complete (round %d/%d)",
            finished_phase.value, finished_round, self._config.total_rounds,
        )
        self.phase_completed.emit(finished_phase, finished_round)

        # A slot connected to phase_completed may have reset the engine.
        if self._state is not st:
            return terminal

        was_running = st.is_running
        self._advance()
        st.elapsed_seconds = 0.0
        st.anchor_timestamp = now if st.is_running else None

        if st.phase == Phase.COMPLETED:
            logger.info("session complete after %d rounds", finished_round)
            if was_running:
                self.running_changed.emit(False)
            self.session_completed.emit()
        return terminal

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _on_timeout(self) -> None:
        # A timeout queued before pause()/reset() must not act.
        if not self._state.is_running:
            return
        self.tick()

    def _advance(self) -> None:
        """Apply the transition table to phase, round and running."""
        st = self._state
        if st.phase == Phase.WORK:
            if st.current_round >= self._config.total_rounds:
                self._qt_timer.stop()
                st.is_running = False
                st.phase = Phase.COMPLETED
            else:
                st.phase = Phase.BREAK
        elif st.phase == Phase.BREAK:
            st.phase = Phase.WORK
            st.current_round += 1

    def _make_snapshot(self, elapsed: float, duration: float) -> Snapshot:
        st = self._state
        progress = elapsed / duration if duration > 0 else 1.0
        return Snapshot(
            phase=st.phase,
            current_round=st.current_round,
            total_rounds=self._config.total_rounds,
            elapsed_seconds=elapsed,
            remaining_seconds=max(0.0, duration - elapsed),
            progress_fraction=max(0.0, min(1.0, progress)),
            is_running=st.is_running,
        )

    @staticmethod
    def _checked(config: SessionConfig) -> SessionConfig:
        try:
            config.validate()
        except InvalidConfig as exc:
            logger.warning("invalid session config (%s); clamping", exc)
            return config.clamped()
        return config
