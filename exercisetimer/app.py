"""Main application window for Exercise Timer."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QLabel, QStatusBar,
)

from .timer.engine import TimerEngine, Phase
from .ui.timer_form import TimerForm
from .ui.timer_widget import TimerWidget
from .ui.styles import build_stylesheet
from .settings import Settings, load_settings, save_settings
from .audio.sounds import SoundManager, ToneNotifier


logger = logging.getLogger(__name__)

STATUS_MESSAGES: dict[Phase, str] = {
    Phase.WORK:  "Work phase done. Take a break!",
    Phase.BREAK: "Break over. Back to work!",
}


class ExerciseTimerApp(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        sound_manager: SoundManager | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Exercise Timer")
        self.setMinimumSize(380, 480)

        # ── geometry save debounce ─────────────────────────────────────
        self._geometry_save_timer = QTimer(self)
        self._geometry_save_timer.setSingleShot(True)
        self._geometry_save_timer.setInterval(500)
        self._geometry_save_timer.timeout.connect(self._save_geometry)

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings if settings is not None else load_settings()

        # ── engine ────────────────────────────────────────────────────
        self._timer_engine = TimerEngine(
            self,
            config=self._settings.session_config(),
            interval_ms=self._settings.tick_interval_ms,
        )

        # ── audio ─────────────────────────────────────────────────────
        self._sound_manager = sound_manager or SoundManager(parent=self)
        self._sound_manager.set_enabled(self._settings.sound_enabled)
        self._sound_manager.set_volume(self._settings.sound_volume)
        self._tone_notifier = ToneNotifier(self._sound_manager, parent=self)
        self._tone_notifier.attach(self._timer_engine)

        self._build_ui()
        self._connect_signals()
        self.setStyleSheet(build_stylesheet())
        self._restore_geometry()
        self._status_bar.showMessage("Ready when you are!")

    # ══════════════════════════════════════════════════════════════════
    #  BUILD UI
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        central = QWidget(self)
        central.setObjectName("central")
        self.setCentralWidget(central)

        layout = QVBoxLayout(central)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(16)

        heading = QLabel("Exercise Timer", central)
        heading.setStyleSheet("font-size: 24px; font-weight: 700;")
        layout.addWidget(heading)

        self._timer_form = TimerForm(
            self._timer_engine,
            self._settings,
            central,
            sound_preview_callback=lambda: self._sound_manager.play("click"),
        )
        layout.addWidget(self._timer_form)

        self._timer_widget = TimerWidget(self._timer_engine, central)
        layout.addWidget(self._timer_widget)
        layout.addStretch()

        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)

    def _connect_signals(self) -> None:
        eng = self._timer_engine
        eng.running_changed.connect(self._on_running_changed)
        eng.phase_completed.connect(self._on_phase_completed)
        eng.session_completed.connect(self._on_session_completed)
        eng.timer_reset.connect(self._on_timer_reset)
        self._timer_form.sound_changed.connect(self._on_sound_changed)

    # ══════════════════════════════════════════════════════════════════
    #  TIMER SIGNALS
    # ══════════════════════════════════════════════════════════════════

    def _on_running_changed(self, running: bool) -> None:
        eng = self._timer_engine
        if running:
            self._status_bar.showMessage("Running…")
        elif not eng.is_completed:
            self._status_bar.showMessage("Paused")

    def _on_phase_completed(self, phase: Phase, round_number: int) -> None:
        msg = STATUS_MESSAGES.get(phase)
        if msg:
            self._status_bar.showMessage(f"Round {round_number}: {msg}")

    def _on_session_completed(self) -> None:
        self._status_bar.showMessage("Session complete! Press Reset to go again.")

    def _on_timer_reset(self) -> None:
        self._status_bar.showMessage("Ready when you are!")

    def _on_sound_changed(self, enabled: bool, volume: int) -> None:
        self._sound_manager.set_enabled(enabled)
        self._sound_manager.set_volume(volume)

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW STATE
    # ══════════════════════════════════════════════════════════════════

    def _restore_geometry(self) -> None:
        """Restore window position and size from settings."""
        s = self._settings
        if s.window_x is not None and s.window_y is not None:
            self.move(s.window_x, s.window_y)
        if s.window_width and s.window_height:
            self.resize(s.window_width, s.window_height)

    def _save_geometry(self) -> None:
        """Persist current window geometry to settings."""
        if not self.isVisible():
            return
        pos = self.pos()
        size = self.size()
        self._settings.window_x = pos.x()
        self._settings.window_y = pos.y()
        self._settings.window_width = size.width()
        self._settings.window_height = size.height()
        try:
            save_settings(self._settings)
        except OSError as exc:
            logger.warning("could not save window geometry: %s", exc)

    def _schedule_geometry_save(self) -> None:
        """Debounce geometry saves; restart 500ms timer on each move/resize."""
        if hasattr(self, "_geometry_save_timer"):
            self._geometry_save_timer.start()

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._save_geometry()
        self._timer_engine.reset()
        event.accept()

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._schedule_geometry_save()

    def moveEvent(self, event) -> None:  # type: ignore[override]
        super().moveEvent(event)
        self._schedule_geometry_save()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Handle Space (start/pause) and Escape (reset) globally."""
        key = event.key()
        if key == Qt.Key.Key_Space and not event.modifiers():
            self._timer_widget.toggle()
            event.accept()
            return
        if key == Qt.Key.Key_Escape:
            self._timer_engine.reset()
            event.accept()
            return
        super().keyPressEvent(event)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def engine(self) -> TimerEngine:
        return self._timer_engine

    @property
    def status_text(self) -> str:
        return self._status_bar.currentMessage()
