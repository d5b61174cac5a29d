"""Timer settings form.

An inline card that edits work/break durations, the round count and
sound preferences.  Every field is clamped to at least 1 before it
reaches the engine, changes are saved to disk immediately, and the
timer inputs are disabled while the engine is running.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QFormLayout, QFrame,
    QLabel, QSpinBox, QSlider, QCheckBox,
)

from ..settings import Settings, save_settings, clamp_seconds, clamp_rounds
from ..timer.engine import TimerEngine, ConfigLocked


logger = logging.getLogger(__name__)

MAX_SECONDS = 24 * 60 * 60
MAX_ROUNDS = 99


class TimerForm(QWidget):
    """Form collaborator: turns user input into ``engine.reconfigure``."""

    sound_changed = pyqtSignal(bool, int)  # enabled, volume 0-100

    def __init__(
        self,
        engine: TimerEngine,
        settings: Settings,
        parent: QWidget | None = None,
        *,
        sound_preview_callback: callable | None = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._settings = settings
        self._sound_preview = sound_preview_callback
        self._populating = False

        self._build_ui()
        self._populate()
        self._engine.running_changed.connect(self._on_running_changed)
        self._on_running_changed(engine.is_running)

    # ══════════════════════════════════════════════════════════════════
    #  BUILD UI
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(10)

        title = QLabel("Timer Settings", card)
        title.setObjectName("cardTitle")
        layout.addWidget(title)

        form = QFormLayout()
        form.setContentsMargins(0, 0, 0, 0)
        form.setHorizontalSpacing(20)
        form.setVerticalSpacing(10)

        self._work_spin = QSpinBox(card)
        self._work_spin.setRange(1, MAX_SECONDS)
        self._work_spin.setSuffix(" s")
        self._work_spin.valueChanged.connect(self._on_timer_changed)
        form.addRow("Work time:", self._work_spin)

        self._rounds_spin = QSpinBox(card)
        self._rounds_spin.setRange(1, MAX_ROUNDS)
        self._rounds_spin.valueChanged.connect(self._on_timer_changed)
        form.addRow("Rounds:", self._rounds_spin)

        self._break_spin = QSpinBox(card)
        self._break_spin.setRange(1, MAX_SECONDS)
        self._break_spin.setSuffix(" s")
        self._break_spin.valueChanged.connect(self._on_timer_changed)
        form.addRow("Break time:", self._break_spin)

        self._sound_cb = QCheckBox("Beep on phase change", card)
        self._sound_cb.toggled.connect(self._on_sound_changed)
        form.addRow("", self._sound_cb)

        # Volume slider row
        vol_row = QHBoxLayout()
        vol_row.setSpacing(10)
        self._vol_slider = QSlider(Qt.Orientation.Horizontal, card)
        self._vol_slider.setRange(0, 100)
        self._vol_slider.setTickInterval(10)
        self._vol_label = QLabel("70%", card)
        self._vol_label.setMinimumWidth(36)
        self._vol_slider.valueChanged.connect(self._on_volume_changed)
        self._vol_slider.sliderReleased.connect(self._on_volume_released)
        vol_row.addWidget(self._vol_slider)
        vol_row.addWidget(self._vol_label)

        vol_wrapper = QWidget(card)
        vol_wrapper.setLayout(vol_row)
        form.addRow("Volume:", vol_wrapper)

        layout.addLayout(form)

    # ══════════════════════════════════════════════════════════════════
    #  POPULATE FROM SETTINGS
    # ══════════════════════════════════════════════════════════════════

    def _populate(self) -> None:
        s = self._settings
        self._populating = True
        try:
            self._work_spin.setValue(min(clamp_seconds(s.work_seconds), MAX_SECONDS))
            self._break_spin.setValue(min(clamp_seconds(s.break_seconds), MAX_SECONDS))
            self._rounds_spin.setValue(min(clamp_rounds(s.total_rounds), MAX_ROUNDS))
            self._sound_cb.setChecked(s.sound_enabled)
            self._vol_slider.setValue(s.sound_volume)
            self._vol_label.setText(f"{s.sound_volume}%")
        finally:
            self._populating = False

    # ══════════════════════════════════════════════════════════════════
    #  CHANGE HANDLERS (save immediately)
    # ══════════════════════════════════════════════════════════════════

    def _on_timer_changed(self) -> None:
        if self._populating:
            return
        self._settings.work_seconds = clamp_seconds(self._work_spin.value())
        self._settings.break_seconds = clamp_seconds(self._break_spin.value())
        self._settings.total_rounds = clamp_rounds(self._rounds_spin.value())
        self._save()
        self.apply()

    def _on_sound_changed(self) -> None:
        if self._populating:
            return
        self._settings.sound_enabled = self._sound_cb.isChecked()
        self._save()
        self.sound_changed.emit(self._settings.sound_enabled, self._settings.sound_volume)

    def _on_volume_changed(self, value: int) -> None:
        self._vol_label.setText(f"{value}%")
        if self._populating:
            return
        self._settings.sound_volume = value
        self._save()
        self.sound_changed.emit(self._settings.sound_enabled, value)

    def _on_volume_released(self) -> None:
        """Play a click sound when the user releases the volume slider."""
        if self._sound_preview:
            self._sound_preview()

    def _on_running_changed(self, running: bool) -> None:
        for spin in (self._work_spin, self._break_spin, self._rounds_spin):
            spin.setEnabled(not running)
        # Edits made while locked are applied once the timer stops
        if not running and self._engine.config != self._settings.session_config():
            self.apply()

    def _save(self) -> None:
        try:
            save_settings(self._settings)
        except OSError as exc:
            logger.warning("could not save settings: %s", exc)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    def apply(self) -> bool:
        """Push the current form values into the engine."""
        try:
            return self._engine.reconfigure(self._settings.session_config())
        except ConfigLocked:
            return False

    @property
    def settings(self) -> Settings:
        return self._settings
