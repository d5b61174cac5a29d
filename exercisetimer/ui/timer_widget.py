"""Timer display card.

Layout (top → bottom):
    - Title
    - Round indicator ("Round: 2 / 3")
    - Phase label ("Work Time" / "Break Time" / "Session Complete")
    - Elapsed text ("Time Elapsed: 12.3 seconds of 30")
    - PhaseBar
    - Start/Pause + Reset buttons
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QFrame,
)

from ..timer.engine import TimerEngine, Phase, Snapshot
from .phase_bar import PhaseBar


PHASE_LABELS: dict[Phase, str] = {
    Phase.WORK:      "Work Time",
    Phase.BREAK:     "Break Time",
    Phase.COMPLETED: "Session Complete",
}


def _fmt_seconds(value: float) -> str:
    """Whole numbers without a decimal point, anything else to 1 place."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.1f}"


class TimerWidget(QWidget):
    """Renders engine snapshots and forwards button presses."""

    def __init__(self, engine: TimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._build_ui()
        self._connect_signals()
        self.render(engine.snapshot())
        self._on_running_changed(engine.is_running)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(6)

        title = QLabel("Timer", card)
        title.setObjectName("cardTitle")
        layout.addWidget(title)
        layout.addSpacing(6)

        self._round_label = QLabel(card)
        self._phase_label = QLabel(card)
        self._elapsed_label = QLabel(card)
        self._elapsed_label.setObjectName("mutedLabel")
        layout.addWidget(self._round_label)
        layout.addWidget(self._phase_label)
        layout.addWidget(self._elapsed_label)

        layout.addSpacing(4)
        self._bar = PhaseBar(card)
        layout.addWidget(self._bar)
        layout.addSpacing(10)

        # ── controls ─────────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(8)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignLeft)

        self._start_pause_btn = QPushButton("Start", card)
        self._start_pause_btn.setObjectName("primaryButton")

        self._reset_btn = QPushButton("Reset", card)
        self._reset_btn.setObjectName("secondaryButton")

        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._reset_btn)
        layout.addLayout(btn_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self.toggle)
        self._reset_btn.clicked.connect(self._engine.reset)

        self._engine.snapshot_ready.connect(self.render)
        self._engine.running_changed.connect(self._on_running_changed)
        self._engine.session_completed.connect(self._on_session_completed)

    # ── slots ─────────────────────────────────────────────────────────────

    def toggle(self) -> None:
        """Start when stopped, pause when running."""
        if self._engine.is_running:
            self._engine.pause()
        else:
            self._engine.start()

    def render(self, snap: Snapshot) -> None:
        self._round_label.setText(
            f"Round: {snap.current_round} / {snap.total_rounds}"
        )
        self._phase_label.setText(PHASE_LABELS.get(snap.phase, ""))

        if snap.phase == Phase.COMPLETED:
            self._elapsed_label.setText("All rounds finished.")
        else:
            duration = self._engine.config.duration_for(snap.phase)
            self._elapsed_label.setText(
                f"Time Elapsed: {snap.elapsed_seconds:.1f} seconds "
                f"of {_fmt_seconds(duration)}"
            )

        self._bar.set_phase(snap.phase)
        self._bar.set_fraction(snap.progress_fraction)
        self._start_pause_btn.setEnabled(
            snap.is_running or snap.phase != Phase.COMPLETED
        )

    def _on_running_changed(self, running: bool) -> None:
        self._start_pause_btn.setText("Pause" if running else "Start")
        self._start_pause_btn.setEnabled(running or not self._engine.is_completed)

    def _on_session_completed(self) -> None:
        self.render(self._engine.snapshot())
