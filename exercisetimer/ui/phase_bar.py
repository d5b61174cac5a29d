"""Horizontal progress bar rendered with QPainter.

- Fills left to right as the phase progresses.
- Colour-coded by phase (work=green, break=red).
- Never draws past 100%: the engine clamps the final snapshot.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, QRectF
from PyQt6.QtGui import QPainter, QColor
from PyQt6.QtWidgets import QWidget, QSizePolicy

from ..timer.engine import Phase
from .styles import PHASE_COLORS, TRACK_COLOR


class PhaseBar(QWidget):
    """Custom-painted progress bar for the current phase."""

    BAR_HEIGHT = 16
    RADIUS = 4

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumHeight(self.BAR_HEIGHT)
        self.setSizePolicy(
            QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed,
        )
        self._fraction: float = 0.0
        self._phase: Phase = Phase.WORK
        self._fill_color = QColor(PHASE_COLORS[Phase.WORK])
        self._track_color = QColor(TRACK_COLOR)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC API
    # ══════════════════════════════════════════════════════════════════

    @property
    def fraction(self) -> float:
        return self._fraction

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def fill_color(self) -> QColor:
        return QColor(self._fill_color)

    def set_fraction(self, fraction: float) -> None:
        """Update the fill (0..1)."""
        self._fraction = max(0.0, min(1.0, fraction))
        self.update()

    def set_phase(self, phase: Phase) -> None:
        if phase == self._phase:
            return
        self._phase = phase
        self._fill_color = QColor(PHASE_COLORS.get(phase, "#6B7280"))
        self.update()

    # ══════════════════════════════════════════════════════════════════
    #  PAINTING
    # ══════════════════════════════════════════════════════════════════

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setPen(Qt.PenStyle.NoPen)

        h = min(self.height(), self.BAR_HEIGHT)
        top = (self.height() - h) / 2
        track = QRectF(0, top, self.width(), h)

        # ── background track ─────────────────────────────────────────
        painter.setBrush(self._track_color)
        painter.drawRoundedRect(track, self.RADIUS, self.RADIUS)

        # ── fill ─────────────────────────────────────────────────────
        if self._fraction > 0:
            fill = QRectF(0, top, self.width() * self._fraction, h)
            painter.setBrush(self._fill_color)
            painter.drawRoundedRect(fill, self.RADIUS, self.RADIUS)

        painter.end()
