"""QSS stylesheet and phase colors for Exercise Timer."""

from __future__ import annotations

from ..timer.engine import Phase

# ── phase colors (bar fill) ──────────────────────────────────────────────

PHASE_COLORS: dict[Phase, str] = {
    Phase.WORK:      "#22C55E",   # green
    Phase.BREAK:     "#EF4444",   # red
    Phase.COMPLETED: "#3B82F6",   # blue
}

TRACK_COLOR = "#E5E7EB"

PALETTE: dict[str, str] = {
    "bg":         "#F3F4F6",
    "surface":    "#FFFFFF",
    "text":       "#1F2937",
    "text_muted": "#6B7280",
    "primary":    "#3B82F6",
    "primary_hover": "#1D4ED8",
    "secondary":  "#6B7280",
    "secondary_hover": "#374151",
    "border":     "#D1D5DB",
}


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    """Return the application-wide QSS for *palette*."""
    p = dict(PALETTE)
    if palette:
        p.update(palette)
    return f"""
QMainWindow, QWidget#central {{
    background-color: {p['bg']};
    color: {p['text']};
}}
QFrame#card {{
    background-color: {p['surface']};
    border-radius: 6px;
    border: 1px solid {p['border']};
}}
QLabel#cardTitle {{
    font-size: 18px;
    font-weight: 600;
}}
QLabel#mutedLabel {{
    color: {p['text_muted']};
}}
QPushButton#primaryButton {{
    background-color: {p['primary']};
    color: white;
    font-weight: 700;
    padding: 8px 16px;
    border-radius: 4px;
}}
QPushButton#primaryButton:hover {{
    background-color: {p['primary_hover']};
}}
QPushButton#secondaryButton {{
    background-color: {p['secondary']};
    color: white;
    font-weight: 700;
    padding: 8px 16px;
    border-radius: 4px;
}}
QPushButton#secondaryButton:hover {{
    background-color: {p['secondary_hover']};
}}
QSpinBox {{
    padding: 6px 8px;
    border: 1px solid {p['border']};
    border-radius: 4px;
}}
"""
