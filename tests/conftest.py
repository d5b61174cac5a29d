"""Shared pytest fixtures for Exercise Timer tests."""

import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from PyQt6.QtWidgets import QApplication

from exercisetimer.timer.engine import TimerEngine, SessionConfig

from helpers import FakeClock


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point every test at a throwaway settings directory."""
    monkeypatch.setattr("exercisetimer.settings.APP_SUPPORT_DIR", tmp_path)
    monkeypatch.setattr(
        "exercisetimer.settings.SETTINGS_PATH", tmp_path / "settings.json",
    )
    monkeypatch.setattr("exercisetimer.audio.sounds.SOUNDS_DIR", tmp_path / "sounds")
    yield tmp_path


@pytest.fixture
def clock():
    """Manually advanced monotonic clock starting at 1000.0 s."""
    return FakeClock(1000.0)


@pytest.fixture
def engine(qapp, clock):
    """Fresh TimerEngine: 30 s work, 20 s break, 3 rounds, fake clock."""
    eng = TimerEngine(
        parent=None,
        config=SessionConfig(work_seconds=30, break_seconds=20, total_rounds=3),
        clock=clock,
    )
    yield eng
    eng.reset()


@pytest.fixture
def short_engine(qapp, clock):
    """TimerEngine with 1 s phases, for full-session walks."""
    eng = TimerEngine(
        parent=None,
        config=SessionConfig(work_seconds=1, break_seconds=1, total_rounds=2),
        clock=clock,
    )
    yield eng
    eng.reset()
