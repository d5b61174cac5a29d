"""Tone synthesis and playback using numpy + QSoundEffect.

Every tone is a sine wave shaped by an ADSR envelope, rendered to a
16-bit mono WAV file and cached to disk so later launches are instant.

Sound names
-----------
- ``work_end``   : lower beep (600 Hz, 200 ms) when a work phase ends
- ``break_end``  : higher beep (1000 Hz, 300 ms) when a break ends
- ``session_end``: longest, highest beep (1200 Hz, 500 ms)
- ``click``      : subtle tick for the volume preview

Playback is best-effort.  A missing audio device or a failing effect
is logged and otherwise ignored; it never reaches the timer engine.
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..timer.engine import Phase, TimerEngine


logger = logging.getLogger(__name__)


# ── paths ────────────────────────────────────────────────────────────────

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "ExerciseTimer"
SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SAMPLE_RATE = 44100

# name → (frequency Hz, duration s, amplitude)
TONES: dict[str, tuple[float, float, float]] = {
    "work_end": (600.0, 0.2, 0.5),
    "break_end": (1000.0, 0.3, 0.5),
    "session_end": (1200.0, 0.5, 0.55),
    "click": (1200.0, 0.015, 0.2),
}

SOUND_NAMES = tuple(TONES)

PHASE_SOUNDS: dict[Phase, str] = {
    Phase.WORK: "work_end",
    Phase.BREAK: "break_end",
}


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _make_envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.ones(length, dtype=np.float64)
    # Attack
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    # Decay
    d_end = min(a + decay, length)
    if decay > 0 and d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    # Sustain
    s_end = max(length - release, d_end)
    if s_end > d_end:
        env[d_end:s_end] = sustain_level
    # Release
    if release > 0 and s_end < length:
        env[s_end:] = np.linspace(sustain_level, 0.0, length - s_end)
    return env


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


def generate_tone(freq: float, duration_s: float, amplitude: float = 0.5) -> bytes:
    """A single enveloped beep, padded with a short silent tail."""
    tone = _sine(freq, duration_s) * amplitude
    n = len(tone)
    # Short attack/release so the beep has no click at either edge
    edge = max(1, min(int(SAMPLE_RATE * 0.01), n // 4))
    env = _make_envelope(
        n, attack=edge, decay=edge, sustain_level=0.8, release=edge * 2,
    )
    # Pad with silence so QSoundEffect doesn't clip
    tail = np.zeros(int(SAMPLE_RATE * 0.03))
    return _to_wav_bytes(np.concatenate([tone * env, tail]))


def generate_named(name: str) -> bytes:
    """Render the tone registered under *name* in :data:`TONES`."""
    freq, duration_s, amplitude = TONES[name]
    return generate_tone(freq, duration_s, amplitude)


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Manages tone synthesis, caching, and playback.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_volume(70)
        mgr.play("work_end")
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.7  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}

        try:
            self._ensure_wav_files()
        except OSError as exc:
            logger.warning("could not write tone cache in %s: %s", self._sounds_dir, exc)
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def set_volume(self, level: int) -> None:
        """Set volume (0-100).  Updates all loaded effects."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def play(self, name: str) -> bool:
        """Play a tone by name.  Returns False if nothing was played."""
        if not self._enabled:
            return False
        effect = self._effects.get(name)
        if effect is None:
            logger.debug("no tone loaded for %r", name)
            return False
        effect.play()
        return True

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        """Generate any missing WAV files to the cache directory."""
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                path.write_bytes(generate_named(name))

    def _load_effects(self) -> None:
        """Create QSoundEffect instances from cached WAV files."""
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if path.exists():
                effect = QSoundEffect(self)
                effect.setSource(QUrl.fromLocalFile(str(path)))
                effect.setVolume(self._volume)
                self._effects[name] = effect


# ═══════════════════════════════════════════════════════════════════════════
#  ENGINE → TONE BRIDGE
# ═══════════════════════════════════════════════════════════════════════════


class ToneNotifier(QObject):
    """Plays a tone for every phase boundary and for session end.

    Work end → ``work_end``, break end → ``break_end``, session end →
    ``session_end`` (replacing the last ``work_end``).  Any exception
    raised by the sound backend is logged and dropped so engine state is
    never affected.
    """

    def __init__(self, sounds: SoundManager, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._sounds = sounds
        self._engine: TimerEngine | None = None

    def attach(self, engine: TimerEngine) -> None:
        """Subscribe to *engine*'s transition signals."""
        self.detach()
        engine.phase_completed.connect(self._on_phase_completed)
        engine.session_completed.connect(self._on_session_completed)
        self._engine = engine

    def detach(self) -> None:
        if self._engine is None:
            return
        self._engine.phase_completed.disconnect(self._on_phase_completed)
        self._engine.session_completed.disconnect(self._on_session_completed)
        self._engine = None

    def _on_phase_completed(self, phase: Phase, round_number: int) -> None:
        # The final work phase is announced by session_end alone.
        if (
            phase == Phase.WORK
            and self._engine is not None
            and round_number >= self._engine.total_rounds
        ):
            return
        name = PHASE_SOUNDS.get(phase)
        if name is not None:
            self._play(name)

    def _on_session_completed(self) -> None:
        self._play("session_end")

    def _play(self, name: str) -> None:
        try:
            self._sounds.play(name)
        except Exception:
            logger.warning("tone %r failed to play", name, exc_info=True)
