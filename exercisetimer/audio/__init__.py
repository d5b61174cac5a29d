"""Audio package."""

from .sounds import SoundManager, ToneNotifier, SOUND_NAMES, TONES

__all__ = ["SoundManager", "ToneNotifier", "SOUND_NAMES", "TONES"]
