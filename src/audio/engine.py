"""Numpy synthesis of the short completion tone."""

from __future__ import annotations

import numpy as np

from .config import AudioConfig

TONE_FREQUENCY_HZ = 800.0
TONE_DURATION_SECONDS = 0.2
_FADE_SECONDS = 0.005


class ToneError(Exception):
    """Raised when the completion tone cannot be synthesized or played."""


def volume_to_gain(volume: int) -> float:
    """Map a 0-100 volume to a linear 0.0-1.0 gain."""
    return max(0, min(100, int(volume))) / 100.0


class ToneEngine:
    """Builds mono float32 sine bursts at a fixed pitch."""
    def __init__(self, config: AudioConfig):
        if config.sample_rate_hz <= 0:
            raise ToneError("sample_rate_hz must be greater than zero")
        self._config = config

    @property
    def sample_rate_hz(self) -> int:
        return self._config.sample_rate_hz

    def synthesize(self, volume: int) -> np.ndarray:
        sample_rate_hz = self._config.sample_rate_hz
        sample_count = int(round(sample_rate_hz * TONE_DURATION_SECONDS))
        t = np.arange(sample_count, dtype=np.float32) / np.float32(sample_rate_hz)
        wav = np.sin(2.0 * np.pi * TONE_FREQUENCY_HZ * t).astype(np.float32)

        # Short linear ramps keep the burst from clicking at either edge.
        fade = min(sample_count // 2, int(sample_rate_hz * _FADE_SECONDS))
        if fade > 0:
            ramp = np.linspace(0.0, 1.0, fade, dtype=np.float32)
            wav[:fade] *= ramp
            wav[-fade:] *= ramp[::-1]

        return wav * np.float32(volume_to_gain(volume))
