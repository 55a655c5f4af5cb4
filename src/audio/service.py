"""Tone player that synthesizes and plays the completion beep."""

import logging
from typing import Optional, Protocol

import numpy as np

from .engine import ToneEngine, ToneError


class AudioOutputLike(Protocol):
    def play(self, wav: np.ndarray, sample_rate_hz: int) -> None:
        ...


class TonePlayer:
    """Combines synthesis and playback; failures are logged, never raised."""
    def __init__(
        self,
        engine: ToneEngine,
        output: AudioOutputLike,
        logger: Optional[logging.Logger] = None,
    ):
        self._engine = engine
        self._output = output
        self._logger = logger or logging.getLogger(__name__)

    def play(self, volume: int) -> None:
        wav = self._engine.synthesize(volume)
        if not np.any(wav):
            self._logger.debug("Skipping silent tone (volume=%s)", volume)
            return
        self._logger.debug(
            "Playing %d tone samples at %d Hz (volume=%s)",
            len(wav),
            self._engine.sample_rate_hz,
            volume,
        )
        try:
            self._output.play(wav, self._engine.sample_rate_hz)
        except ToneError as error:
            self._logger.warning("Tone playback unavailable: %s", error)
