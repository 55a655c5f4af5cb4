"""Sounddevice-backed playback for the completion tone."""

import logging
from typing import Optional

import numpy as np
import sounddevice as sd

from .engine import ToneError


class SoundDeviceAudioOutput:
    """Plays mono PCM arrays through a selected sounddevice output."""
    def __init__(
        self,
        output_device_index: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._output_device_index = output_device_index
        self._logger = logger or logging.getLogger(__name__)

    def play(self, wav: np.ndarray, sample_rate_hz: int) -> None:
        """Start playback and return immediately."""
        if wav.ndim != 1:
            raise ToneError("Expected mono PCM array for playback")
        if len(wav) == 0:
            raise ToneError("Cannot play empty audio buffer")

        try:
            sd.play(
                wav,
                samplerate=sample_rate_hz,
                device=self._output_device_index,
                blocking=False,
            )
        except Exception as error:
            raise ToneError(f"Audio playback failed: {error}") from error
