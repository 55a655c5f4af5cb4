"""Configuration model for completion-tone playback."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_SAMPLE_RATE_HZ = 44100


class AudioConfigurationError(Exception):
    """Raised when audio configuration is invalid."""


@dataclass(frozen=True)
class AudioConfig:
    """Resolved sample rate and optional output-device selection."""
    enabled: bool = True
    sample_rate_hz: int = DEFAULT_SAMPLE_RATE_HZ
    output_device_index: Optional[int] = None

    def __post_init__(self) -> None:
        if not 8000 <= self.sample_rate_hz <= 192000:
            raise AudioConfigurationError(
                f"sample_rate_hz must be in [8000, 192000], got: {self.sample_rate_hz}"
            )

    @classmethod
    def from_settings(cls, settings) -> "AudioConfig":
        return cls(
            enabled=bool(settings.enabled),
            sample_rate_hz=int(settings.sample_rate_hz),
            output_device_index=settings.output_device,
        )
