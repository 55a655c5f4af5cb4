"""Public exports for completion-tone components.

`audio.output` is imported explicitly by callers because loading
`sounddevice` requires the PortAudio system library.
"""

from .config import AudioConfig, AudioConfigurationError
from .engine import ToneEngine, ToneError, volume_to_gain
from .service import TonePlayer

__all__ = [
    "AudioConfig",
    "AudioConfigurationError",
    "ToneEngine",
    "ToneError",
    "TonePlayer",
    "volume_to_gain",
]
