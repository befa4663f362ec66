"""Audio-level activity detection feeding the speaker attributor."""

import logging
from typing import Dict

import numpy as np

from ..models.events import AudioEvent
from ..models.speaker import AudioSource
from .attribution import SpeakerAttributor

logger = logging.getLogger(__name__)

ACTIVITY_THRESHOLD = 0.01


def peak_level(audio_data: bytes) -> float:
    """Peak absolute level of 16-bit PCM audio, normalised to 0..1."""
    if len(audio_data) < 2:
        return 0.0
    # Drop a trailing odd byte rather than fail on a truncated chunk
    usable = len(audio_data) - (len(audio_data) % 2)
    samples = np.frombuffer(audio_data[:usable], dtype=np.int16)
    return float(np.max(np.abs(samples.astype(np.int32)))) / 32768.0


class AudioActivityDetector:
    """Turns audio chunks into activity tags when they are loud enough."""

    def __init__(self, attributor: SpeakerAttributor, threshold: float = ACTIVITY_THRESHOLD):
        self.attributor = attributor
        self.threshold = threshold
        self.last_level: Dict[AudioSource, float] = {
            AudioSource.LOCAL: 0.0,
            AudioSource.REMOTE: 0.0,
        }

    def detect(self, audio_data: bytes, source: AudioSource, timestamp_ms: float) -> bool:
        """Record activity for ``source`` if the chunk is above the threshold.

        Returns:
            True if the chunk counted as activity
        """
        level = peak_level(audio_data)
        if level <= self.threshold:
            return False

        self.last_level[source] = level
        self.attributor.record_activity(timestamp_ms, source)
        return True

    def on_audio_event(self, event: AudioEvent) -> bool:
        """Pub/sub friendly wrapper: event timestamps are Unix seconds."""
        return self.detect(event.audio_data, event.source, event.timestamp * 1000.0)
