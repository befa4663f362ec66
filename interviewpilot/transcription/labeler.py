"""Attaches the attributed speaker to transcript fragments."""

import time
import logging
from typing import Callable

from ..models.transcription import LabeledTranscript, TranscriptFragment
from ..speaker.attribution import SpeakerAttributor

logger = logging.getLogger(__name__)


def wall_clock_ms() -> float:
    """Milliseconds since the Unix epoch, the timebase of AudioEvent timestamps."""
    return time.time() * 1000.0


class TranscriptLabeler:
    """Labels fragments with the speaker resolved at arrival time."""

    def __init__(self, attributor: SpeakerAttributor, clock_ms: Callable[[], float] = wall_clock_ms):
        self.attributor = attributor
        self.clock_ms = clock_ms

    def label(self, fragment: TranscriptFragment) -> LabeledTranscript:
        speaker = self.attributor.resolve_speaker(self.clock_ms())
        logger.debug(f"[{speaker.value}] {fragment.text!r} (final={fragment.is_final})")
        return LabeledTranscript.from_fragment(fragment, speaker)
