"""Transcription-related data models."""

from dataclasses import dataclass
from typing import Optional

from .speaker import Speaker


@dataclass
class TranscriptFragment:
    """A transcript fragment as delivered by the speech proxy, without a speaker."""
    text: str
    is_final: bool
    confidence: float
    timestamp: Optional[str] = None


@dataclass
class LabeledTranscript:
    """A transcript fragment with the attributed speaker attached."""
    speaker: Speaker
    text: str
    is_final: bool
    confidence: float
    timestamp: Optional[str] = None

    @classmethod
    def from_fragment(cls, fragment: TranscriptFragment, speaker: Speaker) -> "LabeledTranscript":
        return cls(
            speaker=speaker,
            text=fragment.text,
            is_final=fragment.is_final,
            confidence=fragment.confidence,
            timestamp=fragment.timestamp,
        )
