"""Speaker attribution data models."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class AudioSource(Enum):
    """Where an audio chunk was captured."""
    LOCAL = "local"
    REMOTE = "remote"


class Speaker(Enum):
    """Interview participant labels."""
    INTERVIEWER = "Interviewer"
    CANDIDATE = "Candidate"

    @classmethod
    def from_role(cls, role: str) -> "Speaker":
        """Map a declared session role ("interviewer"/"candidate") to a speaker."""
        try:
            return cls[role.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown role: {role!r}")


@dataclass
class SpeakerState:
    """Current attributed speaker and when it last changed."""
    current_speaker: Speaker
    last_change_time: Optional[float] = None  # ms; None until the first transition
