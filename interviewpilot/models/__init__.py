"""Data models for the InterviewPilot application."""

from .speaker import AudioSource, Speaker, SpeakerState
from .transcription import TranscriptFragment, LabeledTranscript
from .plan import InterviewBlock, TimerSnapshot
from .suggestions import FollowUpSuggestion
from .events import AudioEvent, NudgeEvent

__all__ = [
    "AudioSource",
    "Speaker",
    "SpeakerState",
    "TranscriptFragment",
    "LabeledTranscript",
    "InterviewBlock",
    "TimerSnapshot",
    "FollowUpSuggestion",
    "AudioEvent",
    "NudgeEvent",
]
