"""Transcription module for InterviewPilot."""

from .base import TranscriptionService
from .labeler import TranscriptLabeler
from .proxy_client import SpeechProxyClient, ConnectionState
from .publisher import TranscriptionPublisher
from .aggregator import TranscriptAggregator

__all__ = [
    "TranscriptionService",
    "TranscriptLabeler",
    "SpeechProxyClient",
    "ConnectionState",
    "TranscriptionPublisher",
    "TranscriptAggregator",
]
