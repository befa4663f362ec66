"""Abstract base class for transcription services."""

from abc import ABC, abstractmethod
from typing import Callable, Optional
import logging

from ..models.speaker import AudioSource
from ..models.transcription import LabeledTranscript

logger = logging.getLogger(__name__)

TranscriptCallback = Callable[[LabeledTranscript], None]
ErrorCallback = Callable[[str], None]


class TranscriptionService(ABC):
    """Streams audio to a speech engine and delivers labeled transcripts.

    Exactly one transcription callback and one error callback are active at a
    time; registering a new one replaces the previous one.
    """

    def __init__(self):
        self.transcription_callback: Optional[TranscriptCallback] = None
        self.error_callback: Optional[ErrorCallback] = None

    @abstractmethod
    def start(self) -> None:
        """Connect to the speech engine and begin transcribing."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop transcribing and release the connection."""
        pass

    @abstractmethod
    def send_audio(self, audio_data: bytes, source: AudioSource = AudioSource.LOCAL) -> None:
        """Forward an audio chunk captured from ``source``."""
        pass

    def on_transcription(self, callback: Optional[TranscriptCallback]) -> None:
        self.transcription_callback = callback

    def on_error(self, callback: Optional[ErrorCallback]) -> None:
        self.error_callback = callback

    def _emit_transcript(self, transcript: LabeledTranscript) -> None:
        if self.transcription_callback:
            self.transcription_callback(transcript)

    def _emit_error(self, message: str) -> None:
        logger.error(f"Transcription error: {message}")
        if self.error_callback:
            self.error_callback(message)
