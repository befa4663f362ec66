"""Transcript publisher module for pub/sub event publishing."""

import logging
from typing import Callable
from pubsub import pub
from ..models.transcription import LabeledTranscript

logger = logging.getLogger(__name__)


class TranscriptionPublisher:
    """Publishes labeled transcripts using pubsub.pub."""
    
    def __init__(self, topic: str):
        """Initialize transcription publisher.
        
        Args:
            topic: Pub/sub topic name for labeled transcripts
        """
        self.topic = topic
        logger.info(f"TranscriptionPublisher initialized with topic: {topic}")
    
    def publish_transcript(self, transcript: LabeledTranscript) -> None:
        """Publish a labeled transcript to the pub/sub topic."""
        pub.sendMessage(self.topic, transcript=transcript)
        logger.debug(f"Published transcript: [{transcript.speaker.value}] final={transcript.is_final}")
    
    def get_callback(self) -> Callable[[LabeledTranscript], None]:
        """Get callback function for a TranscriptionService to use."""
        return self.publish_transcript
