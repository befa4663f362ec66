"""Transcript aggregator collecting final labeled entries for a session."""

import logging
import threading
from typing import List, Optional
from pubsub import pub

from ..models.speaker import Speaker
from ..models.transcription import LabeledTranscript

logger = logging.getLogger(__name__)


class TranscriptAggregator:
    """Keeps the final transcripts published on a topic, in arrival order."""
    
    def __init__(self, topic: str):
        """Initialize transcript aggregator.
        
        Args:
            topic: Topic for labeled transcripts
        """
        self.topic = topic
        self.entries: List[LabeledTranscript] = []
        self.latest_interim: Optional[LabeledTranscript] = None
        self.lock = threading.RLock()
        
        pub.subscribe(self._on_transcript, topic)
        logger.info(f"TranscriptAggregator initialized - subscribed to {topic}")

    def _on_transcript(self, transcript: LabeledTranscript) -> None:
        with self.lock:
            if transcript.is_final:
                if transcript.text.strip():
                    self.entries.append(transcript)
                self.latest_interim = None
            else:
                self.latest_interim = transcript

    def get_entries(self) -> List[LabeledTranscript]:
        with self.lock:
            return self.entries.copy()

    def candidate_responses(self, limit: int = 8) -> List[LabeledTranscript]:
        """The most recent final entries not spoken by the interviewer."""
        with self.lock:
            responses = [e for e in self.entries if e.speaker is not Speaker.INTERVIEWER]
        return responses[-limit:] if limit else responses

    def full_transcript(self) -> str:
        with self.lock:
            return "\n".join(f"[{e.speaker.value}]: {e.text}" for e in self.entries)

    def clear(self) -> None:
        with self.lock:
            self.entries.clear()
            self.latest_interim = None

    def shutdown(self) -> None:
        """Unsubscribe from the transcript topic."""
        try:
            pub.unsubscribe(self._on_transcript, self.topic)
        except Exception as e:
            logger.warning(f"Error during unsubscribe: {e}")
        logger.info("TranscriptAggregator shutdown complete")
