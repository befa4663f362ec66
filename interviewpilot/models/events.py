"""Event models for pub/sub audio and interview processing."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .speaker import AudioSource


@dataclass
class AudioEvent:
    """Audio chunk event with metadata."""
    chunk_id: str
    audio_data: bytes
    timestamp: float  # Unix timestamp when chunk was captured
    sequence_number: int
    source: AudioSource = AudioSource.LOCAL
    sample_rate: int = 16000
    channels: int = 1
    chunk_duration_ms: Optional[int] = None  # Duration of this chunk in milliseconds
    
    def __post_init__(self):
        """Calculate chunk duration if not provided."""
        if self.chunk_duration_ms is None and self.audio_data:
            # 16-bit audio, 2 bytes per sample
            bytes_per_second = self.sample_rate * self.channels * 2
            duration_seconds = len(self.audio_data) / bytes_per_second
            self.chunk_duration_ms = int(duration_seconds * 1000)


@dataclass
class NudgeEvent:
    """One-shot advisory that elapsed time crossed into a new planned block."""
    block_index: int
    block_label: str
    elapsed_minutes: int
    previous_label: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)
