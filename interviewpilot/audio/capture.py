"""Microphone capture producing local-source audio events."""

import pyaudio
import time
import logging
from threading import Thread, Event
from typing import Optional, Callable

from ..models.events import AudioEvent
from ..models.speaker import AudioSource

logger = logging.getLogger(__name__)


class AudioCapture:
    """Continuous microphone capture in a background thread."""
    
    def __init__(
        self,
        callback: Callable[[AudioEvent], None],
        sample_rate: int = 16000,
        chunk_size: int = 4096,
        channels: int = 1,
    ):
        """Initialize audio capture.
        
        Args:
            callback: Receives every captured AudioEvent
            sample_rate: Audio sample rate expected by the speech proxy
            chunk_size: Size of each audio chunk in samples
            channels: Number of audio channels (1 for mono)
        """
        self.audio_event_callback = callback
        self.sample_rate = sample_rate
        self.chunk_size = chunk_size
        self.channels = channels
        
        self.recording_thread: Optional[Thread] = None
        self.stop_event = Event()
        self.is_recording = False
        self.total_chunks = 0
        
        self.pyaudio_instance: Optional[pyaudio.PyAudio] = None
    
    def start_recording(self) -> None:
        """Start continuous recording in background thread."""
        if self.is_recording:
            logger.warning("Recording already in progress")
            return
        
        logger.info("Starting microphone capture")
        self.stop_event.clear()
        self.total_chunks = 0
        
        self.recording_thread = Thread(target=self._record_continuously, daemon=True)
        self.recording_thread.name = "AudioCaptureThread"
        self.recording_thread.start()
        self.is_recording = True
    
    def stop_recording(self) -> None:
        """Stop recording and wait for the capture thread."""
        if not self.is_recording:
            return
        
        logger.info("Stopping microphone capture")
        self.stop_event.set()
        
        if self.recording_thread and self.recording_thread.is_alive():
            self.recording_thread.join(timeout=2.0)
            if self.recording_thread.is_alive():
                logger.warning("Recording thread did not stop cleanly")
        
        self.is_recording = False
        logger.info(f"Capture stopped. Total chunks: {self.total_chunks}")
    
    def _open_stream(self) -> pyaudio.Stream:
        self.pyaudio_instance = pyaudio.PyAudio()
        stream = self.pyaudio_instance.open(
            format=pyaudio.paInt16,
            channels=self.channels,
            rate=self.sample_rate,
            input=True,
            frames_per_buffer=self.chunk_size,
        )
        logger.info(f"Audio stream opened: {self.sample_rate}Hz, {self.chunk_size} samples/chunk")
        return stream
    
    def _record_continuously(self) -> None:
        stream = None
        try:
            stream = self._open_stream()
            while not self.stop_event.is_set():
                audio_chunk = stream.read(self.chunk_size, exception_on_overflow=False)
                self.total_chunks += 1
                self.audio_event_callback(AudioEvent(
                    chunk_id=f"local_{self.total_chunks}",
                    audio_data=audio_chunk,
                    timestamp=time.time(),
                    sequence_number=self.total_chunks,
                    source=AudioSource.LOCAL,
                    sample_rate=self.sample_rate,
                    channels=self.channels,
                ))
        except Exception as e:
            logger.error(f"Microphone capture failed: {e}", exc_info=True)
        finally:
            if stream:
                stream.stop_stream()
                stream.close()
            if self.pyaudio_instance:
                self.pyaudio_instance.terminate()
                self.pyaudio_instance = None
