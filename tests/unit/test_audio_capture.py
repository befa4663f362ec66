"""Unit tests for AudioCapture with PyAudio mocked out."""

import time
from unittest.mock import Mock, patch

import pytest

from interviewpilot.models.speaker import AudioSource


@pytest.fixture
def mock_pyaudio():
    """Mock PyAudio for testing without actual audio hardware."""
    with patch('pyaudio.PyAudio') as mock_pyaudio_class:
        mock_pyaudio_instance = Mock()
        mock_stream = Mock()
        
        def read(*args, **kwargs):
            time.sleep(0.005)
            return b'\x00\x10' * 4096
        
        mock_stream.read.side_effect = read
        mock_pyaudio_instance.open.return_value = mock_stream
        mock_pyaudio_class.return_value = mock_pyaudio_instance
        
        yield {
            'class': mock_pyaudio_class,
            'instance': mock_pyaudio_instance,
            'stream': mock_stream
        }


@pytest.mark.unit
class TestAudioCapture:
    """Test cases for microphone capture."""
    
    def test_initialization(self):
        from interviewpilot.audio.capture import AudioCapture
        capture = AudioCapture(callback=Mock())
        
        assert capture.sample_rate == 16000
        assert capture.chunk_size == 4096
        assert capture.channels == 1
        assert capture.is_recording is False
        assert capture.total_chunks == 0
    
    def test_capture_publishes_local_events(self, mock_pyaudio):
        from interviewpilot.audio.capture import AudioCapture
        events = []
        capture = AudioCapture(callback=events.append)
        
        capture.start_recording()
        time.sleep(0.1)
        capture.stop_recording()
        
        assert capture.is_recording is False
        assert len(events) > 0
        assert all(e.source is AudioSource.LOCAL for e in events)
        assert events[0].chunk_id == "local_1"
        assert events[0].chunk_duration_ms == 256
        mock_pyaudio['stream'].close.assert_called_once()
        mock_pyaudio['instance'].terminate.assert_called_once()
    
    def test_start_recording_already_recording(self, mock_pyaudio):
        from interviewpilot.audio.capture import AudioCapture
        capture = AudioCapture(callback=Mock())
        capture.is_recording = True
        
        with patch.object(capture, '_record_continuously') as mock_record:
            capture.start_recording()
            mock_record.assert_not_called()
    
    def test_stop_without_recording_is_noop(self):
        from interviewpilot.audio.capture import AudioCapture
        capture = AudioCapture(callback=Mock())
        capture.stop_recording()
        
        assert capture.stop_event.is_set() is False
