"""Pytest configuration and fixtures for InterviewPilot tests."""

import pytest
import tempfile
import logging
from pathlib import Path
import numpy as np
import yaml
from aiohttp.test_utils import unused_port

from interviewpilot.config import InterviewPilotConfig
from interviewpilot.models.plan import InterviewBlock


# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@pytest.fixture
def temp_data_dir():
    """Create temporary directory for test data."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def config_data():
    """Configuration settings without a speech proxy."""
    return {
        "speaker_attribution": {
            "dominance_ratio": 0.8,
            "stability_ms": 2000,
            "window_ms": 5000,
            "retention_ms": 10000,
        },
        "timer": {
            "tick_interval_seconds": 1.0,
            "countdown_seconds": 5,
        },
        "logging": {
            "file_path": "logs/test.log",
            "console_output": False,
        },
    }


@pytest.fixture
def config_file(temp_data_dir, config_data):
    """Write config_data to a YAML file and return its path."""
    path = Path(temp_data_dir) / "interviewpilot.yaml"
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config_data, f)
    return str(path)


@pytest.fixture
def config(config_file):
    return InterviewPilotConfig(config_file)


@pytest.fixture
def sample_plan():
    """The plan used throughout the timer tests: 30 minutes in three blocks."""
    return [
        InterviewBlock("Intro", 5),
        InterviewBlock("Tech", 20),
        InterviewBlock("Wrap", 5),
    ]


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def audio_test_data():
    """Generate 16-bit PCM audio test data patterns."""
    def generate_audio(pattern="sine", duration_seconds=0.25, sample_rate=16000, amplitude=0.5):
        samples = int(duration_seconds * sample_rate)
        
        if pattern == "sine":
            t = np.linspace(0, duration_seconds, samples, False)
            wave_data = amplitude * np.sin(2 * np.pi * 440 * t)
        elif pattern == "silence":
            wave_data = np.zeros(samples)
        else:
            raise ValueError(f"Unknown pattern: {pattern}")
        
        audio_data = (wave_data * 32767).astype(np.int16)
        return audio_data.tobytes()
    
    return generate_audio


@pytest.fixture
def unused_tcp_port():
    """A local port nothing is listening on."""
    return unused_port()
