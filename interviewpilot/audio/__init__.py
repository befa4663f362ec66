"""Audio capture and publishing module."""

from .audio_pub import AudioPublisher

__all__ = [
    'AudioPublisher',
]
