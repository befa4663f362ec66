"""Speaker attribution for unlabeled transcript fragments."""

from .attribution import (
    SpeakerAttributor,
    DOMINANCE_RATIO,
    STABILITY_MS,
    ANALYSIS_WINDOW_MS,
    RETENTION_MS,
)
from .activity import AudioActivityDetector, peak_level

__all__ = [
    "SpeakerAttributor",
    "AudioActivityDetector",
    "peak_level",
    "DOMINANCE_RATIO",
    "STABILITY_MS",
    "ANALYSIS_WINDOW_MS",
    "RETENTION_MS",
]
