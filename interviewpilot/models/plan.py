"""Interview plan and timer models."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class InterviewBlock:
    """A named, fixed-duration segment of a planned interview."""
    label: str
    minutes: int


@dataclass
class TimerSnapshot:
    """What the UI shows for the interview timer."""
    elapsed_minutes: int = 0
    elapsed_seconds: int = 0  # seconds part, 0-59
    total_elapsed_seconds: int = 0
    current_block: Optional[InterviewBlock] = None
    next_block: Optional[InterviewBlock] = None
    current_block_index: Optional[int] = None
    should_show_nudge: bool = False
    countdown_seconds_left: Optional[int] = None
