"""Follow-up suggestion models."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class FollowUpSuggestion:
    """A suggested follow-up question for the interviewer."""
    question: str
    reasoning: Optional[str] = None
