"""Follow-up question suggestions."""

from .errors import SuggestionError
from .gemini_engine import GeminiEngine
from .follow_up import FollowUpSuggester, SuggestionEngine

__all__ = [
    "SuggestionError",
    "GeminiEngine",
    "FollowUpSuggester",
    "SuggestionEngine",
]
