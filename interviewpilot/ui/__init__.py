"""Terminal user interface for InterviewPilot."""

from .session_screen import SessionScreen

__all__ = ["SessionScreen"]
