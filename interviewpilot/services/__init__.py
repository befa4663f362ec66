"""Services layer for InterviewPilot application logic."""

from .interview_session import InterviewSession

__all__ = [
    "InterviewSession",
]
