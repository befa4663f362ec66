"""InterviewPilot - live interview assistant core."""

__version__ = "0.1.0"
