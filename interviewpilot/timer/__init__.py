"""Interview plan parsing and block timing."""

from .plan_parser import (
    parse_interview_plan,
    format_interview_plan,
    calculate_total_time,
    get_block_at_time,
)
from .scheduler import BlockScheduler
from .interview_timer import InterviewTimer

__all__ = [
    "parse_interview_plan",
    "format_interview_plan",
    "calculate_total_time",
    "get_block_at_time",
    "BlockScheduler",
    "InterviewTimer",
]
