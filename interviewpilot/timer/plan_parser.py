"""Parsing and querying of free-text interview plans.

A plan is one block per line, written as ``<label> - <minutes>``::

    Intro - 5
    Project discussion - 15
    Wrap up - 5
"""

import re
import logging
from typing import List, Optional, Tuple

from ..models.plan import InterviewBlock

logger = logging.getLogger(__name__)

_PLAN_LINE = re.compile(r'^(.+?)\s*-\s*(\d+)$')


def parse_interview_plan(plan_text: Optional[str]) -> List[InterviewBlock]:
    """Parse plan text into blocks, skipping lines that do not parse."""
    if not plan_text or not plan_text.strip():
        return []

    blocks = []
    for line in plan_text.splitlines():
        line = line.strip()
        if not line:
            continue

        match = _PLAN_LINE.match(line)
        if not match:
            logger.debug(f"Skipping plan line: {line!r}")
            continue

        label = match.group(1).strip()
        minutes = int(match.group(2))
        if label and minutes > 0:
            blocks.append(InterviewBlock(label=label, minutes=minutes))
        else:
            logger.debug(f"Skipping plan line without label or minutes: {line!r}")

    logger.info(f"Parsed interview plan: {len(blocks)} blocks, {calculate_total_time(blocks)} minutes")
    return blocks


def format_interview_plan(blocks: List[InterviewBlock]) -> str:
    return "\n".join(f"{block.label} - {block.minutes}" for block in blocks)


def calculate_total_time(blocks: List[InterviewBlock]) -> int:
    return sum(block.minutes for block in blocks)


def get_block_at_time(blocks: List[InterviewBlock],
                      elapsed_minutes: int) -> Tuple[Optional[InterviewBlock], Optional[InterviewBlock], Optional[int]]:
    """Find the block active after ``elapsed_minutes``.

    Returns:
        (current block, next block, index); all None for an empty plan.
        Past the end of the plan the last block stays current.
    """
    if not blocks:
        return None, None, None

    cumulative = 0
    for i, block in enumerate(blocks):
        cumulative += block.minutes
        if elapsed_minutes < cumulative:
            next_block = blocks[i + 1] if i < len(blocks) - 1 else None
            return block, next_block, i

    return blocks[-1], None, len(blocks) - 1
