"""Unit tests for interview plan parsing."""

import pytest

from interviewpilot.models.plan import InterviewBlock
from interviewpilot.timer import (
    parse_interview_plan,
    format_interview_plan,
    calculate_total_time,
    get_block_at_time,
)


@pytest.mark.unit
class TestPlanParser:
    """Test cases for plan text handling."""

    def test_parse_plan(self):
        blocks = parse_interview_plan("Intro - 5\nProject discussion - 15\n  Wrap up-5  \n")

        assert blocks == [
            InterviewBlock("Intro", 5),
            InterviewBlock("Project discussion", 15),
            InterviewBlock("Wrap up", 5),
        ]

    def test_malformed_lines_are_skipped(self):
        text = "Intro - 5\nno minutes here\nBad - abc\nZero - 0\n\n - 4\nCoding - 20"

        assert parse_interview_plan(text) == [
            InterviewBlock("Intro", 5),
            InterviewBlock("Coding", 20),
        ]

    def test_label_may_contain_dashes(self):
        assert parse_interview_plan("Q&A - follow-ups - 10") == [InterviewBlock("Q&A - follow-ups", 10)]

    @pytest.mark.parametrize("text", [None, "", "   \n  "])
    def test_empty_plan(self, text):
        assert parse_interview_plan(text) == []

    def test_format_and_total(self, sample_plan):
        assert format_interview_plan(sample_plan) == "Intro - 5\nTech - 20\nWrap - 5"
        assert calculate_total_time(sample_plan) == 30
        assert parse_interview_plan(format_interview_plan(sample_plan)) == sample_plan

    def test_get_block_at_time(self, sample_plan):
        assert get_block_at_time(sample_plan, 3) == (sample_plan[0], sample_plan[1], 0)
        assert get_block_at_time(sample_plan, 5) == (sample_plan[1], sample_plan[2], 1)
        assert get_block_at_time(sample_plan, 45) == (sample_plan[2], None, 2)
        assert get_block_at_time([], 10) == (None, None, None)
