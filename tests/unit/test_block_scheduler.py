"""Unit tests for BlockScheduler."""

import pytest

from interviewpilot.models.plan import InterviewBlock
from interviewpilot.timer import BlockScheduler


@pytest.fixture
def nudges():
    return []


@pytest.fixture
def scheduler(sample_plan, nudges):
    return BlockScheduler(sample_plan, nudge_callback=nudges.append)


@pytest.mark.unit
class TestBlockScheduler:
    """Test cases for block tracking and one-shot nudges."""

    def test_initial_state(self, scheduler):
        snapshot = scheduler.snapshot

        assert snapshot.current_block_index is None
        assert snapshot.current_block is None
        assert snapshot.total_elapsed_seconds == 0

    def test_within_first_block(self, scheduler, nudges):
        snapshot = scheduler.tick(3 * 60)

        assert snapshot.current_block.label == "Intro"
        assert snapshot.next_block.label == "Tech"
        assert snapshot.current_block_index == 0
        assert snapshot.should_show_nudge is False
        assert nudges == []

    def test_boundary_crossing_fires_nudge_once(self, scheduler, nudges):
        scheduler.tick(3 * 60)
        snapshot = scheduler.tick(5 * 60)

        assert snapshot.current_block.label == "Tech"
        assert snapshot.next_block.label == "Wrap"
        assert snapshot.should_show_nudge is True
        assert len(nudges) == 1
        assert nudges[0].block_label == "Tech"
        assert nudges[0].previous_label == "Intro"
        assert nudges[0].elapsed_minutes == 5

    def test_no_repeat_nudge_for_same_boundary(self, scheduler, nudges):
        for minutes in (5, 6, 7):
            scheduler.tick(minutes * 60)

        assert len(nudges) == 1
        assert scheduler.snapshot.should_show_nudge is False
        assert scheduler.fired_nudges == {1}

    def test_each_boundary_nudges(self, scheduler, nudges):
        for minutes in range(0, 31):
            scheduler.tick(minutes * 60)

        assert [n.block_label for n in nudges] == ["Tech", "Wrap"]

    def test_elapsed_minutes_are_floored(self, scheduler, nudges):
        snapshot = scheduler.tick(5 * 60 - 1)

        assert snapshot.elapsed_minutes == 4
        assert snapshot.elapsed_seconds == 59
        assert snapshot.current_block.label == "Intro"
        assert nudges == []

    def test_empty_plan(self, nudges):
        scheduler = BlockScheduler([], nudge_callback=nudges.append)

        for minutes in (0, 5, 100):
            snapshot = scheduler.tick(minutes * 60)
            assert snapshot.current_block is None
            assert snapshot.next_block is None
            assert snapshot.current_block_index is None
            assert snapshot.should_show_nudge is False
        assert nudges == []

    def test_past_end_pins_last_block(self, scheduler):
        snapshot = scheduler.tick(45 * 60)

        assert snapshot.current_block_index == 2
        assert snapshot.current_block.label == "Wrap"
        assert snapshot.next_block is None
        assert snapshot.countdown_seconds_left is None

    def test_zero_duration_block_is_skipped(self, nudges):
        plan = [InterviewBlock("A", 5), InterviewBlock("B", 0), InterviewBlock("C", 5)]
        scheduler = BlockScheduler(plan, nudge_callback=nudges.append)
        scheduler.tick(4 * 60)
        snapshot = scheduler.tick(5 * 60)

        assert snapshot.current_block.label == "C"
        assert len(nudges) == 1
        assert scheduler.fired_nudges == {1, 2}

    def test_countdown_before_boundary(self, scheduler):
        assert scheduler.tick(5 * 60 - 6).countdown_seconds_left is None
        assert scheduler.tick(5 * 60 - 5).countdown_seconds_left == 5
        assert scheduler.tick(5 * 60 - 1).countdown_seconds_left == 1
        assert scheduler.tick(5 * 60).countdown_seconds_left is None

    def test_dismiss_nudge(self, scheduler):
        scheduler.tick(0)
        scheduler.tick(5 * 60)
        scheduler.dismiss_nudge()

        assert scheduler.snapshot.should_show_nudge is False

    def test_reset_allows_nudge_again(self, scheduler, nudges):
        scheduler.tick(0)
        scheduler.tick(5 * 60)
        scheduler.reset()

        assert scheduler.snapshot.current_block_index is None
        assert scheduler.snapshot.total_elapsed_seconds == 0
        assert scheduler.fired_nudges == set()

        scheduler.tick(0)
        scheduler.tick(5 * 60)
        assert len(nudges) == 2

    def test_replacing_nudge_callback(self, scheduler, nudges):
        replacement = []
        scheduler.on_nudge(replacement.append)
        scheduler.tick(0)
        scheduler.tick(5 * 60)

        assert nudges == []
        assert len(replacement) == 1
