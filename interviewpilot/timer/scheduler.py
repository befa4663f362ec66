"""Block scheduler: maps elapsed interview time onto the planned blocks."""

import logging
from itertools import accumulate
from typing import Callable, List, Optional, Set

from ..models.events import NudgeEvent
from ..models.plan import InterviewBlock, TimerSnapshot

logger = logging.getLogger(__name__)

COUNTDOWN_SECONDS = 5


class BlockScheduler:
    """Tracks the current block and fires a one-shot nudge per boundary."""

    def __init__(self,
                 blocks: List[InterviewBlock],
                 countdown_seconds: int = COUNTDOWN_SECONDS,
                 nudge_callback: Optional[Callable[[NudgeEvent], None]] = None):
        """Initialize scheduler.
        
        Args:
            blocks: Ordered interview plan
            countdown_seconds: Show a countdown this many seconds before a boundary
            nudge_callback: Receives a NudgeEvent whenever a nudge fires
        """
        self.countdown_seconds = countdown_seconds
        self.nudge_callback = nudge_callback
        self.set_plan(blocks)

    def set_plan(self, blocks: List[InterviewBlock]) -> None:
        """Replace the plan; derived state is cleared."""
        self.blocks = list(blocks)
        # cumulative end minute of each block
        self.cumulative_minutes = list(accumulate(block.minutes for block in self.blocks))
        self.reset()

    def on_nudge(self, callback: Optional[Callable[[NudgeEvent], None]]) -> None:
        """Register the nudge callback, replacing any previous one."""
        self.nudge_callback = callback

    @property
    def snapshot(self) -> TimerSnapshot:
        return self._snapshot

    @property
    def current_block_index(self) -> Optional[int]:
        return self._snapshot.current_block_index

    @property
    def fired_nudges(self) -> Set[int]:
        return set(self._nudge_fired)

    def reset(self) -> None:
        self._snapshot = TimerSnapshot()
        self._nudge_fired: Set[int] = set()

    def _block_index(self, elapsed_minutes: int) -> int:
        for i, end in enumerate(self.cumulative_minutes):
            if elapsed_minutes < end:
                return i
        return len(self.blocks) - 1

    def tick(self, elapsed_seconds: int) -> TimerSnapshot:
        """Recompute the snapshot for ``elapsed_seconds`` since the timer started."""
        total_seconds = max(0, int(elapsed_seconds))
        elapsed_minutes = total_seconds // 60
        snapshot = TimerSnapshot(
            elapsed_minutes=elapsed_minutes,
            elapsed_seconds=total_seconds % 60,
            total_elapsed_seconds=total_seconds,
        )

        if not self.blocks:
            self._snapshot = snapshot
            return snapshot

        previous_index = self._snapshot.current_block_index
        index = self._block_index(elapsed_minutes)
        last_index = len(self.blocks) - 1

        snapshot.current_block_index = index
        snapshot.current_block = self.blocks[index]
        snapshot.next_block = self.blocks[index + 1] if index < last_index else None

        if index > 0 and index != previous_index and index not in self._nudge_fired:
            snapshot.should_show_nudge = True
            self._fire_nudge(previous_index, index, elapsed_minutes)

        if index < last_index:
            seconds_until_next = self.cumulative_minutes[index] * 60 - total_seconds
            if 0 < seconds_until_next <= self.countdown_seconds:
                snapshot.countdown_seconds_left = seconds_until_next

        self._snapshot = snapshot
        return snapshot

    def _fire_nudge(self, previous_index: Optional[int], index: int, elapsed_minutes: int) -> None:
        # Boundaries skipped in one tick (zero-length blocks) count as fired too
        first = previous_index + 1 if previous_index is not None and previous_index < index else index
        self._nudge_fired.update(range(first, index + 1))

        previous_label = self.blocks[index - 1].label
        event = NudgeEvent(
            block_index=index,
            block_label=self.blocks[index].label,
            elapsed_minutes=elapsed_minutes,
            previous_label=previous_label,
        )
        logger.info(f"Nudge: planned to begin '{event.block_label}' by now "
                    f"({elapsed_minutes} min elapsed)")
        if self.nudge_callback:
            self.nudge_callback(event)

    def dismiss_nudge(self) -> None:
        self._snapshot.should_show_nudge = False
