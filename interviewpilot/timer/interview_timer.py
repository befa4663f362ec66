"""Running interview timer driving the block scheduler once a second."""

import time
import logging
import threading
from typing import Callable, List, Optional

from ..models.events import NudgeEvent
from ..models.plan import InterviewBlock, TimerSnapshot
from .scheduler import BlockScheduler, COUNTDOWN_SECONDS

logger = logging.getLogger(__name__)


class InterviewTimer:
    """Elapsed-time counter with start/stop/reset over a BlockScheduler."""

    def __init__(self,
                 blocks: List[InterviewBlock],
                 tick_interval: float = 1.0,
                 countdown_seconds: int = COUNTDOWN_SECONDS,
                 clock: Callable[[], float] = time.monotonic,
                 snapshot_callback: Optional[Callable[[TimerSnapshot], None]] = None,
                 nudge_callback: Optional[Callable[[NudgeEvent], None]] = None):
        """Initialize interview timer.
        
        Args:
            blocks: Ordered interview plan
            tick_interval: Seconds between background ticks
            countdown_seconds: Countdown window before each boundary
            clock: Monotonic clock in seconds, injectable for tests
            snapshot_callback: Called with the new snapshot after every tick
            nudge_callback: Called when a block boundary nudge fires
        """
        self.scheduler = BlockScheduler(blocks, countdown_seconds=countdown_seconds,
                                        nudge_callback=nudge_callback)
        self.tick_interval = tick_interval
        self.clock = clock
        self.snapshot_callback = snapshot_callback

        self.lock = threading.RLock()
        self.stop_event = threading.Event()
        self.tick_thread: Optional[threading.Thread] = None
        self.is_running = False

        # Elapsed seconds accumulated by earlier runs, and start of the current run
        self._baseline_seconds = 0.0
        self._run_started_at: Optional[float] = None

    @property
    def snapshot(self) -> TimerSnapshot:
        return self.scheduler.snapshot

    def elapsed_seconds(self) -> int:
        with self.lock:
            elapsed = self._baseline_seconds
            if self._run_started_at is not None:
                elapsed += self.clock() - self._run_started_at
            return int(elapsed)

    def start(self, background: bool = True) -> None:
        """Start counting, or resume from where stop() left off."""
        with self.lock:
            if self.is_running:
                logger.warning("Timer already running")
                return

            self._run_started_at = self.clock()
            self.is_running = True
            self.stop_event.clear()
            logger.info(f"Interview timer started at {self._baseline_seconds:.0f}s")

            if background:
                self.tick_thread = threading.Thread(target=self._tick_loop, daemon=True)
                self.tick_thread.name = "InterviewTimerThread"
                self.tick_thread.start()

        self.poll()

    def _tick_loop(self) -> None:
        while not self.stop_event.wait(self.tick_interval):
            try:
                self.poll()
            except Exception as e:
                logger.error(f"Error in timer tick: {e}", exc_info=True)

    def poll(self) -> TimerSnapshot:
        """Tick the scheduler with the current elapsed time."""
        with self.lock:
            if not self.is_running:
                return self.scheduler.snapshot
            snapshot = self.scheduler.tick(self.elapsed_seconds())

        if self.snapshot_callback:
            self.snapshot_callback(snapshot)
        return snapshot

    def stop(self) -> None:
        """Halt the counter; the last snapshot is kept."""
        with self.lock:
            if not self.is_running:
                return
            self._baseline_seconds += self.clock() - self._run_started_at
            self._run_started_at = None
            self.is_running = False
            self.stop_event.set()
            thread = self.tick_thread
            self.tick_thread = None

        if thread and thread is not threading.current_thread():
            thread.join(timeout=2.0)
            if thread.is_alive():
                logger.warning("Timer thread did not stop cleanly")
        logger.info(f"Interview timer stopped at {self._baseline_seconds:.0f}s")

    def reset(self) -> None:
        """Stop and clear elapsed time, derived state and fired nudges."""
        self.stop()
        with self.lock:
            self._baseline_seconds = 0.0
            self.scheduler.reset()
        logger.info("Interview timer reset")

    def dismiss_nudge(self) -> None:
        with self.lock:
            self.scheduler.dismiss_nudge()
