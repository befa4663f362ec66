"""Terminal interview screen: timer, nudges and the labeled transcript."""

import time
import logging
import threading
from typing import Optional

from pubsub import pub
from rich.console import Console
from rich.panel import Panel
from rich.layout import Layout
from rich.live import Live
from rich.text import Text
from rich.table import Table
from rich.align import Align

from ..models.events import NudgeEvent
from ..models.plan import TimerSnapshot
from ..models.speaker import Speaker
from ..services.interview_session import InterviewSession

logger = logging.getLogger(__name__)

TRANSCRIPT_LINES = 12


def format_elapsed(snapshot: TimerSnapshot) -> str:
    return f"{snapshot.elapsed_minutes:02d}:{snapshot.elapsed_seconds:02d}"


class SessionScreen:
    """Live terminal view of an InterviewSession."""

    def __init__(self, session: InterviewSession, console: Optional[Console] = None):
        self.session = session
        self.console = console or Console()
        self.running = False
        self.lock = threading.Lock()
        self.pending_nudge: Optional[NudgeEvent] = None

        pub.subscribe(self._on_nudge, session.nudge_topic)
        logger.info(f"SessionScreen attached to session {session.session_id}")

    def _on_nudge(self, nudge: NudgeEvent) -> None:
        with self.lock:
            self.pending_nudge = nudge

    def dismiss_nudge(self) -> None:
        with self.lock:
            self.pending_nudge = None
        self.session.timer.dismiss_nudge()

    def create_layout(self) -> Layout:
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="main", ratio=1),
            Layout(name="nudge", size=5),
        )
        layout["main"].split_row(
            Layout(name="timer_panel", ratio=1),
            Layout(name="transcript_panel", ratio=2),
        )
        return layout

    def update_header(self, layout: Layout) -> None:
        running = self.session.timer.is_running
        status_text = "● LIVE" if running else "■ PAUSED"
        header_text = Text.assemble(
            ("InterviewPilot", "bold blue"), "  |  ",
            (status_text, "bold red" if running else "bold yellow"), "  |  ",
            f"Role: {self.session.role.value}", "  |  ",
            f"Speaker: {self.session.attributor.current_speaker.value}",
        )
        layout["header"].update(Panel(Align.center(header_text), style="bright_blue"))

    def build_timer_table(self, snapshot: TimerSnapshot) -> Table:
        table = Table(title="Interview Timer", show_header=True, header_style="bold magenta")
        table.add_column("Block", style="cyan")
        table.add_column("Value", style="white")

        table.add_row("Elapsed", format_elapsed(snapshot))
        table.add_row("Current", snapshot.current_block.label if snapshot.current_block else "-")
        if snapshot.next_block:
            table.add_row("Next", f"{snapshot.next_block.label} ({snapshot.next_block.minutes} min)")
        else:
            table.add_row("Next", "-")
        if snapshot.countdown_seconds_left is not None:
            table.add_row("Next block in", f"{snapshot.countdown_seconds_left}s")
        return table

    def build_transcript_text(self) -> Text:
        entries = self.session.aggregator.get_entries()[-TRANSCRIPT_LINES:]
        if not entries:
            return Text("Waiting for transcription...", style="dim white italic")

        text = Text()
        for entry in entries:
            style = "bold green" if entry.speaker is Speaker.INTERVIEWER else "bold cyan"
            text.append(f"{entry.speaker.value}: ", style=style)
            text.append(f"{entry.text}\n")
        interim = self.session.aggregator.latest_interim
        if interim:
            text.append(f"{interim.speaker.value}: {interim.text}", style="dim italic")
        return text

    def build_nudge_text(self) -> Text:
        with self.lock:
            nudge = self.pending_nudge
        if not nudge:
            return Text("")
        return Text.assemble(
            ("Time Reminder: ", "bold yellow"),
            f"You planned to begin {nudge.block_label} by now ({nudge.elapsed_minutes} min elapsed). "
            "Continue or move on?",
        )

    def update_display(self, layout: Layout) -> None:
        try:
            snapshot = self.session.timer.snapshot
            self.update_header(layout)
            layout["timer_panel"].update(Panel(self.build_timer_table(snapshot), border_style="green"))
            layout["transcript_panel"].update(Panel(
                self.build_transcript_text(), title="Transcript", border_style="blue"))
            layout["nudge"].update(Panel(self.build_nudge_text(), border_style="yellow"))
        except Exception as e:
            logger.error(f"Error updating display: {e}", exc_info=True)

    def run(self, duration: Optional[float] = None) -> None:
        """Show the screen until ``duration`` seconds pass or Ctrl+C."""
        self.running = True
        layout = self.create_layout()
        started = time.monotonic()
        try:
            with Live(layout, console=self.console, refresh_per_second=4, screen=True):
                while self.running:
                    self.update_display(layout)
                    if duration and time.monotonic() - started >= duration:
                        break
                    time.sleep(0.25)
        except KeyboardInterrupt:
            logger.info("Keyboard interrupt received")
        finally:
            self.running = False

    def close(self) -> None:
        try:
            pub.unsubscribe(self._on_nudge, self.session.nudge_topic)
        except Exception as e:
            logger.warning(f"Error during unsubscribe: {e}")
