"""Speech proxy WebSocket client.

The proxy forwards base64 audio to the speech API and relays results as JSON
messages of the form ``{"type": "transcription", "data": {...}}``. The client
runs its own asyncio loop on a worker thread and reconnects with bounded
exponential backoff when the connection drops.
"""

import json
import base64
import asyncio
import logging
import threading
import concurrent.futures
from enum import Enum
from typing import Any, Dict, Optional

import aiohttp

from ..models.speaker import AudioSource
from ..models.transcription import TranscriptFragment
from ..speaker.activity import AudioActivityDetector
from .base import TranscriptionService
from .labeler import TranscriptLabeler, wall_clock_ms

logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    RECONNECTING = "reconnecting"


def backoff_delay(attempt: int, base_delay: float, max_delay: float) -> float:
    """Delay before reconnect attempt ``attempt`` (0-based)."""
    return min(max_delay, base_delay * (2 ** attempt))


def parse_fragment(data: Dict[str, Any]) -> TranscriptFragment:
    """Build a fragment from the ``data`` object of a transcription message."""
    return TranscriptFragment(
        text=data["transcript"],
        is_final=bool(data.get("is_final", False)),
        confidence=float(data.get("confidence") or 0.0),
        timestamp=data.get("timestamp"),
    )


class SpeechProxyClient(TranscriptionService):
    """Transcription service talking to the speech proxy over a WebSocket."""

    def __init__(self,
                 url: str,
                 labeler: TranscriptLabeler,
                 detector: Optional[AudioActivityDetector] = None,
                 max_retries: int = 5,
                 base_delay: float = 0.5,
                 max_delay: float = 8.0):
        """Initialize proxy client.

        Args:
            url: WebSocket URL of the proxy, e.g. ws://localhost:5000/ws
            labeler: Attaches speakers to incoming fragments
            detector: Records audio activity for chunks passed to send_audio
            max_retries: Reconnect attempts before giving up
            base_delay: First reconnect delay in seconds
            max_delay: Upper bound on the reconnect delay
        """
        super().__init__()
        self.url = url
        self.labeler = labeler
        self.detector = detector
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay

        self.state = ConnectionState.DISCONNECTED
        self.loop: Optional[asyncio.AbstractEventLoop] = None
        self.ws: Optional[aiohttp.ClientWebSocketResponse] = None
        self.worker_thread: Optional[threading.Thread] = None
        self.shutdown_event = threading.Event()
        self.wake_event: Optional[asyncio.Event] = None
        self.chunks_sent = 0

    def _set_state(self, state: ConnectionState) -> None:
        if state is not self.state:
            logger.info(f"Speech proxy connection: {self.state.value} -> {state.value}")
            self.state = state

    def start(self) -> None:
        if self.worker_thread and self.worker_thread.is_alive():
            logger.warning("Speech proxy client already running")
            return

        self.shutdown_event.clear()
        self.worker_thread = threading.Thread(target=self._worker_loop, daemon=True)
        self.worker_thread.name = "SpeechProxyThread"
        self.worker_thread.start()

    def _worker_loop(self) -> None:
        """Own an asyncio loop for the lifetime of the connection."""
        self.loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self.loop)
        try:
            self.loop.run_until_complete(self._run())
        except Exception as e:
            logger.error(f"Speech proxy worker crashed: {e}", exc_info=True)
            self._emit_error("WebSocket connection error")
        finally:
            self.loop.close()
            self.loop = None
            self.wake_event = None
            self._set_state(ConnectionState.DISCONNECTED)

    async def _run(self) -> None:
        self.wake_event = asyncio.Event()
        if self.shutdown_event.is_set():
            return

        attempt = 0
        first_connect = True
        while not self.shutdown_event.is_set():
            self._set_state(ConnectionState.CONNECTING if first_connect else ConnectionState.RECONNECTING)
            first_connect = False
            try:
                async with aiohttp.ClientSession() as session:
                    async with session.ws_connect(self.url) as ws:
                        self.ws = ws
                        self._set_state(ConnectionState.CONNECTED)
                        await ws.send_json({"type": "start_transcription"})
                        # Only a connection that delivered something counts as recovered
                        if await self._receive(ws) > 0:
                            attempt = 0
            except (aiohttp.ClientError, asyncio.TimeoutError, ConnectionResetError) as e:
                logger.warning(f"Speech proxy connection failed: {e}")
            finally:
                self.ws = None

            if self.shutdown_event.is_set():
                break
            if attempt >= self.max_retries:
                self._emit_error("WebSocket connection error")
                break

            delay = backoff_delay(attempt, self.base_delay, self.max_delay)
            attempt += 1
            logger.info(f"Reconnecting to speech proxy in {delay:.1f}s (attempt {attempt}/{self.max_retries})")
            try:
                await asyncio.wait_for(self.wake_event.wait(), timeout=delay)
            except asyncio.TimeoutError:
                pass

    async def _receive(self, ws: aiohttp.ClientWebSocketResponse) -> int:
        """Handle messages until the socket closes; returns how many arrived."""
        received = 0
        async for msg in ws:
            if msg.type == aiohttp.WSMsgType.TEXT:
                received += 1
                self.handle_message(msg.data)
            elif msg.type == aiohttp.WSMsgType.ERROR:
                logger.error(f"WebSocket error: {ws.exception()}")
                break
        logger.info("WebSocket connection closed")
        return received

    def handle_message(self, raw: str) -> None:
        """Dispatch one JSON message received from the proxy."""
        try:
            message = json.loads(raw)
            message_type = message.get("type")
            fragment = parse_fragment(message["data"]) if message_type == "transcription" else None
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error(f"Failed to parse proxy message: {e}", exc_info=True)
            self._emit_error("Failed to parse transcription response")
            return

        if fragment is not None:
            self._emit_transcript(self.labeler.label(fragment))
        elif message_type == "transcription_started":
            logger.info("Transcription service started")
        elif message_type == "transcription_ended":
            logger.info("Transcription service ended")
        elif message_type == "error":
            self._emit_error(str(message.get("error", "Unknown transcription error")))
        else:
            logger.debug(f"Ignoring message type: {message_type}")

    def send_audio(self, audio_data: bytes, source: AudioSource = AudioSource.LOCAL) -> None:
        if self.detector:
            self.detector.detect(audio_data, source, wall_clock_ms())

        if self.state is not ConnectionState.CONNECTED or self.ws is None or self.loop is None:
            return

        payload = {
            "type": "audio_data",
            "audio": base64.b64encode(audio_data).decode("ascii"),
        }
        future = asyncio.run_coroutine_threadsafe(self.ws.send_json(payload), self.loop)
        future.add_done_callback(self._on_audio_sent)

    def _on_audio_sent(self, future: concurrent.futures.Future) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.warning(f"Failed to send audio chunk: {error}")
            return
        self.chunks_sent += 1

    async def _close(self) -> None:
        ws = self.ws
        if ws is not None and not ws.closed:
            await ws.send_json({"type": "stop_transcription"})
            await ws.close()

    def _wake(self) -> None:
        loop, wake_event = self.loop, self.wake_event
        if loop is None or wake_event is None:
            return
        try:
            loop.call_soon_threadsafe(wake_event.set)
        except RuntimeError:
            # Loop already closed
            pass

    def stop(self, timeout: float = 5.0) -> None:
        self.shutdown_event.set()
        self._wake()
        if self.loop is not None and self.ws is not None:
            future = asyncio.run_coroutine_threadsafe(self._close(), self.loop)
            try:
                future.result(timeout=timeout)
            except Exception as e:
                logger.warning(f"Error closing speech proxy connection: {e}")

        if self.worker_thread:
            self.worker_thread.join(timeout)
            if self.worker_thread.is_alive():
                logger.warning("Speech proxy thread did not terminate cleanly")
            self.worker_thread = None
        logger.info(f"Speech proxy client stopped after {self.chunks_sent} audio chunks")
