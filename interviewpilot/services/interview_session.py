"""Interview session wiring one instance of each component per session."""

import time
import uuid
import logging
from typing import Callable, List, Optional

from pubsub import pub

from ..config import InterviewPilotConfig
from ..models.events import AudioEvent, NudgeEvent
from ..models.plan import InterviewBlock
from ..models.speaker import Speaker
from ..models.suggestions import FollowUpSuggestion
from ..models.transcription import LabeledTranscript, TranscriptFragment
from ..speaker.activity import AudioActivityDetector, ACTIVITY_THRESHOLD
from ..speaker.attribution import SpeakerAttributor
from ..suggestions import FollowUpSuggester, GeminiEngine
from ..timer.interview_timer import InterviewTimer
from ..transcription.aggregator import TranscriptAggregator
from ..transcription.base import TranscriptionService
from ..transcription.labeler import TranscriptLabeler, wall_clock_ms
from ..transcription.proxy_client import SpeechProxyClient
from ..transcription.publisher import TranscriptionPublisher

logger = logging.getLogger(__name__)


class InterviewSession:
    """Owns the attributor, timer and transcript pipeline of one interview."""

    def __init__(self,
                 config: InterviewPilotConfig,
                 role: Speaker,
                 blocks: List[InterviewBlock],
                 transcription: Optional[TranscriptionService] = None,
                 clock_ms: Callable[[], float] = wall_clock_ms,
                 timer_clock: Callable[[], float] = time.monotonic):
        """Initialize session.

        Args:
            config: Application configuration
            role: Role declared by the local participant
            blocks: Interview plan
            transcription: Transcription service to use; by default a
                SpeechProxyClient when transcription.proxy_url is configured
            clock_ms: Millisecond clock used to label transcripts
            timer_clock: Monotonic seconds clock for the interview timer
        """
        self.config = config
        self.role = role
        self.session_id = uuid.uuid4().hex[:8]
        topic_prefix = f"interview_{self.session_id}"
        self.transcript_topic = f"{topic_prefix}.transcription"
        self.nudge_topic = f"{topic_prefix}.nudge"

        self.attributor = SpeakerAttributor(role, **config.get_speaker_settings())
        self.detector = AudioActivityDetector(
            self.attributor,
            threshold=float(config.get('speaker_attribution.activity_threshold', ACTIVITY_THRESHOLD)),
        )
        self.labeler = TranscriptLabeler(self.attributor, clock_ms)
        self.transcript_publisher = TranscriptionPublisher(self.transcript_topic)
        self.aggregator = TranscriptAggregator(self.transcript_topic)

        timer_settings = config.get_timer_settings()
        self.timer = InterviewTimer(
            blocks,
            tick_interval=timer_settings["tick_interval_seconds"],
            countdown_seconds=timer_settings["countdown_seconds"],
            clock=timer_clock,
            nudge_callback=self._publish_nudge,
        )

        if transcription is None and config.get_proxy_url():
            transcription = SpeechProxyClient(
                config.get_proxy_url(),
                self.labeler,
                detector=self.detector,
                max_retries=int(config.get('transcription.max_retries', 5)),
                base_delay=float(config.get('transcription.base_delay_seconds', 0.5)),
                max_delay=float(config.get('transcription.max_delay_seconds', 8.0)),
            )
        self.transcription = transcription
        if self.transcription:
            self.transcription.on_transcription(self.transcript_publisher.get_callback())
            self.transcription.on_error(self._on_transcription_error)

        self.errors: List[str] = []
        self._suggester: Optional[FollowUpSuggester] = None
        logger.info(f"InterviewSession {self.session_id} created: role={role.value}, "
                    f"{len(blocks)} blocks, transcription={'on' if self.transcription else 'off'}")

    def start(self) -> None:
        self.timer.start()
        if self.transcription:
            self.transcription.start()

    def stop(self) -> None:
        self.timer.stop()
        if self.transcription:
            self.transcription.stop()

    def shutdown(self) -> None:
        self.stop()
        self.aggregator.shutdown()
        logger.info(f"InterviewSession {self.session_id} shut down")

    def on_local_audio(self, event: AudioEvent) -> None:
        self._on_audio(event)

    def on_remote_audio(self, event: AudioEvent) -> None:
        self._on_audio(event)

    def _on_audio(self, event: AudioEvent) -> None:
        if self.transcription:
            # The service records activity itself before forwarding
            self.transcription.send_audio(event.audio_data, event.source)
        else:
            self.detector.on_audio_event(event)

    def handle_fragment(self, fragment: TranscriptFragment) -> LabeledTranscript:
        """Label and publish a fragment delivered outside the transcription service."""
        transcript = self.labeler.label(fragment)
        self.transcript_publisher.publish_transcript(transcript)
        return transcript

    def _publish_nudge(self, event: NudgeEvent) -> None:
        pub.sendMessage(self.nudge_topic, nudge=event)

    def _on_transcription_error(self, message: str) -> None:
        self.errors.append(message)

    def _get_suggester(self) -> FollowUpSuggester:
        if self._suggester is None:
            engine = GeminiEngine(
                self.config.get_gemini_api_key(),
                model=self.config.get('gemini.model', 'gemini-2.5-flash'),
            )
            self._suggester = FollowUpSuggester(engine)
        return self._suggester

    async def suggest_follow_ups(self,
                                 job_description: Optional[str] = None,
                                 custom_instruction: Optional[str] = None) -> List[FollowUpSuggestion]:
        """Ask the suggestion engine for follow-up questions on the transcript so far."""
        suggester = self._get_suggester()
        return await suggester.generate(
            self.aggregator.get_entries(),
            job_description=job_description or self.config.get('interview.job_description'),
            custom_instruction=custom_instruction,
        )
