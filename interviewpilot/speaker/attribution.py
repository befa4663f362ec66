"""Speaker attribution from tagged audio activity.

Transcript fragments from the speech proxy carry no speaker label. The
attributor keeps a short history of which audio source (local microphone or
remote participant) was active and picks the speaker by majority vote over a
recent window. A dominance threshold plus a minimum dwell time keep the label
from flapping during cross-talk, echo and short pauses.
"""

import logging
import threading
from collections import OrderedDict
from dataclasses import replace
from typing import Optional

from ..models.speaker import AudioSource, Speaker, SpeakerState

logger = logging.getLogger(__name__)

DOMINANCE_RATIO = 0.8
STABILITY_MS = 2000
ANALYSIS_WINDOW_MS = 5000
RETENTION_MS = 10000

_SOURCE_SPEAKER = {
    AudioSource.LOCAL: Speaker.INTERVIEWER,
    AudioSource.REMOTE: Speaker.CANDIDATE,
}


class SpeakerAttributor:
    """Majority-vote speaker resolver with a stability gate.

    One instance per transcription session. All timestamps are milliseconds
    from the same (arbitrary) epoch.
    """

    def __init__(self,
                 initial_speaker: Speaker,
                 dominance_ratio: float = DOMINANCE_RATIO,
                 stability_ms: float = STABILITY_MS,
                 window_ms: float = ANALYSIS_WINDOW_MS,
                 retention_ms: float = RETENTION_MS):
        """Initialize attributor.

        Args:
            initial_speaker: Role declared by the local session; returned until
                the activity history says otherwise
            dominance_ratio: Share of window tags a source needs to take over
            stability_ms: Minimum time between two accepted speaker changes
            window_ms: Length of the analysis window ending at ``now``
            retention_ms: Tags older than this relative to the newest tag are dropped
        """
        self.initial_speaker = initial_speaker
        self.dominance_ratio = dominance_ratio
        self.stability_ms = stability_ms
        self.window_ms = window_ms
        self.retention_ms = retention_ms

        # timestamp -> source, kept in insertion (time) order
        self._activity: "OrderedDict[float, AudioSource]" = OrderedDict()
        self._state = SpeakerState(current_speaker=initial_speaker)
        self.lock = threading.RLock()

        logger.info(f"SpeakerAttributor initialized: speaker={initial_speaker.value}, "
                    f"ratio={dominance_ratio}, stability={stability_ms}ms, window={window_ms}ms")

    @property
    def current_speaker(self) -> Speaker:
        return self._state.current_speaker

    @property
    def state(self) -> SpeakerState:
        """Copy of the current speaker state."""
        with self.lock:
            return replace(self._state)

    def activity_count(self) -> int:
        """Number of retained activity tags."""
        with self.lock:
            return len(self._activity)

    def record_activity(self, timestamp: float, source: AudioSource) -> None:
        """Record that ``source`` produced audible audio at ``timestamp``.

        Args:
            timestamp: Milliseconds since the attributor's epoch
            source: Local microphone or remote participant
        """
        with self.lock:
            # Two chunks landing on the same millisecond: the later one wins
            self._activity.pop(timestamp, None)
            self._activity[timestamp] = source
            self._evict(max(self._activity))

    def _evict(self, newest: float) -> None:
        cutoff = newest - self.retention_ms
        stale = [ts for ts in self._activity if ts < cutoff]
        for ts in stale:
            del self._activity[ts]
        if stale:
            logger.debug(f"Evicted {len(stale)} activity tags older than {cutoff}")

    def _suggest(self, now: float) -> Optional[Speaker]:
        """Dominant speaker over the window ending at ``now``, None when nobody dominates."""
        window_start = now - self.window_ms
        local_count = 0
        remote_count = 0
        for ts, source in self._activity.items():
            if window_start < ts <= now:
                if source is AudioSource.LOCAL:
                    local_count += 1
                else:
                    remote_count += 1

        total = local_count + remote_count
        if total == 0:
            return None

        local_ratio = local_count / total
        remote_ratio = remote_count / total
        logger.debug(f"Speaker window: local={local_count} ({local_ratio:.2f}), "
                     f"remote={remote_count} ({remote_ratio:.2f})")

        if local_ratio >= self.dominance_ratio:
            return _SOURCE_SPEAKER[AudioSource.LOCAL]
        if remote_ratio >= self.dominance_ratio:
            return _SOURCE_SPEAKER[AudioSource.REMOTE]
        return None

    def resolve_speaker(self, now: float) -> Speaker:
        """Return the speaker for a fragment labelled at ``now``.

        The only side effect is the speaker transition itself: a dominant
        source different from the current speaker is accepted once the
        stability interval since the previous change has passed.
        """
        with self.lock:
            suggested = self._suggest(now)
            current = self._state.current_speaker
            if suggested is None or suggested is current:
                return current

            last_change = self._state.last_change_time
            if last_change is not None and now - last_change < self.stability_ms:
                logger.debug(f"Holding {current.value}: {now - last_change:.0f}ms since last change")
                return current

            self._state.current_speaker = suggested
            self._state.last_change_time = now
            logger.info(f"Speaker changed: {current.value} -> {suggested.value}")
            return suggested

    def reset(self, initial_speaker: Optional[Speaker] = None) -> None:
        """Forget all activity and go back to the declared role."""
        with self.lock:
            if initial_speaker is not None:
                self.initial_speaker = initial_speaker
            self._activity.clear()
            self._state = SpeakerState(current_speaker=self.initial_speaker)
        logger.info(f"SpeakerAttributor reset to {self.initial_speaker.value}")
