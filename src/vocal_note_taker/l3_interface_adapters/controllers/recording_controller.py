"""RecordingController — turns a finished RecordingSession into a WAV artifact on disk."""

from __future__ import annotations

import asyncio
import logging

from vocal_note_taker.l1_entities.recording import RecordedAudio, RecordingState
from vocal_note_taker.l2_use_cases.audio_capture import PreviewQueue
from vocal_note_taker.l2_use_cases.ports.recording_store import RecordingStore
from vocal_note_taker.l2_use_cases.recording_session import RecordingSession

log = logging.getLogger('vnt.session')


class RecordingController:
    """Bridges the recording session to the recording store.

    The store's recording file has a fixed name, so a new session may only
    start once the previous one has been stopped.
    """

    def __init__(self, session: RecordingSession, store: RecordingStore) -> None:
        self._session = session
        self._store = store

    @property
    def state(self) -> RecordingState:
        return self._session.state

    @property
    def is_active(self) -> bool:
        return self._session.is_active

    def start(self, preview: PreviewQueue | None = None) -> int:
        """Start recording. Returns the negotiated sample rate."""
        return self._session.start(preview)

    async def stop(self) -> RecordedAudio:
        """Stop recording and write the captured samples to the recording file."""
        result = await self._session.stop()
        path = await asyncio.to_thread(self._store.save, result.samples, result.sample_rate)
        recorded = RecordedAudio(
            path=path,
            sample_rate=result.sample_rate,
            sample_count=len(result.samples),
            duration=result.duration,
        )
        log.info('Saved %.2fs recording to %s', recorded.duration, path)
        return recorded

    async def discard(self) -> bool:
        """Stop an active recording without persisting it. Returns True if one was running."""
        if self._session.state is not RecordingState.RECORDING:
            return False
        result = await self._session.stop()
        log.info('Discarded %.2fs of unsaved audio', result.duration)
        return True
