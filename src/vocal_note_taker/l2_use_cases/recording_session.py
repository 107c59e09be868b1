"""Use case: single active recording session guarded in shared process state."""

from __future__ import annotations

import logging
import threading

from vocal_note_taker.l1_entities.audio_constants import SAMPLE_RATE, WAVEFORM_DECIMATION
from vocal_note_taker.l1_entities.errors import RecordingInterruptedError
from vocal_note_taker.l1_entities.recording import RecordingResult, RecordingState
from vocal_note_taker.l2_use_cases.audio_capture import (
    DEFAULT_START_TIMEOUT,
    CaptureStartTimeoutError,
    PreviewQueue,
    RecordingHandle,
    start_capture,
)
from vocal_note_taker.l2_use_cases.ports.input_device import InputDeviceProvider

log = logging.getLogger('vnt.session')


class _Reservation:
    """Occupies the slot while a capture thread is being brought up."""


class RecordingSession:
    """Owns at most one RecordingHandle.

    The occupied slot is the only notion of "recording in progress": while it
    holds a reservation or a handle, ``start()`` is rejected; it is released
    when ``stop()`` has drained the capture thread or startup has failed.
    A capture thread that missed its start acknowledgement keeps blocking new
    starts until it has exited.
    """

    def __init__(
        self,
        provider: InputDeviceProvider,
        *,
        sample_rate: int = SAMPLE_RATE,
        decimation: int = WAVEFORM_DECIMATION,
        start_timeout: float = DEFAULT_START_TIMEOUT,
    ) -> None:
        self._provider = provider
        self._sample_rate = sample_rate
        self._decimation = decimation
        self._start_timeout = start_timeout
        self._lock = threading.Lock()
        self._slot: RecordingHandle | _Reservation | None = None
        self._straggler: threading.Thread | None = None

    @property
    def state(self) -> RecordingState:
        slot = self._slot
        if slot is None:
            return RecordingState.IDLE
        if isinstance(slot, _Reservation):
            return RecordingState.INITIALIZING
        return slot.state

    @property
    def is_active(self) -> bool:
        return self._slot is not None

    def start(self, preview: PreviewQueue | None = None) -> int:
        """Start capturing. Blocks only until the stream acknowledges. Returns the sample rate."""
        reservation = _Reservation()
        with self._lock:
            if self._slot is not None:
                raise RecordingInterruptedError('A recording is already in progress.')
            if self._straggler is not None and self._straggler.is_alive():
                raise RecordingInterruptedError('The previous audio stream is still shutting down.')
            self._straggler = None
            self._slot = reservation

        try:
            handle = start_capture(
                self._provider,
                preview,
                preferred_rate=self._sample_rate,
                decimation=self._decimation,
                start_timeout=self._start_timeout,
            )
        except CaptureStartTimeoutError as exc:
            with self._lock:
                self._slot = None
                self._straggler = exc.thread
            raise
        except BaseException:
            with self._lock:
                self._slot = None
            raise

        with self._lock:
            self._slot = handle
        log.info('Recording started at %d Hz', handle.sample_rate)
        return handle.sample_rate

    async def stop(self) -> RecordingResult:
        """Stop the active recording and return whatever was captured."""
        with self._lock:
            handle = self._slot
            if not isinstance(handle, RecordingHandle) or handle.state is not RecordingState.RECORDING:
                raise RecordingInterruptedError('No active recording to stop.')
            handle.request_stop()

        try:
            result = await handle.drained()
        finally:
            with self._lock:
                if self._slot is handle:
                    self._slot = None
        log.info('Recording stopped: %.2fs at %d Hz', result.duration, result.sample_rate)
        return result
