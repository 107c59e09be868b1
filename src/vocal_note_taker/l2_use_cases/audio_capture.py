"""Realtime capture on a dedicated thread, controlled through one-shot futures.

The device stream handle is opened, driven and closed on the capture thread
only. The rest of the application talks to it through three single-use
primitives: a start acknowledgement, a stop event and a result future.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import logging
import queue
import threading

import numpy as np

from vocal_note_taker.l1_entities.audio_constants import CHANNELS, SAMPLE_RATE, WAVEFORM_DECIMATION
from vocal_note_taker.l1_entities.errors import (
    AppError,
    MicrophoneAccessDeniedError,
    RecordingInterruptedError,
)
from vocal_note_taker.l1_entities.recording import RecordingResult, RecordingState
from vocal_note_taker.l2_use_cases.ports.input_device import InputDevice, InputDeviceProvider, InputStream

log = logging.getLogger('vnt.audio')

DEFAULT_START_TIMEOUT = 5.0

PreviewQueue = queue.Queue  # bounded queue of np.ndarray batches


def negotiate_sample_rate(
    provider: InputDeviceProvider,
    device: InputDevice,
    preferred_rate: int = SAMPLE_RATE,
) -> int:
    """Pick *preferred_rate* when any mono-capable config covers it, else the device default."""
    for config in provider.supported_configs(device):
        if config.min_sample_rate <= preferred_rate <= config.max_sample_rate and config.channels >= CHANNELS:
            return preferred_rate

    if device.default_sample_rate <= 0:
        raise MicrophoneAccessDeniedError(
            f'Input device "{device.name}" reports no usable sample rate. '
            'Check its configuration in your system sound settings.'
        )
    log.info(
        'Device %r does not support %d Hz; falling back to %d Hz',
        device.name,
        preferred_rate,
        device.default_sample_rate,
    )
    return device.default_sample_rate


class FrameBuffer:
    """Append-only sample store written by the realtime callback.

    A callback failure poisons the buffer; ``take()`` then yields an empty
    array instead of whatever partial data was collected.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._chunks: list[np.ndarray] = []
        self._poisoned = False

    @property
    def poisoned(self) -> bool:
        return self._poisoned

    def append(self, data: np.ndarray) -> None:
        with self._lock:
            self._chunks.append(data)

    def poison(self) -> None:
        with self._lock:
            self._poisoned = True

    def take(self) -> np.ndarray:
        """Move all samples out of the buffer as one flat float32 array."""
        with self._lock:
            chunks, self._chunks = self._chunks, []
            poisoned = self._poisoned
        if poisoned or not chunks:
            return np.array([], dtype=np.float32)
        return np.concatenate(chunks).astype(np.float32, copy=False)


class WaveformDecimator:
    """Keeps every ``ratio``-th sample across consecutive blocks."""

    def __init__(self, ratio: int = WAVEFORM_DECIMATION) -> None:
        if ratio < 1:
            raise ValueError(f'Decimation ratio must be >= 1, got {ratio}')
        self._ratio = ratio
        self._seen = 0

    def __call__(self, data: np.ndarray) -> np.ndarray:
        start = -(self._seen + 1) % self._ratio
        self._seen += len(data)
        return data[start :: self._ratio]


class AudioCaptureThread(threading.Thread):
    """Owns one device stream for the lifetime of one recording. Never reused."""

    def __init__(
        self,
        provider: InputDeviceProvider,
        device: InputDevice,
        sample_rate: int,
        preview: PreviewQueue | None = None,
        decimation: int = WAVEFORM_DECIMATION,
    ) -> None:
        super().__init__(name='vnt-audio-capture', daemon=True)
        self._provider = provider
        self._device = device
        self._sample_rate = sample_rate
        self._preview = preview
        self._decimate = WaveformDecimator(decimation)
        self._buffer = FrameBuffer()

        self.started_ack: concurrent.futures.Future[None] = concurrent.futures.Future()
        self.stop_signal = threading.Event()
        self.result: concurrent.futures.Future[RecordingResult] = concurrent.futures.Future()

    def on_samples(self, data: np.ndarray) -> None:
        """Realtime callback: append, decimate, offer to the preview without blocking."""
        try:
            self._buffer.append(np.array(data, dtype=np.float32, copy=True))
            if self._preview is not None:
                batch = self._decimate(data)
                if len(batch):
                    try:
                        self._preview.put_nowait(np.array(batch, dtype=np.float32, copy=True))
                    except queue.Full:
                        pass  # preview is lossy
        except Exception:
            self._buffer.poison()
            log.exception('Capture callback failed; recording will be returned empty')

    def run(self) -> None:
        try:
            stream = self._open_stream()
            if stream is None:
                return
            self.started_ack.set_result(None)
            log.info('Capture started on %r at %d Hz', self._device.name, self._sample_rate)

            self.stop_signal.wait()

            try:
                stream.stop()
            except Exception as exc:
                log.warning('Error while stopping capture stream: %s', exc)
            try:
                stream.close()
            except Exception as exc:
                log.warning('Error while closing capture stream: %s', exc)

            samples = self._buffer.take()
            log.info('Capture stopped: %d samples', len(samples))
            self.result.set_result(RecordingResult(samples=samples, sample_rate=self._sample_rate))
        finally:
            if not self.started_ack.done():
                self.started_ack.set_exception(RecordingInterruptedError('Audio thread exited before starting.'))
            if not self.result.done():
                self.result.set_exception(RecordingInterruptedError('Audio thread exited before returning samples.'))

    def _open_stream(self) -> InputStream | None:
        try:
            stream = self._provider.open_stream(self._device, self._sample_rate, CHANNELS, self.on_samples)
        except AppError as exc:
            self.started_ack.set_exception(exc)
            return None
        except Exception as exc:
            log.error('Failed to open capture stream: %s', exc, exc_info=True)
            self.started_ack.set_exception(RecordingInterruptedError(f'Cannot open audio stream: {exc}'))
            return None

        try:
            stream.start()
        except Exception as exc:
            log.error('Failed to start capture stream: %s', exc, exc_info=True)
            try:
                stream.close()
            except Exception:  # noqa: S110 -- best-effort; the start failure is what gets reported
                pass
            self.started_ack.set_exception(RecordingInterruptedError(f'Cannot start audio stream: {exc}'))
            return None
        return stream


class CaptureStartTimeoutError(RecordingInterruptedError):
    """The stream did not acknowledge in time. ``thread`` may still be inside ``open_stream``."""

    def __init__(self, thread: AudioCaptureThread) -> None:
        super().__init__('Audio stream did not start in time.')
        self.thread = thread


class RecordingHandle:
    """Single-use control handle for one running capture thread."""

    def __init__(self, thread: AudioCaptureThread, sample_rate: int) -> None:
        self._thread = thread
        self.sample_rate = sample_rate
        self.state = RecordingState.RECORDING

    def request_stop(self) -> None:
        """Send the stop signal. Only the first call is accepted."""
        if self.state is not RecordingState.RECORDING:
            raise RecordingInterruptedError('This recording has already been stopped.')
        self.state = RecordingState.DRAINING
        self._thread.stop_signal.set()

    async def drained(self) -> RecordingResult:
        """Wait for the capture thread to hand over its buffer."""
        try:
            return await asyncio.wrap_future(self._thread.result)
        finally:
            self.state = RecordingState.IDLE

    async def stop(self) -> RecordingResult:
        self.request_stop()
        return await self.drained()


def start_capture(
    provider: InputDeviceProvider,
    preview: PreviewQueue | None = None,
    *,
    preferred_rate: int = SAMPLE_RATE,
    decimation: int = WAVEFORM_DECIMATION,
    start_timeout: float = DEFAULT_START_TIMEOUT,
) -> RecordingHandle:
    """Resolve the device, spawn the capture thread and wait for the stream to run.

    Device and permission failures are raised before any thread exists.
    """
    device = provider.default_input_device()
    sample_rate = negotiate_sample_rate(provider, device, preferred_rate)

    thread = AudioCaptureThread(provider, device, sample_rate, preview=preview, decimation=decimation)
    thread.start()
    try:
        thread.started_ack.result(timeout=start_timeout)
    except concurrent.futures.TimeoutError as exc:
        thread.stop_signal.set()
        raise CaptureStartTimeoutError(thread) from exc
    return RecordingHandle(thread, sample_rate)
