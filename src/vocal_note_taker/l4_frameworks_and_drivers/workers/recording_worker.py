"""Recording worker shells — start/stop the controller and pump waveform previews to the UI."""

from __future__ import annotations

import logging
import queue
from collections.abc import Callable

from vocal_note_taker.l1_entities.errors import AppError
from vocal_note_taker.l1_entities.recording import RecordedAudio
from vocal_note_taker.l3_interface_adapters.controllers.recording_controller import RecordingController
from vocal_note_taker.l4_frameworks_and_drivers.messages import (
    ErrorOccurred,
    RecordingStarted,
    RecordingStopped,
    WaveformData,
)

log = logging.getLogger('vnt.audio')


def run_waveform_pump(
    post_message: Callable,
    is_cancelled: Callable[[], bool],
    preview: queue.Queue,
    poll_interval: float = 0.05,
) -> int:
    """Forward preview batches as WaveformData until cancelled. Returns batches posted.

    Designed to run inside a Textual @work(thread=True) worker or a plain thread.
    """
    posted = 0
    while not is_cancelled():
        try:
            batch = preview.get(timeout=poll_interval)
        except queue.Empty:
            continue
        post_message(WaveformData(samples=batch.tolist()))
        posted += 1

    # Deliver whatever the callback queued before the stream closed.
    while True:
        try:
            batch = preview.get_nowait()
        except queue.Empty:
            break
        post_message(WaveformData(samples=batch.tolist()))
        posted += 1
    return posted


def start_recording(
    post_message: Callable,
    controller: RecordingController,
    preview: queue.Queue | None = None,
) -> bool:
    """Start a recording session, posting RecordingStarted or ErrorOccurred."""
    try:
        sample_rate = controller.start(preview)
    except AppError as exc:
        log.error('Failed to start recording: %s', exc.message)
        post_message(ErrorOccurred.from_error(exc))
        return False
    post_message(RecordingStarted(sample_rate=sample_rate))
    return True


async def stop_recording(post_message: Callable, controller: RecordingController) -> RecordedAudio | None:
    """Stop the active session and persist it, posting RecordingStopped or ErrorOccurred."""
    try:
        recorded = await controller.stop()
    except AppError as exc:
        log.error('Failed to stop recording: %s', exc.message)
        post_message(ErrorOccurred.from_error(exc))
        return None
    post_message(RecordingStopped(duration=recorded.duration, path=recorded.path))
    return recorded
