"""Tests for recording worker shells."""

from __future__ import annotations

import queue

import numpy as np
import pytest

from tests.conftest import FakeInputDeviceProvider, FakeRecordingStore
from vocal_note_taker.l1_entities.errors import MicrophoneNotFoundError
from vocal_note_taker.l2_use_cases.recording_session import RecordingSession
from vocal_note_taker.l3_interface_adapters.controllers.recording_controller import RecordingController
from vocal_note_taker.l4_frameworks_and_drivers.messages import (
    ErrorOccurred,
    RecordingStarted,
    RecordingStopped,
    WaveformData,
)
from vocal_note_taker.l4_frameworks_and_drivers.workers.recording_worker import (
    run_waveform_pump,
    start_recording,
    stop_recording,
)


class TestWaveformPump:
    def test_posts_batches_and_drains_after_cancel(self):
        preview: queue.Queue = queue.Queue()
        for value in (0.1, 0.2, 0.3):
            preview.put(np.full(2, value, dtype=np.float32))
        flags = iter([False, True])
        posted: list = []

        count = run_waveform_pump(posted.append, lambda: next(flags), preview, poll_interval=0.01)

        assert count == 3
        assert all(isinstance(m, WaveformData) for m in posted)
        assert posted[0].samples == pytest.approx([0.1, 0.1])
        assert posted[2].samples == pytest.approx([0.3, 0.3])

    def test_empty_queue_cancelled(self):
        posted: list = []
        assert run_waveform_pump(posted.append, lambda: True, queue.Queue()) == 0
        assert posted == []


class TestStartStopRecording:
    @pytest.mark.asyncio
    async def test_start_then_stop_posts_messages(self, fake_provider: FakeInputDeviceProvider, fake_store):
        controller = RecordingController(RecordingSession(fake_provider), fake_store)
        posted: list = []

        assert start_recording(posted.append, controller) is True
        fake_provider.feed(np.zeros(3200, dtype=np.float32))
        recorded = await stop_recording(posted.append, controller)

        assert isinstance(posted[0], RecordingStarted)
        assert posted[0].sample_rate == 16000
        assert isinstance(posted[1], RecordingStopped)
        assert posted[1].duration == pytest.approx(0.2)
        assert posted[1].path == recorded.path

    def test_start_failure_posts_error(self, fake_store: FakeRecordingStore):
        provider = FakeInputDeviceProvider(device_error=MicrophoneNotFoundError())
        controller = RecordingController(RecordingSession(provider), fake_store)
        posted: list = []

        assert start_recording(posted.append, controller) is False
        assert len(posted) == 1
        assert isinstance(posted[0], ErrorOccurred)
        assert posted[0].kind == 'MicrophoneNotFound'
        assert posted[0].audio_deleted is None

    @pytest.mark.asyncio
    async def test_stop_without_recording_posts_error(self, fake_provider, fake_store):
        controller = RecordingController(RecordingSession(fake_provider), fake_store)
        posted: list = []

        assert await stop_recording(posted.append, controller) is None
        assert posted[0].kind == 'RecordingInterrupted'
