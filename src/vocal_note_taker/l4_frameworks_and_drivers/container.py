"""Dependency container — composition root for wiring all layers together."""

from __future__ import annotations

import queue
from pathlib import Path

from vocal_note_taker.l1_entities.config import AppConfig
from vocal_note_taker.l2_use_cases.ports.input_device import InputDeviceProvider
from vocal_note_taker.l2_use_cases.ports.recording_store import RecordingStore
from vocal_note_taker.l2_use_cases.ports.transcriber import Transcriber
from vocal_note_taker.l2_use_cases.recording_session import RecordingSession
from vocal_note_taker.l2_use_cases.shared_model import SharedModel
from vocal_note_taker.l2_use_cases.transcription_pipeline import TranscriptionPipeline
from vocal_note_taker.l3_interface_adapters.controllers.recording_controller import RecordingController
from vocal_note_taker.l3_interface_adapters.gateways.local_model_resolver import LocalModelResolver
from vocal_note_taker.l3_interface_adapters.gateways.paths import MODELS_DIR, TEMP_DIR
from vocal_note_taker.l3_interface_adapters.gateways.temp_file_janitor import TempFileJanitor
from vocal_note_taker.l3_interface_adapters.gateways.wav_recording_store import WavRecordingStore


class DependencyContainer:
    """Creates and wires all concrete instances. Easy to override for testing."""

    def __init__(
        self,
        config: AppConfig,
        temp_dir: Path = TEMP_DIR,
        models_dir: Path = MODELS_DIR,
        device_provider: InputDeviceProvider | None = None,
        transcriber: Transcriber | None = None,
        store: RecordingStore | None = None,
    ) -> None:
        self.config = config
        self.temp_dir = temp_dir

        if device_provider is None:  # pragma: no cover -- default wiring; provider always injected in tests
            from vocal_note_taker.l3_interface_adapters.gateways.sounddevice_input_provider import (  # noqa: PLC0415 -- deferred: PortAudio loaded only when recording
                SounddeviceInputProvider,
            )

            device_provider = SounddeviceInputProvider()
        if transcriber is None:  # pragma: no cover -- default wiring; transcriber always injected in tests
            from vocal_note_taker.l3_interface_adapters.gateways.whisper_transcriber import (  # noqa: PLC0415 -- deferred: whisper.cpp loaded only when transcribing
                WhisperTranscriber,
            )

            transcriber = WhisperTranscriber(n_threads=config.transcription.n_threads)

        audio = config.audio
        self.store: RecordingStore = store or WavRecordingStore(temp_dir)
        self.session = RecordingSession(
            device_provider,
            sample_rate=audio.sample_rate,
            decimation=audio.waveform_decimation,
            start_timeout=audio.start_timeout,
        )
        self.controller = RecordingController(self.session, self.store)

        self.model_resolver = LocalModelResolver(models_dir)
        self.model = SharedModel(transcriber, self.model_resolver, config.transcription.model)
        self.pipeline = TranscriptionPipeline(
            self.model,
            self.store,
            language=config.transcription.language,
            translate=config.transcription.translate,
        )
        self.janitor = TempFileJanitor(temp_dir)

    def preview_queue(self) -> queue.Queue:
        """A fresh bounded waveform preview channel for one recording."""
        return queue.Queue(maxsize=self.config.audio.preview_queue_size)
