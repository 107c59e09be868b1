"""Shared test fixtures and protocol-conforming fakes."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from vocal_note_taker.l1_entities.audio_constants import RECORDING_FILENAME
from vocal_note_taker.l1_entities.config import AppConfig
from vocal_note_taker.l2_use_cases.ports.input_device import InputDevice, SampleCallback, StreamConfigRange
from vocal_note_taker.l4_frameworks_and_drivers.config import build_app_config

# --- Protocol-conforming Fakes ---

DEFAULT_DEVICE = InputDevice(index=0, name='Fake Mic', max_input_channels=1, default_sample_rate=48000)


class FakeInputStream:
    """Fake capture stream that records lifecycle calls."""

    def __init__(self, start_error: Exception | None = None, stop_error: Exception | None = None) -> None:
        self._start_error = start_error
        self._stop_error = stop_error
        self.started = False
        self.stopped = False
        self.closed = False

    def start(self) -> None:
        if self._start_error is not None:
            raise self._start_error
        self.started = True

    def stop(self) -> None:
        self.stopped = True
        if self._stop_error is not None:
            raise self._stop_error

    def close(self) -> None:
        self.closed = True


class FakeInputDeviceProvider:
    """Fake device provider for L2 capture tests (InputDeviceProvider protocol)."""

    def __init__(
        self,
        device: InputDevice = DEFAULT_DEVICE,
        configs: list[StreamConfigRange] | None = None,
        device_error: Exception | None = None,
        open_error: Exception | None = None,
        start_error: Exception | None = None,
        stop_error: Exception | None = None,
    ) -> None:
        self._device = device
        self._configs = configs if configs is not None else [StreamConfigRange(8000, 48000, 1)]
        self._device_error = device_error
        self._open_error = open_error
        self._start_error = start_error
        self._stop_error = stop_error
        self.open_calls: list[tuple[int, int]] = []
        self.streams: list[FakeInputStream] = []
        self.callback: SampleCallback | None = None

    def default_input_device(self) -> InputDevice:
        if self._device_error is not None:
            raise self._device_error
        return self._device

    def supported_configs(self, device: InputDevice) -> list[StreamConfigRange]:
        return list(self._configs)

    def open_stream(
        self,
        device: InputDevice,
        sample_rate: int,
        channels: int,
        callback: SampleCallback,
    ) -> FakeInputStream:
        self.open_calls.append((sample_rate, channels))
        if self._open_error is not None:
            raise self._open_error
        self.callback = callback
        stream = FakeInputStream(start_error=self._start_error, stop_error=self._stop_error)
        self.streams.append(stream)
        return stream

    def feed(self, data: np.ndarray) -> None:
        """Deliver one block as the realtime callback would."""
        assert self.callback is not None, 'stream not opened'
        self.callback(np.asarray(data, dtype=np.float32))


class FakeTranscriber:
    """Fake transcriber for L2 use case tests."""

    def __init__(
        self,
        segments: list[str] | None = None,
        load_error: BaseException | None = None,
        transcribe_error: BaseException | None = None,
    ) -> None:
        self._segments = segments or []
        self._load_error = load_error
        self._transcribe_error = transcribe_error
        self.load_model_calls: list[str] = []
        self.transcribe_calls: list[tuple[np.ndarray, str, bool]] = []
        self.close_calls = 0

    def load_model(self, model_path: str) -> None:
        self.load_model_calls.append(model_path)
        if self._load_error is not None:
            raise self._load_error

    def transcribe(self, audio: np.ndarray, language: str, translate: bool = False) -> list[str]:
        self.transcribe_calls.append((audio, language, translate))
        if self._transcribe_error is not None:
            raise self._transcribe_error
        return list(self._segments)

    def close(self) -> None:
        self.close_calls += 1

    def set_segments(self, segments: list[str]) -> None:
        self._segments = segments


class FakeModelResolver:
    """Fake model resolver that returns a fixed path or raises."""

    def __init__(self, path: str = '/models/ggml-large-v3.bin', error: Exception | None = None) -> None:
        self._path = path
        self._error = error
        self.resolve_calls: list[str] = []

    def resolve(self, model_name: str) -> str:
        self.resolve_calls.append(model_name)
        if self._error is not None:
            raise self._error
        return self._path


class FakeRecordingStore:
    """In-memory recording store rooted at a real temp directory."""

    def __init__(
        self,
        temp_dir: Path,
        audio: np.ndarray | None = None,
        read_error: Exception | None = None,
        delete_error: Exception | None = None,
    ) -> None:
        self._temp_dir = temp_dir
        self._audio = audio if audio is not None else np.zeros(16000, dtype=np.float32)
        self._read_error = read_error
        self._delete_error = delete_error
        self.save_calls: list[tuple[np.ndarray, int]] = []
        self.read_calls: list[Path] = []
        self.delete_calls: list[Path] = []

    @property
    def temp_dir(self) -> Path:
        return self._temp_dir

    @property
    def recording_path(self) -> Path:
        return self._temp_dir / RECORDING_FILENAME

    def save(self, samples: np.ndarray, sample_rate: int) -> Path:
        self.save_calls.append((samples, sample_rate))
        return self.recording_path

    def read_validated(self, path: Path) -> np.ndarray:
        self.read_calls.append(path)
        if self._read_error is not None:
            raise self._read_error
        return self._audio

    def delete(self, path: Path) -> None:
        self.delete_calls.append(path)
        if self._delete_error is not None:
            raise self._delete_error


# --- Standard Fixtures ---


@pytest.fixture
def default_config() -> AppConfig:
    return build_app_config({})


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    d = tmp_path / 'temp'
    d.mkdir()
    return d


@pytest.fixture
def fake_provider() -> FakeInputDeviceProvider:
    return FakeInputDeviceProvider()


@pytest.fixture
def fake_transcriber() -> FakeTranscriber:
    return FakeTranscriber()


@pytest.fixture
def fake_store(temp_dir: Path) -> FakeRecordingStore:
    return FakeRecordingStore(temp_dir)
