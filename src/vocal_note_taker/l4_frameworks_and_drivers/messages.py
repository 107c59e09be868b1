"""Textual Message subclasses — the event contract between workers and the UI layer."""

from __future__ import annotations

from pathlib import Path

from textual.message import Message

from vocal_note_taker.l1_entities.errors import AppError


class RecordingStarted(Message):
    """Posted once the capture stream is running."""

    def __init__(self, sample_rate: int) -> None:
        super().__init__()
        self.sample_rate = sample_rate


class WaveformData(Message):
    """Posted with a batch of decimated samples for the live waveform display."""

    def __init__(self, samples: list[float]) -> None:
        super().__init__()
        self.samples = samples


class RecordingStopped(Message):
    def __init__(self, duration: float, path: Path) -> None:
        super().__init__()
        self.duration = duration
        self.path = path


class TranscriptionProgress(Message):
    """Coarse milestone percentage (0, 5, 10, 20, 100)."""

    def __init__(self, percent: int) -> None:
        super().__init__()
        self.percent = percent


class TranscriptionComplete(Message):
    def __init__(self, text: str) -> None:
        super().__init__()
        self.text = text


class ErrorOccurred(Message):
    """Posted for any failure. ``audio_deleted`` is None when no audio file was involved."""

    def __init__(self, kind: str, message: str, audio_deleted: bool | None = None) -> None:
        super().__init__()
        self.kind = kind
        self.message = message
        self.audio_deleted = audio_deleted

    @classmethod
    def from_error(cls, error: BaseException, audio_deleted: bool | None = None) -> ErrorOccurred:
        app_error = AppError.from_exception(error)
        return cls(kind=app_error.kind, message=app_error.message, audio_deleted=audio_deleted)
