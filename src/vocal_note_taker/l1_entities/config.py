"""Configuration Pydantic models — pure schema, no infrastructure defaults."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AudioConfig(BaseModel):
    sample_rate: int = Field(gt=0)
    waveform_decimation: int = Field(gt=0)
    preview_queue_size: int = Field(gt=0)
    start_timeout: float = Field(gt=0)


class TranscriptionConfig(BaseModel):
    model: str
    language: str
    translate: bool
    n_threads: int | None = None


class AppConfig(BaseModel):
    audio: AudioConfig
    transcription: TranscriptionConfig
