"""Transcription worker shell — runs one pipeline job and reports it as messages."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from vocal_note_taker.l1_entities.transcription import ProgressMilestone
from vocal_note_taker.l2_use_cases.transcription_pipeline import TranscriptionPipeline
from vocal_note_taker.l4_frameworks_and_drivers.messages import (
    ErrorOccurred,
    TranscriptionComplete,
    TranscriptionProgress,
)


async def run_transcription(
    post_message: Callable,
    pipeline: TranscriptionPipeline,
    source_path: Path,
) -> str | None:
    """Transcribe *source_path*. Returns the text, or None after posting ErrorOccurred."""

    def _on_progress(milestone: ProgressMilestone) -> None:
        post_message(TranscriptionProgress(percent=int(milestone)))

    result = await pipeline.transcribe(source_path, on_progress=_on_progress)
    if result.ok:
        post_message(TranscriptionComplete(text=result.text))
        return result.text

    post_message(ErrorOccurred.from_error(result.error, audio_deleted=result.audio_deleted))
    return None
