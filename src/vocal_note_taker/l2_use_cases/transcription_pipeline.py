"""Use case: transcribe one recording artifact and always remove it afterwards."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from vocal_note_taker.l1_entities.errors import AppError, PathPolicyViolationError, TranscriptionFailedError
from vocal_note_taker.l1_entities.transcription import ProgressMilestone, TranscriptionJob
from vocal_note_taker.l2_use_cases.ports.recording_store import RecordingStore
from vocal_note_taker.l2_use_cases.shared_model import SharedModel

log = logging.getLogger('vnt.transcription')

ProgressCallback = Callable[[ProgressMilestone], None]


@dataclass(frozen=True)
class TranscriptionResult:
    """Text on success or the error, plus whether the source audio was deleted."""

    text: str | None = None
    error: AppError | None = None
    audio_deleted: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and self.text is not None


def resolve_inside(path: Path, root: Path) -> Path:
    """Resolve *path* (symlinks, relative parts) and require it to live strictly under *root*."""
    resolved = Path(path).expanduser().resolve()
    root_resolved = Path(root).expanduser().resolve()
    if resolved == root_resolved or not resolved.is_relative_to(root_resolved):
        raise PathPolicyViolationError(f'Refusing to process audio outside the private temp directory: {path}')
    return resolved


class TranscriptionPipeline:
    """Staged pipeline: start, model ready, audio validated, inference, complete.

    The source file gets exactly one delete attempt per job whatever the
    outcome, except for paths rejected by the temp-directory policy, which are
    never touched.
    """

    def __init__(
        self,
        model: SharedModel,
        store: RecordingStore,
        language: str = 'auto',
        translate: bool = False,
    ) -> None:
        self._model = model
        self._store = store
        self._language = language
        self._translate = translate

    async def transcribe(self, source_path: Path, on_progress: ProgressCallback | None = None) -> TranscriptionResult:
        try:
            path = resolve_inside(source_path, self._store.temp_dir)
        except PathPolicyViolationError as exc:
            log.warning('%s', exc.message)
            return TranscriptionResult(error=exc, audio_deleted=False)

        job = TranscriptionJob(source_path=path)
        text: str | None = None
        error: AppError | None = None
        try:
            self._emit(job, ProgressMilestone.STARTED, on_progress)
            text = await self._run(job, on_progress)
        except AppError as exc:
            error = exc
        except Exception as exc:
            log.error('Unexpected transcription failure: %s', exc, exc_info=True)
            error = TranscriptionFailedError(f'Transcription failed: {exc}')
        finally:
            job.audio_deleted = self._delete_source(path)
            job.finished = True

        if error is not None:
            log.error(
                'Transcription job failed (%s): %s [audio_deleted=%s]',
                error.kind,
                error.message,
                job.audio_deleted,
            )
            return TranscriptionResult(error=error, audio_deleted=job.audio_deleted)

        self._emit(job, ProgressMilestone.COMPLETED, on_progress)
        return TranscriptionResult(text=text, audio_deleted=job.audio_deleted)

    async def _run(self, job: TranscriptionJob, on_progress: ProgressCallback | None) -> str:
        async with self._model.acquire() as transcriber:
            self._emit(job, ProgressMilestone.MODEL_READY, on_progress)

            audio = await asyncio.to_thread(self._store.read_validated, job.source_path)
            self._emit(job, ProgressMilestone.AUDIO_VALIDATED, on_progress)

            self._emit(job, ProgressMilestone.INFERENCE_STARTED, on_progress)
            try:
                segments = await asyncio.to_thread(transcriber.transcribe, audio, self._language, self._translate)
            except AppError:
                raise
            except Exception as exc:
                log.error('Inference failed: %s', exc, exc_info=True)
                raise TranscriptionFailedError(f'Transcription failed: {exc}') from exc

        text = ' '.join(segments).strip()
        log.info('Transcribed %d samples into %d segments (%d chars)', len(audio), len(segments), len(text))
        return text

    def _delete_source(self, path: Path) -> bool:
        try:
            self._store.delete(path)
        except OSError as exc:
            log.warning('Could not delete recording %s: %s', path, exc)
            return False
        log.debug('Deleted recording %s', path)
        return True

    @staticmethod
    def _emit(job: TranscriptionJob, milestone: ProgressMilestone, on_progress: ProgressCallback | None) -> None:
        job.advance(milestone)
        if on_progress is not None:
            on_progress(milestone)
