"""Lazily loaded transcription model behind one asyncio gate."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator

from vocal_note_taker.l1_entities.errors import AppError, ModelLoadFailedError, ModelLoadHint
from vocal_note_taker.l2_use_cases.ports.model_resolver import ModelResolver
from vocal_note_taker.l2_use_cases.ports.transcriber import Transcriber

log = logging.getLogger('vnt.transcription')


class SharedModel:
    """Optional resource with an acquire step.

    The model is resolved and loaded by the first job that acquires it and is
    kept for the rest of the process. Jobs holding the gate run one at a time;
    a failed load leaves the model absent so the next job tries again.
    """

    def __init__(self, transcriber: Transcriber, resolver: ModelResolver, model_name: str) -> None:
        self._transcriber = transcriber
        self._resolver = resolver
        self._model_name = model_name
        self._gate = asyncio.Lock()
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    @contextlib.asynccontextmanager
    async def acquire(self) -> AsyncIterator[Transcriber]:
        async with self._gate:
            if not self._loaded:
                await self._load()
            yield self._transcriber

    async def _load(self) -> None:
        model_path = self._resolver.resolve(self._model_name)
        log.info('Loading transcription model from %s', model_path)
        try:
            await asyncio.to_thread(self._transcriber.load_model, model_path)
        except AppError:
            raise
        except MemoryError as exc:
            raise ModelLoadFailedError(
                ModelLoadHint.MEMORY,
                'Not enough memory to load the transcription model. '
                'Close other applications or use a smaller model, then try again.',
            ) from exc
        except Exception as exc:
            log.error('Model load failed: %s', exc, exc_info=True)
            raise ModelLoadFailedError(
                ModelLoadHint.CORRUPT,
                f'The transcription model at {model_path} could not be loaded and may be corrupted. '
                'Delete it and download it again.',
            ) from exc
        self._loaded = True
        log.info('Transcription model ready')

    def close(self) -> None:
        """Release the model. Only called on process shutdown."""
        if self._loaded:
            self._transcriber.close()
            self._loaded = False
