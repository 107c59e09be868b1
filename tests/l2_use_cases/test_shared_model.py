"""Tests for SharedModel — lazy load behind one gate."""

from __future__ import annotations

import asyncio

import pytest

from tests.conftest import FakeModelResolver, FakeTranscriber
from vocal_note_taker.l1_entities.errors import ModelLoadFailedError, ModelLoadHint, ModelNotFoundError
from vocal_note_taker.l2_use_cases.shared_model import SharedModel


class TestSharedModel:
    @pytest.mark.asyncio
    async def test_loads_once_on_first_acquire(self, fake_transcriber: FakeTranscriber):
        resolver = FakeModelResolver()
        model = SharedModel(fake_transcriber, resolver, 'ggml-large-v3.bin')
        assert not model.loaded

        async with model.acquire() as t:
            assert t is fake_transcriber
        async with model.acquire():
            pass

        assert model.loaded
        assert fake_transcriber.load_model_calls == ['/models/ggml-large-v3.bin']
        assert resolver.resolve_calls == ['ggml-large-v3.bin']

    @pytest.mark.asyncio
    async def test_missing_model_propagates(self, fake_transcriber: FakeTranscriber):
        resolver = FakeModelResolver(error=ModelNotFoundError('Transcription model not found: ggml-large-v3.bin'))
        model = SharedModel(fake_transcriber, resolver, 'ggml-large-v3.bin')

        with pytest.raises(ModelNotFoundError, match='ggml-large-v3.bin'):
            async with model.acquire():
                pass
        assert not model.loaded
        assert fake_transcriber.load_model_calls == []

    @pytest.mark.asyncio
    async def test_memory_error_hint(self):
        model = SharedModel(FakeTranscriber(load_error=MemoryError()), FakeModelResolver(), 'm.bin')
        with pytest.raises(ModelLoadFailedError) as exc_info:
            async with model.acquire():
                pass
        assert exc_info.value.hint is ModelLoadHint.MEMORY

    @pytest.mark.asyncio
    async def test_other_load_error_suggests_corruption(self):
        model = SharedModel(FakeTranscriber(load_error=RuntimeError('bad magic')), FakeModelResolver(), 'm.bin')
        with pytest.raises(ModelLoadFailedError, match='corrupted') as exc_info:
            async with model.acquire():
                pass
        assert exc_info.value.hint is ModelLoadHint.CORRUPT

    @pytest.mark.asyncio
    async def test_failed_load_retried_by_next_job(self):
        transcriber = FakeTranscriber(load_error=RuntimeError('bad magic'))
        model = SharedModel(transcriber, FakeModelResolver(), 'm.bin')
        with pytest.raises(ModelLoadFailedError):
            async with model.acquire():
                pass

        transcriber._load_error = None
        async with model.acquire():
            pass
        assert model.loaded
        assert len(transcriber.load_model_calls) == 2

    @pytest.mark.asyncio
    async def test_jobs_hold_gate_one_at_a_time(self, fake_transcriber: FakeTranscriber):
        model = SharedModel(fake_transcriber, FakeModelResolver(), 'm.bin')
        events: list[str] = []

        async def job(name: str) -> None:
            async with model.acquire():
                events.append(f'{name}-in')
                await asyncio.sleep(0.01)
                events.append(f'{name}-out')

        await asyncio.gather(job('a'), job('b'))
        assert events == ['a-in', 'a-out', 'b-in', 'b-out']

    @pytest.mark.asyncio
    async def test_close_releases_loaded_model(self, fake_transcriber: FakeTranscriber):
        model = SharedModel(fake_transcriber, FakeModelResolver(), 'm.bin')
        model.close()
        assert fake_transcriber.close_calls == 0

        async with model.acquire():
            pass
        model.close()
        assert fake_transcriber.close_calls == 1
        assert not model.loaded
