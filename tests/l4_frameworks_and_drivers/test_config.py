"""Tests for application config defaults."""

from __future__ import annotations

import pytest

from vocal_note_taker.l1_entities.errors import ConfigurationError
from vocal_note_taker.l4_frameworks_and_drivers.config import APP_CONFIG_DEFAULTS, build_app_config


class TestBuildAppConfig:
    def test_defaults(self):
        config = build_app_config({})
        assert config.audio.sample_rate == 16000
        assert config.audio.waveform_decimation == 100
        assert config.audio.preview_queue_size == 32
        assert config.audio.start_timeout == pytest.approx(5.0)
        assert config.transcription.model == 'ggml-large-v3.bin'
        assert config.transcription.language == 'auto'
        assert config.transcription.translate is False
        assert config.transcription.n_threads is None

    def test_partial_override(self):
        config = build_app_config({'transcription': {'language': 'fr', 'n_threads': 8}})
        assert config.transcription.language == 'fr'
        assert config.transcription.n_threads == 8
        assert config.transcription.model == 'ggml-large-v3.bin'

    def test_defaults_not_mutated(self):
        build_app_config({'audio': {'preview_queue_size': 4}})
        assert APP_CONFIG_DEFAULTS['audio']['preview_queue_size'] == 32

    def test_invalid_value(self):
        with pytest.raises(ConfigurationError):
            build_app_config({'audio': {'waveform_decimation': 0}})
