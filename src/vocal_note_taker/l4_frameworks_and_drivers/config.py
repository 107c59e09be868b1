"""Application config defaults — lives in L4, not domain."""

from __future__ import annotations

import copy

from pydantic import ValidationError

from vocal_note_taker.l1_entities.audio_constants import SAMPLE_RATE, WAVEFORM_DECIMATION
from vocal_note_taker.l1_entities.config import AppConfig
from vocal_note_taker.l1_entities.errors import ConfigurationError
from vocal_note_taker.l3_interface_adapters.gateways.yaml_config_loader import deep_merge

APP_CONFIG_DEFAULTS: dict = {
    'audio': {
        'sample_rate': SAMPLE_RATE,
        'waveform_decimation': WAVEFORM_DECIMATION,
        'preview_queue_size': 32,
        'start_timeout': 5.0,
    },
    'transcription': {
        'model': 'ggml-large-v3.bin',
        'language': 'auto',
        'translate': False,
        'n_threads': None,
    },
}


def build_app_config(raw: dict) -> AppConfig:
    """Merge *raw* user overrides on top of defaults, then validate."""
    merged = copy.deepcopy(APP_CONFIG_DEFAULTS)
    deep_merge(merged, raw)
    try:
        return AppConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigurationError(f'Invalid configuration: {exc}') from exc
