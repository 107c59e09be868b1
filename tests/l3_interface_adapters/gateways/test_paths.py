"""Tests for per-user directory helpers."""

from __future__ import annotations

import stat
from pathlib import Path

import pytest

from vocal_note_taker.l1_entities.errors import ConfigurationError
from vocal_note_taker.l3_interface_adapters.gateways.paths import (
    APP_NAME,
    CONFIG_DIR,
    DATA_DIR,
    DEFAULT_CONFIG_PATHS,
    MODELS_DIR,
    TEMP_DIR,
    ensure_private_dir,
)


class TestPaths:
    def test_temp_and_models_live_under_data_dir(self):
        assert TEMP_DIR.parent == DATA_DIR
        assert MODELS_DIR.parent == DATA_DIR
        assert APP_NAME in str(DATA_DIR)

    def test_default_config_paths_in_config_dir(self):
        assert all(p.parent == CONFIG_DIR for p in DEFAULT_CONFIG_PATHS)


class TestEnsurePrivateDir:
    def test_creates_owner_only_directory(self, tmp_path: Path):
        target = tmp_path / 'a' / 'temp'
        assert ensure_private_dir(target) == target
        assert stat.S_IMODE(target.stat().st_mode) == 0o700

    def test_existing_directory_ok(self, tmp_path: Path):
        assert ensure_private_dir(tmp_path) == tmp_path

    def test_failure_is_configuration_error(self, tmp_path: Path):
        blocker = tmp_path / 'blocker'
        blocker.write_text('not a dir', encoding='utf-8')
        with pytest.raises(ConfigurationError, match='blocker'):
            ensure_private_dir(blocker / 'temp')
