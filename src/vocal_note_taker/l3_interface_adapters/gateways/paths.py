"""Per-user directories for configuration, models, logs and the private temp area."""

from __future__ import annotations

from pathlib import Path

from platformdirs import user_config_path, user_data_path, user_log_path

from vocal_note_taker.l1_entities.errors import ConfigurationError

APP_NAME = 'vocal-note-taker'

CONFIG_DIR = user_config_path(APP_NAME)
DATA_DIR = user_data_path(APP_NAME)
TEMP_DIR = DATA_DIR / 'temp'
MODELS_DIR = DATA_DIR / 'models'
LOG_DIR = user_log_path(APP_NAME)

DEFAULT_CONFIG_PATHS = [
    CONFIG_DIR / 'config.yaml',
    CONFIG_DIR / 'config.yml',
]


def ensure_private_dir(path: Path) -> Path:
    """Create *path* (owner-only permissions) if missing. Raises ConfigurationError."""
    try:
        path.mkdir(mode=0o700, parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigurationError(f'Cannot create application directory {path}: {exc}') from exc
    return path
