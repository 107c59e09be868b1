"""File-based debug logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

from vocal_note_taker.l3_interface_adapters.gateways.paths import ensure_private_dir


def setup_file_logging(log_dir: Path) -> Path:
    """Configure file-based debug logging for the ``vnt`` logger tree. Returns the log file path."""
    ensure_private_dir(log_dir)
    log_path = log_dir / 'vnt_debug.log'
    handler = logging.FileHandler(log_path, encoding='utf-8')
    handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(message)s'))
    root = logging.getLogger('vnt')
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)
    logging.getLogger('vnt.cli').info('Debug logging started → %s', log_path)
    return log_path
