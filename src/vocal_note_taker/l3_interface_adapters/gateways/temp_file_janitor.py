"""Gateway: sweeps orphaned recording artifacts out of the private temp directory."""

from __future__ import annotations

import logging
from pathlib import Path

from vocal_note_taker.l1_entities.audio_constants import RECORDING_EXTENSION
from vocal_note_taker.l1_entities.errors import IoFailureError

log = logging.getLogger('vnt.janitor')


class TempFileJanitor:
    """Deletes every recording artifact directly inside ``temp_dir``.

    Runs at startup (crash orphans) and at shutdown (end-of-session privacy).
    Subdirectories are not descended into.
    """

    def __init__(self, temp_dir: Path, extension: str = RECORDING_EXTENSION) -> None:
        self._temp_dir = temp_dir
        self._extension = extension

    def sweep(self) -> int:
        """Returns the number of files removed. A missing directory removes nothing."""
        if not self._temp_dir.is_dir():
            return 0

        try:
            entries = list(self._temp_dir.iterdir())
        except OSError as exc:
            raise IoFailureError(f'Cannot read temp directory {self._temp_dir}: {exc}') from exc

        removed = 0
        for entry in entries:
            if entry.suffix != self._extension or entry.is_dir():
                continue
            try:
                entry.unlink()
            except OSError as exc:
                log.warning('Could not remove temp file %s: %s', entry, exc)
                continue
            removed += 1

        if removed:
            log.info('Removed %d recording file(s) from %s', removed, self._temp_dir)
        return removed
