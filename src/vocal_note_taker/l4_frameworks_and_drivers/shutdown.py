"""Startup sweep and graceful shutdown sequence."""

from __future__ import annotations

import logging

from vocal_note_taker.l1_entities.errors import AppError
from vocal_note_taker.l3_interface_adapters.controllers.recording_controller import RecordingController
from vocal_note_taker.l3_interface_adapters.gateways.temp_file_janitor import TempFileJanitor

log = logging.getLogger('vnt.janitor')


def startup_cleanup(janitor: TempFileJanitor) -> int:
    """Remove recordings orphaned by a previous crash. Never raises."""
    try:
        return janitor.sweep()
    except AppError as exc:
        log.warning('Startup cleanup failed: %s', exc.message)
        return 0


async def graceful_shutdown(controller: RecordingController, janitor: TempFileJanitor) -> int:
    """Stop any active recording without saving it, then sweep the temp directory.

    Shared by every quit path (explicit quit, window close, menu quit).
    """
    try:
        if await controller.discard():
            log.info('Stopped active recording during shutdown')
    except AppError as exc:
        log.warning('Could not stop active recording during shutdown: %s', exc.message)

    try:
        return janitor.sweep()
    except AppError as exc:
        log.warning('Shutdown cleanup failed: %s', exc.message)
        return 0
