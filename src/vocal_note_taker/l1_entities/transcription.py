"""Transcription job entities."""

from __future__ import annotations

import enum
from pathlib import Path

from pydantic import BaseModel


class ProgressMilestone(enum.IntEnum):
    """Coarse pipeline milestones.

    The inference engine reports no progress of its own, so these mark stage
    boundaries, not a literal completion percentage.
    """

    STARTED = 0
    MODEL_READY = 5
    AUDIO_VALIDATED = 10
    INFERENCE_STARTED = 20
    COMPLETED = 100


class TranscriptionJob(BaseModel):
    """One transcription request. Terminal on completion or error."""

    source_path: Path
    progress: ProgressMilestone = ProgressMilestone.STARTED
    audio_deleted: bool = False
    finished: bool = False

    def advance(self, milestone: ProgressMilestone) -> None:
        if milestone < self.progress:
            raise ValueError(f'Progress cannot go backwards: {self.progress} -> {milestone}')
        self.progress = milestone
