"""Recording session entities."""

from __future__ import annotations

import enum
from pathlib import Path

import numpy as np
from pydantic import BaseModel, Field


class RecordingState(enum.Enum):
    IDLE = 'idle'
    INITIALIZING = 'initializing'
    RECORDING = 'recording'
    DRAINING = 'draining'


class RecordingResult(BaseModel):
    """Samples drained from a capture thread, with the rate they were captured at."""

    samples: np.ndarray
    sample_rate: int

    model_config = {'arbitrary_types_allowed': True}

    @property
    def duration(self) -> float:
        if self.sample_rate <= 0:
            return 0.0
        return len(self.samples) / self.sample_rate


class RecordedAudio(BaseModel):
    """A finished recording persisted as a WAV artifact."""

    path: Path
    sample_rate: int
    sample_count: int = Field(ge=0)
    duration: float = Field(description='Recorded length in seconds')
