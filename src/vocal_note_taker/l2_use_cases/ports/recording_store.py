"""Port: storage for the recording artifact."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

import numpy as np


class RecordingStore(Protocol):
    """Persists, validates and removes WAV artifacts inside one private directory."""

    @property
    def temp_dir(self) -> Path:
        """The private directory all artifacts live in."""
        ...

    def save(self, samples: np.ndarray, sample_rate: int) -> Path:
        """Encode *samples* to the fixed recording file. Returns its path."""
        ...

    def read_validated(self, path: Path) -> np.ndarray:
        """Decode and validate *path*. Raises InvalidAudioFormatError."""
        ...

    def delete(self, path: Path) -> None:
        """Remove *path*. Raises OSError on failure."""
        ...
