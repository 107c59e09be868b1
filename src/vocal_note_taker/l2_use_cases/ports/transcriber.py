"""Port: speech-to-text inference engine."""

from __future__ import annotations

from typing import Protocol

import numpy as np


class Transcriber(Protocol):
    """Abstract inference engine. Zero framework types leak through."""

    def load_model(self, model_path: str) -> None:
        """Load the transcription model from the given path."""
        ...

    def transcribe(
        self,
        audio: np.ndarray,
        language: str,
        translate: bool = False,
    ) -> list[str]:
        """Run one inference pass over mono 16 kHz float samples. Returns ordered segment texts."""
        ...

    def close(self) -> None:
        """Release underlying resources."""
        ...
