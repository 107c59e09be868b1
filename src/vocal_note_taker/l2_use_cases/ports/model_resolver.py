"""Port: transcription model resolution."""

from __future__ import annotations

from typing import Protocol


class ModelResolver(Protocol):
    """Maps a model name to a local file path."""

    def resolve(self, model_name: str) -> str:
        """Resolve a model name to an existing local path. Raises ModelNotFoundError."""
        ...
