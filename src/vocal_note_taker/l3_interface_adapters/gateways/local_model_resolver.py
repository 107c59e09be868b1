"""Gateway: local model resolver — implements ModelResolver port without any network access."""

from __future__ import annotations

from pathlib import Path

from vocal_note_taker.l1_entities.errors import ModelNotFoundError
from vocal_note_taker.l3_interface_adapters.gateways.paths import ensure_private_dir

MODEL_SOURCE_URL = 'https://huggingface.co/ggerganov/whisper.cpp'


def model_not_found_message(path: Path) -> str:
    return (
        f'Transcription model not found: {path}\n'
        f'Download {path.name} from {MODEL_SOURCE_URL} and place it at {path}, '
        'or run `vocal-note-taker download-model`.'
    )


class LocalModelResolver:
    """Maps a model filename to a file under the per-user models directory."""

    def __init__(self, models_dir: Path) -> None:
        self._models_dir = models_dir

    def model_path(self, model_name: str) -> Path:
        candidate = Path(model_name).expanduser()
        if candidate.is_absolute():
            return candidate
        return self._models_dir / model_name

    def resolve(self, model_name: str) -> str:
        path = self.model_path(model_name)
        if not path.is_file():
            raise ModelNotFoundError(model_not_found_message(path))
        return str(path)

    def check_model_availability(self, model_name: str) -> bool:
        return self.model_path(model_name).is_file()

    def ensure_model_dir(self) -> Path:
        return ensure_private_dir(self._models_dir)
