"""Gateway: WAV recording store — implements RecordingStore port."""

from __future__ import annotations

from pathlib import Path

import numpy as np

from vocal_note_taker.l1_entities.audio_constants import RECORDING_FILENAME
from vocal_note_taker.l3_interface_adapters.gateways.paths import ensure_private_dir
from vocal_note_taker.l3_interface_adapters.gateways.wav_codec import decode_wav, encode_wav


class WavRecordingStore:
    """Keeps the single fixed-name recording inside a private temp directory."""

    def __init__(self, temp_dir: Path) -> None:
        self._temp_dir = temp_dir

    @property
    def temp_dir(self) -> Path:
        return self._temp_dir

    @property
    def recording_path(self) -> Path:
        return self._temp_dir / RECORDING_FILENAME

    def save(self, samples: np.ndarray, sample_rate: int) -> Path:
        ensure_private_dir(self._temp_dir)
        return encode_wav(samples, sample_rate, self.recording_path)

    def read_validated(self, path: Path) -> np.ndarray:
        return decode_wav(path)

    def delete(self, path: Path) -> None:
        path.unlink()
