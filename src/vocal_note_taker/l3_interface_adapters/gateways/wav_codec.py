"""Gateway: WAV codec — mono 16-bit PCM encode, validating decode."""

from __future__ import annotations

import wave
from pathlib import Path

import numpy as np
import soundfile as sf

from vocal_note_taker.l1_entities.audio_constants import CHANNELS, SAMPLE_RATE, SAMPLE_WIDTH
from vocal_note_taker.l1_entities.errors import AudioFormatIssue, InvalidAudioFormatError, IoFailureError

PCM16_SCALE = 32767.0
PCM16_MIN = -32768
PCM16_MAX = 32767


def to_pcm16(samples: np.ndarray) -> np.ndarray:
    """Scale floats by 32767, saturate to the int16 range, then truncate toward zero.

    -1.0 encodes to -32767, not -32768; only inputs below -1.0 reach the true minimum.
    """
    data = np.nan_to_num(np.asarray(samples, dtype=np.float64).ravel())
    scaled = np.clip(data * PCM16_SCALE, PCM16_MIN, PCM16_MAX)
    return scaled.astype(np.int16)


def encode_wav(samples: np.ndarray, sample_rate: int, path: Path) -> Path:
    """Write *samples* (floats in [-1.0, 1.0]) to *path* as mono 16-bit PCM."""
    pcm = to_pcm16(samples)
    try:
        with wave.open(str(path), 'wb') as wf:
            wf.setnchannels(CHANNELS)
            wf.setsampwidth(SAMPLE_WIDTH)
            wf.setframerate(sample_rate)
            wf.writeframes(pcm.astype('<i2').tobytes())
    except (OSError, wave.Error) as exc:
        raise IoFailureError(f'Cannot write WAV file {path}: {exc}') from exc
    return path


def decode_wav(path: Path, expected_rate: int = SAMPLE_RATE) -> np.ndarray:
    """Validate and read *path*, returning float32 samples normalized to [-1.0, 1.0].

    Integer PCM is divided by 32768; floating-point containers pass through.

    Raises:
        InvalidAudioFormatError: wrong channel count, wrong rate, no samples,
            or a file that cannot be opened or parsed.
    """
    if not path.is_file():
        raise InvalidAudioFormatError(AudioFormatIssue.CORRUPT, f'Audio file not found or unreadable: {path.name}')

    try:
        info = sf.info(str(path))
    except (RuntimeError, OSError) as exc:
        raise InvalidAudioFormatError(AudioFormatIssue.CORRUPT, f'Cannot parse audio file {path.name}: {exc}') from exc

    if info.channels != CHANNELS:
        raise InvalidAudioFormatError(
            AudioFormatIssue.CHANNEL,
            f'Audio must be mono, got {info.channels} channels.',
        )
    if info.samplerate != expected_rate:
        raise InvalidAudioFormatError(
            AudioFormatIssue.RATE,
            f'Audio must be sampled at {expected_rate} Hz, got {info.samplerate} Hz.',
        )
    if info.frames == 0:
        raise InvalidAudioFormatError(AudioFormatIssue.EMPTY, 'Audio file contains no samples.')

    try:
        data, _ = sf.read(str(path), dtype='float32', always_2d=False)
    except (RuntimeError, OSError) as exc:
        raise InvalidAudioFormatError(AudioFormatIssue.CORRUPT, f'Cannot read audio file {path.name}: {exc}') from exc

    if len(data) == 0:
        raise InvalidAudioFormatError(AudioFormatIssue.EMPTY, 'Audio file contains no samples.')
    return np.ascontiguousarray(data, dtype=np.float32)
