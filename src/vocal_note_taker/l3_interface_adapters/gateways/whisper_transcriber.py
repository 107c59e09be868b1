"""Gateway: whisper.cpp transcriber — implements Transcriber port."""

from __future__ import annotations

import contextlib
import logging
import os
import time

import numpy as np
from pywhispercpp.model import Model

log = logging.getLogger('vnt.transcription')

GREEDY_SAMPLING = 0
_NATIVE_FDS = (1, 2)


@contextlib.contextmanager
def _silence_native_output():
    """Point file descriptors 1 and 2 at /dev/null for the duration of the block.

    whisper.cpp writes its banners and timings with C fprintf, which
    redirecting sys.stdout/sys.stderr does not catch.
    """
    sink = os.open(os.devnull, os.O_WRONLY)
    saved = [os.dup(fd) for fd in _NATIVE_FDS]
    try:
        for fd in _NATIVE_FDS:
            os.dup2(sink, fd)
        yield
    finally:
        for fd, copy in zip(_NATIVE_FDS, saved):
            os.dup2(copy, fd)
            os.close(copy)
        os.close(sink)


class WhisperTranscriber:
    """pywhispercpp adapter: one greedy-decoding model held for the process lifetime."""

    def __init__(self, n_threads: int | None = None) -> None:
        self._model: Model | None = None
        self._n_threads = n_threads

    @property
    def is_loaded(self) -> bool:
        return self._model is not None

    def load_model(self, model_path: str) -> None:
        started = time.monotonic()
        with _silence_native_output():
            model = Model(
                model_path,
                params_sampling_strategy=GREEDY_SAMPLING,
                print_progress=False,
                print_realtime=False,
            )
        self.close()
        self._model = model
        log.debug('whisper.cpp model loaded in %.1fs', time.monotonic() - started)

    def transcribe(
        self,
        audio: np.ndarray,
        language: str,
        translate: bool = False,
    ) -> list[str]:
        if self._model is None:
            raise RuntimeError('Model not loaded. Call load_model() first.')

        options: dict = {'language': language, 'translate': translate}
        if self._n_threads:
            options['n_threads'] = self._n_threads

        samples = np.ascontiguousarray(audio, dtype=np.float32)
        with _silence_native_output():
            segments = self._model.transcribe(samples, **options)

        texts = [seg.text.strip() for seg in segments]
        return [text for text in texts if text]

    def close(self) -> None:
        """Release the model; whisper.cpp prints teardown noise, so it is silenced too."""
        if self._model is None:
            return
        with _silence_native_output():
            self._model = None
