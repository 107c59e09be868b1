"""Gateway: explicit, user-initiated model download from the HuggingFace Hub."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from huggingface_hub import hf_hub_download

from vocal_note_taker.l1_entities.errors import ConfigurationError, IoFailureError
from vocal_note_taker.l3_interface_adapters.gateways.paths import ensure_private_dir

WHISPER_CPP_REPO = 'ggerganov/whisper.cpp'
WHISPER_CPP_MODELS = frozenset(
    {
        'ggml-large-v3.bin',
        'ggml-large-v3-q5_0.bin',
        'ggml-large-v3-turbo.bin',
        'ggml-large-v3-turbo-q8_0.bin',
        'ggml-large-v3-turbo-q5_0.bin',
        'ggml-large-v2.bin',
        'ggml-medium.bin',
        'ggml-medium-q8_0.bin',
        'ggml-small.bin',
        'ggml-small-q8_0.bin',
        'ggml-base.bin',
        'ggml-tiny.bin',
    }
)


def _make_progress_class(callback: Callable[[int], None]) -> type:
    """Create a tqdm-compatible class that reports download progress via *callback*."""

    class _ProgressReporter:
        def __init__(self, *args, **kwargs):
            self.total: int = kwargs.get('total', 0) or 0
            self.n: int = 0
            if self.total > 0:
                callback(0)

        def update(self, n: int = 1) -> None:
            self.n += n
            if self.total > 0:
                callback(min(int(self.n / self.total * 100), 100))

        def close(self) -> None:
            pass

        def set_description(self, *a, **kw) -> None:
            pass

        def set_description_str(self, *a, **kw) -> None:
            pass

        def refresh(self) -> None:
            pass

        def __enter__(self):
            return self

        def __exit__(self, *args):
            self.close()

    return _ProgressReporter


def download_model(
    filename: str,
    models_dir: Path,
    on_progress: Callable[[int], None] | None = None,
) -> Path:
    """Fetch *filename* from the whisper.cpp model repository into *models_dir*.

    Returns the existing file without touching the network when it is already present.
    """
    if filename not in WHISPER_CPP_MODELS:
        known = ', '.join(sorted(WHISPER_CPP_MODELS))
        raise ConfigurationError(f'Unknown model file {filename!r}. Known models: {known}')

    ensure_private_dir(models_dir)
    local_path = models_dir / filename
    if local_path.exists():
        return local_path

    kwargs: dict = dict(repo_id=WHISPER_CPP_REPO, filename=filename, local_dir=models_dir)
    if on_progress is not None:
        kwargs['tqdm_class'] = _make_progress_class(on_progress)
    try:
        return Path(hf_hub_download(**kwargs))
    except OSError as exc:
        raise IoFailureError(f'Model download failed: {exc}') from exc
