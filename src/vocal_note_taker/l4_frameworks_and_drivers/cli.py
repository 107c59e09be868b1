"""CLI entry point for vocal-note-taker."""

from __future__ import annotations

import asyncio
import sys
import threading

import click

from vocal_note_taker import __version__
from vocal_note_taker.l1_entities.errors import AppError
from vocal_note_taker.l4_frameworks_and_drivers.messages import (
    ErrorOccurred,
    RecordingStarted,
    RecordingStopped,
    TranscriptionProgress,
    WaveformData,
)

_METER_WIDTH = 30


def _echo_message(message) -> None:
    """Render worker messages on stderr; the transcript itself goes to stdout."""
    if isinstance(message, RecordingStarted):
        click.echo(f'Recording at {message.sample_rate} Hz. Press Enter to stop.', err=True)
    elif isinstance(message, WaveformData):
        peak = max((abs(s) for s in message.samples), default=0.0)
        filled = min(int(peak * _METER_WIDTH), _METER_WIDTH)
        click.echo('\r[' + '#' * filled + ' ' * (_METER_WIDTH - filled) + ']', nl=False, err=True)
    elif isinstance(message, RecordingStopped):
        click.echo(f'\nRecorded {message.duration:.1f}s', err=True)
    elif isinstance(message, TranscriptionProgress):
        click.echo(f'Transcribing... {message.percent}%', err=True)
    elif isinstance(message, ErrorOccurred):
        click.echo(f'Error [{message.kind}]: {message.message}', err=True)
        if message.audio_deleted is not None:
            click.echo(f'Audio deleted: {"yes" if message.audio_deleted else "NO"}', err=True)


@click.group()
@click.option(
    '-c',
    '--config',
    'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Path to YAML config file.',
)
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx, config_path):
    """vocal-note-taker -- record your voice and transcribe it locally, nothing leaves the machine."""
    from vocal_note_taker.l2_use_cases.ports.config_loader import (  # noqa: PLC0415 -- deferred: not needed for --help
        ConfigLoader,
    )
    from vocal_note_taker.l3_interface_adapters.gateways.yaml_config_loader import (  # noqa: PLC0415 -- deferred: yaml stack not loaded on --help
        YamlConfigLoader,
    )
    from vocal_note_taker.l4_frameworks_and_drivers.config import (  # noqa: PLC0415 -- deferred: not needed for --help
        build_app_config,
    )

    try:
        loader: ConfigLoader = YamlConfigLoader()
        raw = loader.load_raw(config_path)
        ctx.obj = build_app_config(raw)
    except (FileNotFoundError, AppError) as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(1)


@cli.command()
@click.option(
    '-d',
    '--duration',
    type=click.FloatRange(min=0.0, min_open=True),
    default=None,
    help='Stop automatically after this many seconds instead of waiting for Enter.',
)
@click.pass_obj
def record(config, duration):
    """Record from the default microphone, then print the transcript."""
    from vocal_note_taker.l3_interface_adapters.gateways.paths import LOG_DIR  # noqa: PLC0415 -- deferred
    from vocal_note_taker.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: audio stack not loaded on --help
        DependencyContainer,
    )
    from vocal_note_taker.l4_frameworks_and_drivers.logging_setup import (  # noqa: PLC0415 -- deferred
        setup_file_logging,
    )

    try:
        setup_file_logging(LOG_DIR)
    except AppError as e:
        click.echo(f'Warning: file logging disabled ({e})', err=True)

    container = DependencyContainer(config)
    text = asyncio.run(_record_and_transcribe(container, duration))
    if text is None:
        sys.exit(1)
    click.echo(text)


async def _record_and_transcribe(container, duration: float | None) -> str | None:
    from vocal_note_taker.l4_frameworks_and_drivers.shutdown import (  # noqa: PLC0415 -- deferred
        graceful_shutdown,
        startup_cleanup,
    )
    from vocal_note_taker.l4_frameworks_and_drivers.workers.recording_worker import (  # noqa: PLC0415 -- deferred
        run_waveform_pump,
        start_recording,
        stop_recording,
    )
    from vocal_note_taker.l4_frameworks_and_drivers.workers.transcription_worker import (  # noqa: PLC0415 -- deferred
        run_transcription,
    )

    startup_cleanup(container.janitor)
    preview = container.preview_queue()
    pump_done = threading.Event()
    pump = threading.Thread(
        target=run_waveform_pump,
        args=(_echo_message, pump_done.is_set, preview),
        name='vnt-waveform-pump',
        daemon=True,
    )

    try:
        started = await asyncio.to_thread(start_recording, _echo_message, container.controller, preview)
        if not started:
            return None
        pump.start()

        if duration is None:
            await asyncio.to_thread(sys.stdin.readline)
        else:
            await asyncio.sleep(duration)

        recorded = await stop_recording(_echo_message, container.controller)
        pump_done.set()
        pump.join(timeout=1.0)
        if recorded is None:
            return None

        return await run_transcription(_echo_message, container.pipeline, recorded.path)
    finally:
        pump_done.set()
        await graceful_shutdown(container.controller, container.janitor)
        container.model.close()


@cli.command()
@click.pass_obj
def cleanup(config):
    """Delete leftover recordings from the private temp directory."""
    from vocal_note_taker.l3_interface_adapters.gateways.paths import TEMP_DIR  # noqa: PLC0415 -- deferred
    from vocal_note_taker.l3_interface_adapters.gateways.temp_file_janitor import (  # noqa: PLC0415 -- deferred
        TempFileJanitor,
    )

    try:
        removed = TempFileJanitor(TEMP_DIR).sweep()
    except AppError as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(1)
    click.echo(f'Removed {removed} recording file(s) from {TEMP_DIR}')


@cli.command('model-path')
@click.pass_obj
def model_path(config):
    """Show where the transcription model is expected and whether it is installed."""
    from vocal_note_taker.l3_interface_adapters.gateways.local_model_resolver import (  # noqa: PLC0415 -- deferred
        LocalModelResolver,
    )
    from vocal_note_taker.l3_interface_adapters.gateways.paths import MODELS_DIR  # noqa: PLC0415 -- deferred

    resolver = LocalModelResolver(MODELS_DIR)
    path = resolver.model_path(config.transcription.model)
    status = 'installed' if resolver.check_model_availability(config.transcription.model) else 'missing'
    click.echo(f'{path} ({status})')


@cli.command('download-model')
@click.option('-m', '--model', 'model_name', default=None, help='Model file name (defaults to the configured model).')
@click.pass_obj
def download_model_cmd(config, model_name):
    """Download the whisper.cpp model file. This is the only command that uses the network."""
    from vocal_note_taker.l3_interface_adapters.gateways.hf_model_downloader import (  # noqa: PLC0415 -- deferred: huggingface_hub only loaded on demand
        download_model,
    )
    from vocal_note_taker.l3_interface_adapters.gateways.paths import MODELS_DIR  # noqa: PLC0415 -- deferred

    filename = model_name or config.transcription.model

    def _on_progress(percent: int) -> None:
        click.echo(f'\r  Downloading {filename}: {percent}%', nl=False, err=True)

    try:
        path = download_model(filename, MODELS_DIR, on_progress=_on_progress)
    except AppError as e:
        click.echo(f'\nError: {e}', err=True)
        sys.exit(1)
    click.echo(f'\nModel ready: {path}')
