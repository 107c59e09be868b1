"""Port: audio input device and realtime stream provider."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

import numpy as np

SampleCallback = Callable[[np.ndarray], None]


@dataclass(frozen=True)
class InputDevice:
    """Default input device as reported by the host audio API."""

    index: int
    name: str
    max_input_channels: int
    default_sample_rate: int


@dataclass(frozen=True)
class StreamConfigRange:
    """One supported capture configuration: a sample-rate range at a channel count."""

    min_sample_rate: int
    max_sample_rate: int
    channels: int


class InputStream(Protocol):
    """Blocking, callback-driven capture stream. Must stay on the thread that opened it."""

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def close(self) -> None: ...


class InputDeviceProvider(Protocol):
    """Abstract device/stream provider. Zero framework types leak through."""

    def default_input_device(self) -> InputDevice:
        """Return the default input device. Raises MicrophoneNotFoundError if none."""
        ...

    def supported_configs(self, device: InputDevice) -> list[StreamConfigRange]:
        """Enumerate supported capture configurations. Raises MicrophoneAccessDeniedError."""
        ...

    def open_stream(
        self,
        device: InputDevice,
        sample_rate: int,
        channels: int,
        callback: SampleCallback,
    ) -> InputStream:
        """Open (but do not start) a stream delivering 1-D float32 mono blocks to *callback*."""
        ...
