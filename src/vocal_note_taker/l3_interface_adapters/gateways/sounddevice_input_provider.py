"""Gateway: sounddevice (PortAudio) input provider — implements InputDeviceProvider port."""

from __future__ import annotations

import logging

import numpy as np
import sounddevice as sd

from vocal_note_taker.l1_entities.errors import MicrophoneAccessDeniedError, MicrophoneNotFoundError
from vocal_note_taker.l2_use_cases.ports.input_device import InputDevice, SampleCallback, StreamConfigRange

log = logging.getLogger('vnt.audio')

# PortAudio cannot list rate ranges, so candidate rates are probed one by one.
PROBE_RATES = (8000, 16000, 22050, 32000, 44100, 48000)


class SounddeviceInputProvider:
    """Wraps sounddevice device queries and InputStream construction."""

    def default_input_device(self) -> InputDevice:
        try:
            info = sd.query_devices(kind='input')
        except (sd.PortAudioError, ValueError) as exc:
            raise MicrophoneNotFoundError() from exc

        if int(info['max_input_channels']) < 1:
            raise MicrophoneNotFoundError()

        return InputDevice(
            index=int(info['index']),
            name=str(info['name']),
            max_input_channels=int(info['max_input_channels']),
            default_sample_rate=int(info['default_samplerate']),
        )

    def supported_configs(self, device: InputDevice) -> list[StreamConfigRange]:
        configs: list[StreamConfigRange] = []
        try:
            for rate in PROBE_RATES:
                try:
                    sd.check_input_settings(device=device.index, channels=1, samplerate=rate, dtype='float32')
                except sd.PortAudioError:
                    continue
                configs.append(StreamConfigRange(rate, rate, device.max_input_channels))
        except ValueError as exc:
            raise MicrophoneAccessDeniedError() from exc
        return configs

    def open_stream(
        self,
        device: InputDevice,
        sample_rate: int,
        channels: int,
        callback: SampleCallback,
    ) -> sd.InputStream:
        def _callback(indata: np.ndarray, frames, time_info, status) -> None:
            if status:
                log.warning('Input stream status: %s', status)
            callback(indata[:, 0])

        try:
            return sd.InputStream(
                device=device.index,
                samplerate=sample_rate,
                channels=channels,
                dtype='float32',
                callback=_callback,
            )
        except sd.PortAudioError as exc:
            raise MicrophoneAccessDeniedError() from exc
