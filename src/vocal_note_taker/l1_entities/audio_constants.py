"""Audio format constants shared across layers."""

SAMPLE_RATE = 16000
CHANNELS = 1
SAMPLE_WIDTH = 2  # bytes, int16 PCM

# Keep 1 of every N captured samples for the waveform preview.
WAVEFORM_DECIMATION = 100

RECORDING_FILENAME = 'recording.wav'
RECORDING_EXTENSION = '.wav'
