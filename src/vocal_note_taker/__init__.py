"""vocal-note-taker: privacy-first local voice capture and transcription."""

__version__ = '0.1.0'
