"""Domain error types.

Every error carries a machine-readable ``kind`` (the name the UI layer switches
on) and a human-readable message that tells the user what to do next.
"""

from __future__ import annotations

import enum
from typing import ClassVar


class AppError(Exception):
    """Base class for all errors surfaced to the job initiator."""

    kind: ClassVar[str] = 'IoError'
    default_message: ClassVar[str] = 'Unexpected error.'

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {'type': self.kind, 'message': self.message}

    @classmethod
    def from_exception(cls, exc: BaseException) -> AppError:
        """Normalize any exception into an AppError (unknown ones become IoError)."""
        if isinstance(exc, AppError):
            return exc
        return IoFailureError(str(exc) or type(exc).__name__)


class MicrophoneNotFoundError(AppError):
    kind = 'MicrophoneNotFound'
    default_message = 'No microphone detected. Connect an input device and check your system sound settings.'


class MicrophoneAccessDeniedError(AppError):
    kind = 'MicrophoneAccessDenied'
    default_message = (
        'Microphone access denied. Grant microphone permission to this application '
        'or select an input device that supports recording.'
    )


class RecordingInterruptedError(AppError):
    kind = 'RecordingInterrupted'
    default_message = 'Recording interrupted.'


class IoFailureError(AppError):
    kind = 'IoError'
    default_message = 'File operation failed.'


class AudioFormatIssue(enum.Enum):
    CHANNEL = 'channel'
    RATE = 'rate'
    EMPTY = 'empty'
    CORRUPT = 'corrupt'


class InvalidAudioFormatError(AppError):
    kind = 'InvalidAudioFormat'

    def __init__(self, issue: AudioFormatIssue, message: str) -> None:
        self.issue = issue
        super().__init__(message)

    def to_dict(self) -> dict[str, str]:
        data = super().to_dict()
        data['issue'] = self.issue.value
        return data


class ModelNotFoundError(AppError):
    kind = 'ModelNotFound'


class ModelLoadHint(enum.Enum):
    MEMORY = 'memory'
    CORRUPT = 'corrupt'


class ModelLoadFailedError(AppError):
    kind = 'ModelLoadFailed'

    def __init__(self, hint: ModelLoadHint, message: str) -> None:
        self.hint = hint
        super().__init__(message)


class TranscriptionFailedError(AppError):
    kind = 'TranscriptionFailed'


class ConfigurationError(AppError):
    kind = 'ConfigurationError'


class PathPolicyViolationError(AppError):
    kind = 'PathPolicyViolation'
