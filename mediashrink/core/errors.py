from enum import Enum
from pathlib import Path
from typing import Optional


# ============================================================================
# Error Kinds
# ============================================================================


class ErrorKind(Enum):
    """Closed set of failure kinds raised by the engine."""

    IO_ERROR = "io_error"
    NOT_FOUND = "not_found"
    NOT_A_FILE = "not_a_file"
    UNSUPPORTED_TYPE = "unsupported_type"
    CODEC_ERROR = "codec_error"
    ENCODER_NOT_AVAILABLE = "encoder_not_available"


# ============================================================================
# Exceptions
# ============================================================================


class MediaError(Exception):
    """
    Base class for every engine failure.

    Attributes:
        kind: Error kind callers can branch on
        path: File or directory the failure relates to, if any
        cause: Underlying exception, if any
    """

    kind = ErrorKind.IO_ERROR

    def __init__(self, message: str, path: Optional[Path] = None, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.path = Path(path) if path is not None else None
        self.cause = cause

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.message}: {self.path}"
        return self.message


class ScanIOError(MediaError):
    """Filesystem access or metadata failure."""

    kind = ErrorKind.IO_ERROR


class NotFoundError(MediaError):
    kind = ErrorKind.NOT_FOUND


class NotAFileError(MediaError):
    kind = ErrorKind.NOT_A_FILE


class UnsupportedTypeError(MediaError):
    kind = ErrorKind.UNSUPPORTED_TYPE


class CodecError(MediaError):
    """Image decode/encode failure or a non-zero exit from the video encoder."""

    kind = ErrorKind.CODEC_ERROR

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        cause: Optional[BaseException] = None,
        returncode: Optional[int] = None,
    ):
        super().__init__(message, path, cause)
        self.returncode = returncode


class EncoderNotAvailableError(MediaError):
    """No usable ffmpeg executable could be located."""

    kind = ErrorKind.ENCODER_NOT_AVAILABLE
