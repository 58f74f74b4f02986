"""
mediashrink - Batch image and video compression engine.
"""

__version__ = "0.1.0"

# Package-level exports for convenience
from mediashrink.cli import main
from mediashrink.core.classifier import Classifier, classify
from mediashrink.core.config import DEFAULT_MEDIA_TYPES, CompressionConfig, MediaTypes, ParameterValidator
from mediashrink.core.errors import (
    CodecError,
    EncoderNotAvailableError,
    ErrorKind,
    MediaError,
    NotAFileError,
    NotFoundError,
    ScanIOError,
    UnsupportedTypeError,
)
from mediashrink.core.ffmpeg_executor import FFmpegExecutor
from mediashrink.core.image_compressor import ImageCompressor
from mediashrink.core.media_compressor import JobState, MediaCompressor
from mediashrink.core.models import (
    BatchResult,
    FileDescriptor,
    FileOutcome,
    MediaType,
    OutcomeStatus,
    ProgressEvent,
    SingleResult,
)
from mediashrink.core.scanner import Scanner, scan_one, scan_tree
from mediashrink.core.video_compressor import VideoCompressor
from mediashrink.utils.file_processor import FileProcessor
from mediashrink.utils.format import compression_ratio, format_size


__all__ = [
    "CompressionConfig",
    "MediaTypes",
    "DEFAULT_MEDIA_TYPES",
    "ParameterValidator",
    "Classifier",
    "classify",
    "Scanner",
    "scan_tree",
    "scan_one",
    "MediaCompressor",
    "JobState",
    "VideoCompressor",
    "ImageCompressor",
    "FFmpegExecutor",
    "FileProcessor",
    "MediaType",
    "OutcomeStatus",
    "FileDescriptor",
    "FileOutcome",
    "ProgressEvent",
    "BatchResult",
    "SingleResult",
    "ErrorKind",
    "MediaError",
    "ScanIOError",
    "NotFoundError",
    "NotAFileError",
    "UnsupportedTypeError",
    "CodecError",
    "EncoderNotAvailableError",
    "format_size",
    "compression_ratio",
    "main",
]
