from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from mediashrink.core.classifier import Classifier
from mediashrink.core.config import CompressionConfig, ParameterValidator
from mediashrink.core.errors import MediaError, ScanIOError
from mediashrink.core.ffmpeg_executor import FFmpegExecutor
from mediashrink.core.image_compressor import ImageCompressor
from mediashrink.core.models import (
    BatchResult,
    FileDescriptor,
    FileOutcome,
    MediaType,
    OutcomeStatus,
    ProgressEvent,
    SingleResult,
)
from mediashrink.core.scanner import Scanner
from mediashrink.core.video_compressor import VideoCompressor
from mediashrink.utils.file_processor import FileProcessor
from mediashrink.utils.format import compression_ratio, format_size
from mediashrink.utils.logger import get_logger


ProgressSink = Callable[[ProgressEvent], None]


class JobState(Enum):
    INITIALIZING = "initializing"
    SCANNING = "scanning"
    PROCESSING = "processing"
    FINALIZING = "finalizing"
    DONE = "done"
    FAILED = "failed"


# ============================================================================
# Media Compressor
# ============================================================================


class MediaCompressor:
    """
    Main orchestrator for media compression.

    Files are processed one at a time in scan order. In a folder job a file
    that fails to compress is copied verbatim instead and the job carries on;
    in a single-file job the failure is raised to the caller.
    """

    def __init__(
        self,
        config: CompressionConfig,
        ffmpeg_executor: Optional[FFmpegExecutor] = None,
        scanner: Optional[Scanner] = None,
    ):
        """
        Initialize media compressor with configuration.

        Args:
            config: Compression configuration
            ffmpeg_executor: FFmpeg executor; located lazily when None
            scanner: Scanner to use; built from config.media_types when None
        """
        ParameterValidator.validate(config)
        self.config = config
        self.scanner = scanner or Scanner(Classifier(config.media_types))
        self.image_compressor = ImageCompressor()
        self.video_compressor = VideoCompressor(config, self.image_compressor, ffmpeg_executor)
        self.file_processor = FileProcessor()
        self.logger = get_logger()
        self.state: Optional[JobState] = None

    # ------------------------------------------------------------------------
    # Folder jobs
    # ------------------------------------------------------------------------

    def compress_tree(self, input_root: Union[str, Path], progress: Optional[ProgressSink] = None) -> BatchResult:
        """
        Compress every image and video under a directory.

        Args:
            input_root: Directory to compress
            progress: Called once per file, in scan order, with a ProgressEvent

        Returns:
            BatchResult with totals over all scanned files

        Raises:
            ScanIOError: If the output root cannot be created or the input
                cannot be scanned. Per-file failures are never raised.
        """
        input_root = Path(input_root)
        suffix = self.file_processor.timestamp_suffix()

        self.state = JobState.INITIALIZING
        try:
            output_root = self._create_output_root(input_root, suffix)
            self.state = JobState.SCANNING
            files = self.scanner.scan_tree(input_root)
        except MediaError:
            self.state = JobState.FAILED
            raise

        self.state = JobState.PROCESSING
        total = len(files)
        self.logger.info(f"Found {total} media file(s) to process...")

        total_original = 0
        total_compressed = 0
        outcomes: List[FileOutcome] = []
        for idx, descriptor in enumerate(files, 1):
            self.logger.info(f"[{idx}/{total}] Processing: {descriptor.relative_name} ({format_size(descriptor.size)})")
            outcome = self._process_batch_file(descriptor, output_root, suffix)
            outcomes.append(outcome)

            total_original += descriptor.size
            total_compressed += outcome.resulting_size

            self._emit(
                progress,
                ProgressEvent(
                    file=descriptor.relative_name,
                    current=idx,
                    total=total,
                    original_size=descriptor.size,
                    resulting_size=outcome.resulting_size,
                ),
            )

        self.state = JobState.FINALIZING
        result = BatchResult(
            total_original=total_original,
            total_compressed=total_compressed,
            file_count=total,
            output_path=output_root,
            outcomes=outcomes,
        )
        self.state = JobState.DONE
        return result

    def _create_output_root(self, input_root: Path, suffix: str) -> Path:
        if not input_root.is_dir():
            raise ScanIOError("Input is not a directory", input_root)

        output_root = self.file_processor.output_root(input_root, self.config.output_dir, suffix)
        try:
            output_root.mkdir(parents=True, exist_ok=False)
        except FileExistsError as error:
            raise ScanIOError("Output directory already exists", output_root, cause=error) from error
        except OSError as error:
            raise ScanIOError("Cannot create output directory", output_root, cause=error) from error

        self.logger.debug(f"Created output root: {output_root}")
        return output_root

    def _process_batch_file(self, descriptor: FileDescriptor, output_root: Path, suffix: str) -> FileOutcome:
        dest = self.file_processor.determine_output_path(
            descriptor.path, descriptor.relative_name, output_root, suffix
        )

        try:
            self.file_processor.ensure_parent(dest)
            size, out_path, poster_path = self._compress_by_type(descriptor, dest)
        except Exception as error:
            return self._fallback_copy(descriptor, dest, error)

        ratio = compression_ratio(descriptor.size, size)
        self.logger.info(
            f"  ✓ Compressed: {format_size(descriptor.size)} → {format_size(size)} ({ratio:.1f}% reduction)"
        )
        return FileOutcome(
            descriptor=descriptor,
            status=OutcomeStatus.COMPRESSED,
            resulting_size=size,
            output_path=out_path,
            poster_path=poster_path,
        )

    def _fallback_copy(self, descriptor: FileDescriptor, dest: Path, error: Exception) -> FileOutcome:
        self.logger.notice(f"  ⚠️  Compression failed for {descriptor.relative_name} ({error}), copying original")

        intended = self._intended_output_path(descriptor, dest)
        if intended != dest:
            try:
                self.file_processor.remove_partial(intended)
            except OSError as cleanup_error:
                self.logger.warning(f"  Could not remove partial output {intended}: {cleanup_error}")

        try:
            self.file_processor.copy_original(descriptor.path, dest)
        except OSError as copy_error:
            self.logger.error(f"  ✗ Could not copy {descriptor.path} to {dest}: {copy_error}")

        return FileOutcome(
            descriptor=descriptor,
            status=OutcomeStatus.COPIED_FALLBACK,
            resulting_size=descriptor.size,
            output_path=dest,
            error=str(error),
        )

    def _intended_output_path(self, descriptor: FileDescriptor, dest: Path) -> Path:
        if descriptor.media_type is MediaType.IMAGE:
            return self.image_compressor.output_path(dest, self.config.convert_images)
        return self.video_compressor.output_path(descriptor.path, dest)

    def _emit(self, progress: Optional[ProgressSink], event: ProgressEvent) -> None:
        if progress is None:
            return
        try:
            progress(event)
        except Exception as error:
            self.logger.warning(f"Progress callback failed at {event.current}/{event.total}: {error}")

    # ------------------------------------------------------------------------
    # Single-file jobs
    # ------------------------------------------------------------------------

    def compress_file(self, input_path: Union[str, Path]) -> SingleResult:
        """
        Compress one file into the configured output directory.

        The output is named `<stem>-<suffix>` with the input extension, or
        `.webp` for converted images.

        Raises:
            NotFoundError, NotAFileError, UnsupportedTypeError: If the input is unusable
            ScanIOError: If the output directory cannot be created
            CodecError, EncoderNotAvailableError: If compression fails
        """
        self.state = JobState.INITIALIZING
        try:
            descriptor = self.scanner.scan_one(input_path)
            suffix = self.file_processor.timestamp_suffix()
            try:
                self.config.output_dir.mkdir(parents=True, exist_ok=True)
            except OSError as error:
                raise ScanIOError("Cannot create output directory", self.config.output_dir, cause=error) from error

            self.state = JobState.PROCESSING
            dest = self.config.output_dir / self.file_processor.suffixed_name(descriptor.path, suffix)
            size, out_path, poster_path = self._compress_by_type(descriptor, dest)
        except Exception:
            self.state = JobState.FAILED
            raise

        self.state = JobState.FINALIZING
        result = SingleResult(
            original_size=descriptor.size,
            compressed_size=size,
            output_path=out_path,
            poster_path=poster_path,
        )
        self.state = JobState.DONE
        return result

    # ------------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------------

    def _compress_by_type(self, descriptor: FileDescriptor, dest: Path) -> Tuple[int, Path, Optional[Path]]:
        if descriptor.media_type is MediaType.IMAGE:
            outcome = self.image_compressor.compress(descriptor.path, dest, self.config.convert_images)
            return outcome.size, outcome.path, None
        if descriptor.media_type is MediaType.VIDEO:
            outcome = self.video_compressor.compress(descriptor.path, dest, self.config.generate_poster)
            return outcome.size, outcome.path, outcome.poster_path
        raise ValueError(f"Unsupported file type: {descriptor.extension}")
