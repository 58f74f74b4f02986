from pathlib import Path
from typing import List, Optional

from mediashrink.core.config import CompressionConfig
from mediashrink.core.errors import CodecError
from mediashrink.core.ffmpeg_executor import FFmpegExecutor
from mediashrink.core.image_compressor import TARGET_FORMAT_SUFFIX, ImageCompressor
from mediashrink.core.models import VideoOutcome
from mediashrink.utils.logger import get_logger


DEFAULT_VIDEO_EXTENSION = "mp4"
POSTER_SUFFIX = "-poster" + TARGET_FORMAT_SUFFIX
POSTER_INTERMEDIATE_SUFFIX = ".jpg"


# ============================================================================
# Video Compressor
# ============================================================================


class VideoCompressor:
    """Handles video compression using FFmpeg."""

    def __init__(
        self,
        config: CompressionConfig,
        image_compressor: ImageCompressor,
        ffmpeg_executor: Optional[FFmpegExecutor] = None,
    ):
        """
        Initialize video compressor.

        Args:
            config: Compression configuration
            image_compressor: Used to re-encode extracted poster frames
            ffmpeg_executor: FFmpeg executor; resolved on first use when None
        """
        self.config = config
        self.image_compressor = image_compressor
        self._ffmpeg = ffmpeg_executor
        self.logger = get_logger()

    @property
    def ffmpeg(self) -> FFmpegExecutor:
        """The executor, located on first access so image-only jobs never need FFmpeg."""
        if self._ffmpeg is None:
            self._ffmpeg = FFmpegExecutor(self.config.ffmpeg_path)
        return self._ffmpeg

    def compress(self, in_path: Path, out_base_path: Path, generate_poster: bool) -> VideoOutcome:
        """
        Compress a video file, keeping its container format.

        Args:
            in_path: Path to input video file
            out_base_path: Destination path; the input's extension is applied to it
            generate_poster: Also extract a still frame next to the output

        Returns:
            VideoOutcome with the written size, path and optional poster path

        Raises:
            EncoderNotAvailableError: If FFmpeg cannot be located
            CodecError: If FFmpeg fails
        """
        ffmpeg = self.ffmpeg
        out_path = self.output_path(in_path, out_base_path)
        ffmpeg.run(self._build_ffmpeg_args(in_path, out_path))

        try:
            size = out_path.stat().st_size
        except OSError as error:
            raise CodecError("FFmpeg produced no output", out_path, cause=error) from error

        poster_path = None
        if generate_poster:
            poster_path = self._try_extract_poster(in_path, self.poster_path(out_path))

        return VideoOutcome(size=size, path=out_path, poster_path=poster_path)

    @staticmethod
    def output_path(in_path: Path, out_base_path: Path) -> Path:
        ext = in_path.suffix or f".{DEFAULT_VIDEO_EXTENSION}"
        return out_base_path.with_suffix(ext)

    @staticmethod
    def poster_path(video_path: Path) -> Path:
        return video_path.with_name(video_path.stem + POSTER_SUFFIX)

    def _build_ffmpeg_args(self, in_path: Path, out_path: Path) -> List[str]:
        """
        Build FFmpeg arguments for video compression.

        The argument set targets broad player compatibility rather than the
        smallest output and is not configurable.
        """
        args = ["-i", str(in_path)]

        # Keep every input stream (subtitles, attachments, cover art)
        args.extend(["-map", "0"])

        args.extend([
            "-c:v",
            "libx264",
            "-crf",
            "23",
            "-preset",
            "medium",
            "-pix_fmt",
            "yuv420p",
        ])

        args.extend([
            "-c:a",
            "aac",
            "-b:a",
            "128k",
        ])

        args.extend([
            "-c:s",
            "copy",
            "-disposition:v:0",
            "default",
            "-movflags",
            "+faststart",
            "-max_muxing_queue_size",
            "1024",
        ])

        args.extend([str(out_path), "-y"])
        return args

    def _try_extract_poster(self, in_path: Path, poster_path: Path) -> Optional[Path]:
        try:
            self.extract_poster(in_path, poster_path)
        except CodecError as error:
            self.logger.warning(f"  Poster extraction failed for {in_path.name}: {error}")
            return None
        return poster_path

    def extract_poster(self, in_path: Path, poster_path: Path) -> None:
        """
        Extract one frame from a video and store it as a WebP poster.

        FFmpeg writes a JPEG intermediate which is then re-encoded with Pillow.
        The intermediate is removed on every exit path.

        Raises:
            CodecError: If frame extraction or re-encoding fails
        """
        intermediate = poster_path.with_suffix(POSTER_INTERMEDIATE_SUFFIX)
        try:
            self.ffmpeg.run(["-i", str(in_path), "-vframes", "1", "-q:v", "2", str(intermediate), "-y"])
            if not intermediate.exists():
                raise CodecError("FFmpeg did not write a poster frame", intermediate)
            try:
                self.image_compressor.compress(intermediate, poster_path, convert_to_target_format=True)
            except CodecError:
                self._remove_leftover(poster_path)
                raise
        finally:
            self._remove_leftover(intermediate)

    def _remove_leftover(self, path: Path) -> None:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as error:
            self.logger.debug(f"Could not remove {path}: {error}")
