from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Iterable, Optional


# ============================================================================
# Media Type Table
# ============================================================================


@dataclass(frozen=True)
class MediaTypes:
    """Recognized image and video extensions (lowercase, no leading dot)."""

    images: FrozenSet[str]
    videos: FrozenSet[str]

    def __post_init__(self):
        # Accept any iterable but always store frozensets
        object.__setattr__(self, "images", frozenset(self.images))
        object.__setattr__(self, "videos", frozenset(self.videos))
        ParameterValidator.validate_extensions(self.images, "images")
        ParameterValidator.validate_extensions(self.videos, "videos")

        overlap = self.images & self.videos
        if overlap:
            raise ValueError(f"extensions cannot be both image and video: {sorted(overlap)}")

    def extended(self, images: Iterable[str] = (), videos: Iterable[str] = ()) -> "MediaTypes":
        """Return a new table with extra extensions added."""
        return MediaTypes(images=self.images | frozenset(images), videos=self.videos | frozenset(videos))


# ============================================================================
# Configuration Classes
# ============================================================================


@dataclass
class CompressionConfig:
    """Configuration for a compression job."""

    output_dir: Path
    convert_images: bool = True
    generate_poster: bool = False
    ffmpeg_path: Optional[str] = None
    media_types: MediaTypes = field(default_factory=lambda: DEFAULT_MEDIA_TYPES)

    def __post_init__(self):
        self.output_dir = Path(self.output_dir)


# ============================================================================
# Parameter Validator
# ============================================================================


class ParameterValidator:
    """Validates compression parameters."""

    @staticmethod
    def validate(config: CompressionConfig) -> None:
        """Validate all parameters in the configuration."""
        ParameterValidator.validate_output_dir(config.output_dir)
        ParameterValidator.validate_flags(config.convert_images, config.generate_poster)
        ParameterValidator.validate_ffmpeg_path(config.ffmpeg_path)

    @staticmethod
    def validate_output_dir(output_dir: Path) -> None:
        """The output directory may be missing, but must not be a regular file."""
        if output_dir.exists() and not output_dir.is_dir():
            raise ValueError(f"output_dir must be a directory, got file: {output_dir}")

    @staticmethod
    def validate_flags(convert_images: bool, generate_poster: bool) -> None:
        if not isinstance(convert_images, bool):
            raise ValueError(f"convert_images must be a bool, got {convert_images!r}")
        if not isinstance(generate_poster, bool):
            raise ValueError(f"generate_poster must be a bool, got {generate_poster!r}")

    @staticmethod
    def validate_ffmpeg_path(ffmpeg_path: Optional[str]) -> None:
        if ffmpeg_path is not None and not str(ffmpeg_path).strip():
            raise ValueError("ffmpeg_path cannot be empty")

    @staticmethod
    def validate_extensions(extensions: FrozenSet[str], label: str) -> None:
        """Validate that extensions are lowercase and carry no leading dot."""
        for ext in extensions:
            if not isinstance(ext, str) or not ext:
                raise ValueError(f"{label} extensions must be non-empty strings, got {ext!r}")
            if ext.startswith("."):
                raise ValueError(f"{label} extensions must not start with a dot, got {ext!r}")
            if ext != ext.lower():
                raise ValueError(f"{label} extensions must be lowercase, got {ext!r}")


# ============================================================================
# Defaults
# ============================================================================


DEFAULT_MEDIA_TYPES = MediaTypes(
    images=frozenset({"jpg", "jpeg", "png", "webp", "gif", "bmp"}),
    videos=frozenset({"mp4", "mov", "avi", "mkv", "webm"}),
)
