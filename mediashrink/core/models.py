from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional


# ============================================================================
# Enumerations
# ============================================================================


class MediaType(Enum):
    """Semantic type of a file, derived from its extension."""

    IMAGE = "image"
    VIDEO = "video"
    OTHER = "other"


class OutcomeStatus(Enum):
    """How a single file in a batch ended up in the output tree."""

    COMPRESSED = "compressed"
    COPIED_FALLBACK = "copied_fallback"


# ============================================================================
# Scan Results
# ============================================================================


@dataclass(frozen=True)
class FileDescriptor:
    """One discovered media file."""

    path: Path
    relative_name: str
    size: int
    media_type: MediaType
    extension: str

    def to_dict(self) -> Dict:
        return {
            "path": str(self.path),
            "name": self.relative_name,
            "size": self.size,
            "fileType": self.media_type.value,
            "extension": self.extension,
        }


# ============================================================================
# Compressor Outcomes
# ============================================================================


@dataclass(frozen=True)
class ImageOutcome:
    size: int
    path: Path


@dataclass(frozen=True)
class VideoOutcome:
    size: int
    path: Path
    poster_path: Optional[Path] = None


@dataclass(frozen=True)
class FileOutcome:
    """Result of one file inside a batch: either compressed or copied verbatim."""

    descriptor: FileDescriptor
    status: OutcomeStatus
    resulting_size: int
    output_path: Path
    poster_path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def fell_back(self) -> bool:
        return self.status is OutcomeStatus.COPIED_FALLBACK


# ============================================================================
# Job Results
# ============================================================================


@dataclass(frozen=True)
class ProgressEvent:
    """Progress of a batch after one file has been handled."""

    file: str
    current: int
    total: int
    original_size: int
    resulting_size: int

    def to_dict(self) -> Dict:
        return {
            "file": self.file,
            "current": self.current,
            "total": self.total,
            "originalSize": self.original_size,
            "compressedSize": self.resulting_size,
        }


@dataclass(frozen=True)
class BatchResult:
    """Outcome of a folder job."""

    total_original: int
    total_compressed: int
    file_count: int
    output_path: Path
    outcomes: List[FileOutcome] = field(default_factory=list)

    @property
    def fallbacks(self) -> List[FileOutcome]:
        """Outcomes for files that were copied instead of compressed."""
        return [outcome for outcome in self.outcomes if outcome.fell_back]

    def to_dict(self) -> Dict:
        return {
            "totalOriginal": self.total_original,
            "totalCompressed": self.total_compressed,
            "fileCount": self.file_count,
            "outputPath": str(self.output_path),
            "fallbackFiles": [outcome.descriptor.relative_name for outcome in self.fallbacks],
        }


@dataclass(frozen=True)
class SingleResult:
    """Outcome of a one-file job."""

    original_size: int
    compressed_size: int
    output_path: Path
    poster_path: Optional[Path] = None

    def to_dict(self) -> Dict:
        return {
            "originalSize": self.original_size,
            "compressedSize": self.compressed_size,
            "outputPath": str(self.output_path),
            "posterPath": str(self.poster_path) if self.poster_path is not None else None,
        }


@dataclass(frozen=True)
class EncoderStatus:
    """Whether an ffmpeg executable is usable, and which one."""

    installed: bool
    version: Optional[str] = None
    path: Optional[str] = None

    def to_dict(self) -> Dict:
        return {"installed": self.installed, "version": self.version, "path": self.path}
