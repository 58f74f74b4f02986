from pathlib import Path
from typing import Union

from mediashrink.core.config import DEFAULT_MEDIA_TYPES, MediaTypes
from mediashrink.core.models import MediaType


# ============================================================================
# Classifier
# ============================================================================


def extension_of(path: Union[str, Path]) -> str:
    """Return the lowercase extension of a path without the dot, or "" if there is none."""
    return Path(path).suffix.lower().lstrip(".")


class Classifier:
    """Maps file extensions to media types using a fixed extension table."""

    def __init__(self, media_types: MediaTypes = DEFAULT_MEDIA_TYPES):
        self.media_types = media_types

    def classify(self, extension: str) -> MediaType:
        ext = (extension or "").lower().lstrip(".")
        if ext in self.media_types.images:
            return MediaType.IMAGE
        if ext in self.media_types.videos:
            return MediaType.VIDEO
        return MediaType.OTHER

    def classify_path(self, path: Union[str, Path]) -> MediaType:
        return self.classify(extension_of(path))


_default_classifier = Classifier()


def classify(extension: str) -> MediaType:
    """Classify an extension against the default image/video table."""
    return _default_classifier.classify(extension)
