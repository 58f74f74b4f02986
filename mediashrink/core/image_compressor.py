from pathlib import Path

from PIL import Image, UnidentifiedImageError

from mediashrink.core.errors import CodecError
from mediashrink.core.models import ImageOutcome
from mediashrink.utils.logger import get_logger


# Container forced when target format conversion is requested
TARGET_FORMAT_SUFFIX = ".webp"


# ============================================================================
# Image Compressor
# ============================================================================


class ImageCompressor:
    """Re-encodes still images in-process with Pillow."""

    def __init__(self):
        self.logger = get_logger()

    def compress(self, in_path: Path, out_base_path: Path, convert_to_target_format: bool) -> ImageOutcome:
        """
        Decode an image and encode it again.

        Args:
            in_path: Path to input image file
            out_base_path: Destination path; its extension selects the encoder
                unless conversion is requested
            convert_to_target_format: Force the output to WebP

        Returns:
            ImageOutcome with the written size and path

        Raises:
            CodecError: If decoding, encoding or writing fails
        """
        out_path = self.output_path(out_base_path, convert_to_target_format)
        self.logger.debug(f"Compressing image: {in_path.name} -> {out_path.name}")

        try:
            with Image.open(in_path) as img:
                img.load()
                self._save(img, out_path)
        except UnidentifiedImageError as error:
            raise CodecError("Cannot identify image format", in_path, cause=error) from error
        except (OSError, ValueError, Image.DecompressionBombError) as error:
            raise CodecError(f"Cannot decode image ({error})", in_path, cause=error) from error

        try:
            size = out_path.stat().st_size
        except OSError as error:
            raise CodecError("Encoded image is missing", out_path, cause=error) from error

        return ImageOutcome(size=size, path=out_path)

    @staticmethod
    def _save(img: Image.Image, out_path: Path) -> None:
        # Unknown extensions raise ValueError, unwritable modes/paths raise OSError
        try:
            img.save(out_path)
        except (OSError, ValueError, KeyError) as error:
            raise CodecError(f"Cannot encode image ({error})", out_path, cause=error) from error

    @staticmethod
    def output_path(out_base_path: Path, convert_to_target_format: bool) -> Path:
        if convert_to_target_format:
            return out_base_path.with_suffix(TARGET_FORMAT_SUFFIX)
        return out_base_path
