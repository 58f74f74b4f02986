import os
import stat
from pathlib import Path
from typing import List, Optional, Union

from mediashrink.core.classifier import Classifier, extension_of
from mediashrink.core.errors import NotAFileError, NotFoundError, ScanIOError, UnsupportedTypeError
from mediashrink.core.models import FileDescriptor, MediaType
from mediashrink.utils.logger import get_logger


# ============================================================================
# Scanner
# ============================================================================


class Scanner:
    """
    Discovers image and video files.

    Symbolic links are never followed: links to files and links to directories
    are both skipped during a tree scan. Directory entries are visited in sorted
    name order so that repeated scans of an unchanged tree return the same
    sequence.
    """

    def __init__(self, classifier: Optional[Classifier] = None):
        self.classifier = classifier or Classifier()
        self.logger = get_logger()

    def scan_tree(self, root: Union[str, Path]) -> List[FileDescriptor]:
        """
        Recursively collect every image and video under a directory.

        Args:
            root: Directory to scan

        Returns:
            File descriptors in traversal order

        Raises:
            ScanIOError: If the directory or any file metadata cannot be read.
                There is no partial result.
        """
        root_path = Path(root)
        if not root_path.is_dir():
            raise ScanIOError("Cannot traverse directory", root_path)

        def _raise_walk_error(error: OSError) -> None:
            raise ScanIOError("Cannot traverse directory", Path(error.filename or root_path), cause=error) from error

        files: List[FileDescriptor] = []
        for dirpath, dirnames, filenames in os.walk(root_path, onerror=_raise_walk_error, followlinks=False):
            dirnames.sort()
            for filename in sorted(filenames):
                file_path = Path(dirpath) / filename
                media_type = self.classifier.classify_path(file_path)
                if media_type is MediaType.OTHER:
                    continue

                try:
                    st = file_path.lstat()
                except OSError as error:
                    raise ScanIOError("Cannot read file metadata", file_path, cause=error) from error

                if not stat.S_ISREG(st.st_mode):
                    self.logger.debug(f"Skipping non-regular file: {file_path}")
                    continue

                files.append(
                    FileDescriptor(
                        path=file_path.absolute(),
                        relative_name=self._relative_name(file_path, root_path),
                        size=st.st_size,
                        media_type=media_type,
                        extension=extension_of(file_path),
                    )
                )

        self.logger.debug(f"Scanned {root_path}: {len(files)} media file(s)")
        return files

    def scan_one(self, path: Union[str, Path]) -> FileDescriptor:
        """
        Describe a single media file.

        Raises:
            NotFoundError: If the path does not exist
            NotAFileError: If the path is not a regular file
            UnsupportedTypeError: If the extension is neither image nor video
            ScanIOError: If metadata cannot be read
        """
        file_path = Path(path)
        if not file_path.exists():
            raise NotFoundError("File does not exist", file_path)
        if not file_path.is_file():
            raise NotAFileError("Not a regular file", file_path)

        media_type = self.classifier.classify_path(file_path)
        if media_type is MediaType.OTHER:
            raise UnsupportedTypeError("Unsupported file type", file_path)

        try:
            size = file_path.stat().st_size
        except OSError as error:
            raise ScanIOError("Cannot read file metadata", file_path, cause=error) from error

        return FileDescriptor(
            path=file_path.absolute(),
            relative_name=file_path.name,
            size=size,
            media_type=media_type,
            extension=extension_of(file_path),
        )

    @staticmethod
    def _relative_name(file_path: Path, root_path: Path) -> str:
        try:
            return str(file_path.relative_to(root_path))
        except ValueError:
            return str(file_path.absolute())


_default_scanner = Scanner()


def scan_tree(root: Union[str, Path]) -> List[FileDescriptor]:
    return _default_scanner.scan_tree(root)


def scan_one(path: Union[str, Path]) -> FileDescriptor:
    return _default_scanner.scan_one(path)
