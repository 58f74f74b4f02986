import shutil
import time
from pathlib import Path
from typing import Optional


# ============================================================================
# File Processor
# ============================================================================


class FileProcessor:
    """Handles output naming, directory creation and fallback copies."""

    @staticmethod
    def timestamp_suffix(now: Optional[float] = None) -> str:
        """
        Return the naming suffix used to avoid output collisions.

        The suffix is the current Unix time in seconds modulo 1,000,000. It
        repeats every ~11.6 days and is identical for jobs started within the
        same second, so it is not a unique ID.
        """
        seconds = int(time.time() if now is None else now)
        return str(seconds % 1_000_000)

    @staticmethod
    def suffixed_name(source_file: Path, suffix: str) -> str:
        """Return `<stem>-<suffix><ext>` for a source file."""
        return f"{source_file.stem}-{suffix}{source_file.suffix}"

    @staticmethod
    def output_root(input_root: Path, output_dir: Path, suffix: str) -> Path:
        """Return the per-job output root `<output_dir>/<input name>-<suffix>`."""
        name = input_root.name or input_root.resolve().name or "output"
        return output_dir / f"{name}-{suffix}"

    @staticmethod
    def determine_output_path(source_file: Path, relative_name: str, output_root: Path, suffix: str) -> Path:
        """
        Determine the destination base path for a file of a folder job.

        The relative directory of the file is mirrored under the output root.
        A relative name that is not actually relative (a file reached from
        outside the scan root) contributes only its file name.

        Args:
            source_file: Path to the source file
            relative_name: Path of the file relative to the scan root
            output_root: Job output root
            suffix: Naming suffix of the job

        Returns:
            Path to the output file (extension may still be changed by the compressor)
        """
        relative_path = Path(relative_name)
        if relative_path.is_absolute() or ".." in relative_path.parts:
            relative_parent = Path()
        else:
            relative_parent = relative_path.parent
        return output_root / relative_parent / FileProcessor.suffixed_name(source_file, suffix)

    @staticmethod
    def ensure_parent(path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def copy_original(source_file: Path, dest: Path) -> None:
        """Copy a source file byte for byte to the destination."""
        shutil.copyfile(source_file, dest)

    @staticmethod
    def remove_partial(path: Path) -> None:
        """Remove a partially written output if one exists."""
        if path.exists():
            path.unlink()
