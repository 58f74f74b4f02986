import os
import shutil
import subprocess  # nosec B404
import sys
from pathlib import Path
from typing import List, Optional

from mediashrink.core.errors import CodecError, EncoderNotAvailableError
from mediashrink.core.models import EncoderStatus
from mediashrink.utils.logger import get_logger


APP_DIR_NAME = "mediashrink"

# Checked in order when ffmpeg is not on PATH
COMMON_FFMPEG_LOCATIONS = [
    "/opt/homebrew/bin/ffmpeg",
    "/usr/local/bin/ffmpeg",
    "/usr/bin/ffmpeg",
    r"C:\ffmpeg\ffmpeg.exe",
    r"C:\Program Files\ffmpeg\bin\ffmpeg.exe",
    r"C:\Program Files (x86)\ffmpeg\bin\ffmpeg.exe",
]


def app_data_dir() -> Path:
    """Per-user data directory for mediashrink (XDG on Linux, Application Support on macOS, APPDATA on Windows)."""
    if sys.platform == "win32":
        base = Path(os.environ.get("APPDATA") or Path.home() / "AppData" / "Roaming")
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.environ.get("XDG_DATA_HOME") or Path.home() / ".local" / "share")
    return base / APP_DIR_NAME


def bundled_ffmpeg_path() -> Path:
    """Location of an ffmpeg binary placed in the app data directory."""
    name = "ffmpeg.exe" if sys.platform == "win32" else "ffmpeg"
    return app_data_dir() / "bin" / name


# ============================================================================
# FFmpeg Executor
# ============================================================================


class FFmpegExecutor:
    """Runs the external ffmpeg process."""

    def __init__(self, ffmpeg_path: Optional[str] = None):
        """
        Initialize FFmpeg executor.

        Args:
            ffmpeg_path: Path to FFmpeg executable. If None, will attempt to find it.

        Raises:
            EncoderNotAvailableError: If no executable can be located
        """
        self.logger = get_logger()
        self.ffmpeg_path = ffmpeg_path or self.find_ffmpeg()
        if self.ffmpeg_path is None:
            raise EncoderNotAvailableError(
                "FFmpeg not found. Install FFmpeg and add it to PATH, or pass its location with --ffmpeg-path"
            )

    @staticmethod
    def find_ffmpeg() -> Optional[str]:
        """Find FFmpeg in the app data directory, then PATH, then common locations."""
        bundled = bundled_ffmpeg_path()
        if bundled.is_file():
            return str(bundled)

        ffmpeg_path = shutil.which("ffmpeg")
        if ffmpeg_path:
            return ffmpeg_path

        for path in COMMON_FFMPEG_LOCATIONS:
            if Path(path).exists():
                return path

        return None

    @classmethod
    def status(cls, ffmpeg_path: Optional[str] = None) -> EncoderStatus:
        """Report whether ffmpeg is usable without raising."""
        try:
            executor = cls(ffmpeg_path)
        except EncoderNotAvailableError:
            return EncoderStatus(installed=False)
        return EncoderStatus(installed=True, version=executor.version(), path=str(executor.ffmpeg_path))

    def version(self) -> Optional[str]:
        """Return the first line of `ffmpeg -version`, or None if it cannot be read."""
        try:
            result = subprocess.run(  # nosec B603
                [self.ffmpeg_path, "-version"],
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as error:
            self.logger.debug(f"Could not run {self.ffmpeg_path} -version: {error}")
            return None

        if result.returncode != 0 or not result.stdout:
            return None
        return result.stdout.splitlines()[0]

    def run(self, args: List[str]) -> None:
        """
        Run ffmpeg to completion with output discarded.

        Args:
            args: List of FFmpeg arguments

        Raises:
            CodecError: If the process cannot be started or exits non-zero
        """
        cmd = [self.ffmpeg_path] + [str(arg) for arg in args]
        self.logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = subprocess.run(  # nosec B603
                cmd,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError as error:
            raise CodecError("Could not start FFmpeg", Path(self.ffmpeg_path), cause=error) from error

        if result.returncode != 0:
            raise CodecError(f"FFmpeg exited with status {result.returncode}", returncode=result.returncode)
