"""
Logging for mediashrink.

A singleton wrapper around the ``mediashrink`` stdlib logger with a console
handler for progress messages and an optional file handler that records the
source location of every message. Degraded outcomes (a file copied instead of
compressed) are logged at the custom NOTICE level.
"""

import logging
import sys
import threading
from datetime import datetime
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from pathlib import Path
from typing import Optional


# ============================================================================
# Custom Levels
# ============================================================================

# Between INFO and WARNING: normal but significant condition
NOTICE = 25

logging.addLevelName(NOTICE, "NOTICE")


# ============================================================================
# Formatters
# ============================================================================


class DetailedFormatter(logging.Formatter):
    """Formatter that adds a module:function:line location field."""

    def format(self, record: logging.LogRecord) -> str:
        record.location = f"{record.module}:{record.funcName}:{record.lineno}"
        return super().format(record)


# ============================================================================
# Singleton Logger
# ============================================================================


class MediaShrinkLogger:
    """
    Thread-safe singleton logger.

    Features:
    - Console output (INFO+ by default, message only)
    - Optional file output with location tracking
    - Optional size or time based rotation
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if getattr(self, "_initialized", False):
            return

        self._initialized = True
        self._logger = logging.getLogger("mediashrink")
        self._logger.setLevel(logging.INFO)
        self._logger.propagate = False

        self._console_handler: Optional[logging.Handler] = None
        self._file_handler: Optional[logging.Handler] = None
        self.log_file: Optional[Path] = None

    def configure(
        self,
        log_level: str = "INFO",
        log_dir: Optional[str] = None,
        enable_console: bool = True,
        rotation_type: Optional[str] = None,
        max_bytes: int = 10485760,  # 10 MB
        backup_count: int = 5,
        when: str = "midnight",
    ) -> None:
        """
        Configure handlers. Calling this again replaces the previous handlers.

        Args:
            log_level: Logging level name (DEBUG, INFO, NOTICE, WARNING, ERROR)
            log_dir: Directory for the log file; no file logging when None
            enable_console: Write messages to stdout
            rotation_type: None, "size" or "time"
            max_bytes: Max bytes for size-based rotation
            backup_count: Number of rotated files to keep
            when: Rotation interval for time-based rotation
        """
        self._cleanup_handlers()

        level = logging.getLevelName(log_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Invalid log level: {log_level}")
        self._logger.setLevel(level)

        if enable_console:
            self._console_handler = logging.StreamHandler(sys.stdout)
            self._console_handler.setLevel(max(level, logging.INFO))
            self._console_handler.setFormatter(logging.Formatter(fmt="%(message)s"))
            self._logger.addHandler(self._console_handler)

        if log_dir is not None:
            log_path = Path(log_dir)
            log_path.mkdir(parents=True, exist_ok=True)
            self.log_file = log_path / f"mediashrink_{datetime.now().strftime('%Y%m%d')}.log"
            self._file_handler = self._build_file_handler(self.log_file, rotation_type, max_bytes, backup_count, when)
            self._file_handler.setLevel(level)
            self._file_handler.setFormatter(
                DetailedFormatter(
                    fmt="%(asctime)s [%(levelname)s] [%(location)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
                )
            )
            self._logger.addHandler(self._file_handler)

    @staticmethod
    def _build_file_handler(
        log_file: Path, rotation_type: Optional[str], max_bytes: int, backup_count: int, when: str
    ) -> logging.Handler:
        if rotation_type is None:
            return logging.FileHandler(log_file, encoding="utf-8", delay=True)
        if rotation_type == "size":
            return RotatingFileHandler(
                log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8", delay=True
            )
        if rotation_type == "time":
            return TimedRotatingFileHandler(log_file, when=when, backupCount=backup_count, encoding="utf-8", delay=True)
        raise ValueError(f"Invalid rotation_type: {rotation_type}. Must be 'size' or 'time'.")

    def get_logger(self) -> logging.Logger:
        return self._logger

    def _cleanup_handlers(self) -> None:
        for handler in list(self._logger.handlers):
            handler.close()
            self._logger.removeHandler(handler)
        self._console_handler = None
        self._file_handler = None
        self.log_file = None

    def error(self, msg: str, *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", 2)
        self._logger.error(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", 2)
        self._logger.warning(msg, *args, **kwargs)

    def notice(self, msg: str, *args, **kwargs) -> None:
        """Log a normal but significant condition, such as a fallback copy."""
        kwargs.setdefault("stacklevel", 2)
        self._logger.log(NOTICE, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", 2)
        self._logger.info(msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", 2)
        self._logger.debug(msg, *args, **kwargs)


def get_logger() -> MediaShrinkLogger:
    """Return the global MediaShrinkLogger instance."""
    return MediaShrinkLogger()
