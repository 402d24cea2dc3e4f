"""
Node Portal Logging Configuration

Centralized logging setup so the web server, the status probes and the
console check share one format.

Usage:
    from utils.logging_config import setup_logging, parse_level
    setup_logging(level=parse_level('DEBUG'), log_file='/var/log/nodeportal.log')
"""

import logging
import logging.handlers
import sys
import threading
from pathlib import Path
from typing import Optional

_initialized = False
_lock = threading.Lock()

DEFAULT_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
DEBUG_FORMAT = "%(asctime)s | %(name)s:%(lineno)d | %(levelname)s | %(message)s"

LEVEL_COLORS = {
    'DEBUG': '\033[36m',     # Cyan
    'INFO': '\033[32m',      # Green
    'WARNING': '\033[33m',   # Yellow
    'ERROR': '\033[31m',     # Red
    'CRITICAL': '\033[35m',  # Magenta
}
RESET = '\033[0m'

# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ('werkzeug', 'urllib3')


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name on a terminal."""

    def __init__(self, fmt=None, datefmt=None, use_colors=True, stream=None):
        super().__init__(fmt, datefmt)
        stream = stream or sys.stderr
        self.use_colors = use_colors and hasattr(stream, 'isatty') and stream.isatty()

    def format(self, record):
        if not self.use_colors or record.levelname not in LEVEL_COLORS:
            return super().format(record)
        original = record.levelname
        record.levelname = f"{LEVEL_COLORS[original]}{original}{RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def parse_level(name: Optional[str], default: int = logging.INFO) -> int:
    """Convert a level name like 'debug' to a logging constant."""
    if not name:
        return default
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else default


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
    use_colors: bool = True,
    max_bytes: int = 5 * 1024 * 1024,  # 5MB
    backup_count: int = 3,
    force: bool = False,
) -> None:
    """
    Configure the root logger.

    Args:
        level: Logging level (default INFO)
        log_file: Optional file path; rotated by size
        log_format: Format string (defaults depend on level)
        use_colors: Color level names on a terminal
        max_bytes: Max log file size before rotation
        backup_count: Number of rotated files to keep
        force: Reconfigure even if already initialized
    """
    global _initialized

    with _lock:
        if _initialized and not force:
            return

        if log_format is None:
            log_format = DEBUG_FORMAT if level <= logging.DEBUG else DEFAULT_FORMAT

        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(ColoredFormatter(log_format, use_colors=use_colors))
        root_logger.addHandler(console_handler)

        if log_file:
            log_path = Path(log_file)
            try:
                log_path.parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.handlers.RotatingFileHandler(
                    log_path,
                    maxBytes=max_bytes,
                    backupCount=backup_count,
                )
            except OSError as e:
                root_logger.warning(f"Cannot write log file {log_path}: {e}")
            else:
                file_handler.setLevel(level)
                file_handler.setFormatter(logging.Formatter(log_format))
                root_logger.addHandler(file_handler)

        for lib_name in NOISY_LOGGERS:
            logging.getLogger(lib_name).setLevel(max(level, logging.WARNING))

        _initialized = True
