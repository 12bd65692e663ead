"""
==============================================
Centralized logging configuration for sqlfrag.
==============================================

The fragment builders only log at DEBUG level through module loggers and
never configure handlers themselves. Applications (and the CLI in main.py)
call setup_logging() once to decide where records go.

Console output goes to stderr by default so that the CLI can write
formatted SQL to stdout without interleaving log lines.

Example:
    >>> from core.logger import get_logger, setup_logging
    >>>
    >>> # Setup logging at application start
    >>> setup_logging(log_level='DEBUG', log_file='sqlfrag.log')
    >>>
    >>> # Get module logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Built fragment: %s", "SELECT *")
"""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Formatter adding ANSI colors and emoji indicators for console output.

    Attributes:
        COLORS: Dict mapping log levels to ANSI color codes
        EMOJI: Dict mapping log levels to emoji indicators
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    EMOJI = {
        'DEBUG': '🔍',
        'INFO': 'ℹ️ ',
        'WARNING': '⚠️ ',
        'ERROR': '❌',
        'CRITICAL': '🔥'
    }

    def format(self, record):
        """Format a record with colors and an emoji prefix.

        The record is restored afterwards so other handlers sharing it see
        the plain level name.
        """
        levelname = record.levelname
        record.emoji = self.EMOJI.get(levelname, '')
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Get a logger instance for the specified module.

    Args:
        name: Logger name (typically __name__ of calling module)
        level: Optional logging level override (DEBUG/INFO/WARNING/ERROR/CRITICAL)

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)

    if level:
        logger.setLevel(getattr(logging, level.upper()))

    return logger


def setup_logging(
    log_level: str = 'INFO',
    log_file: Optional[str] = None,
    log_dir: Optional[str] = None,
    console_output: bool = True,
    use_colors: bool = True,
    stream: Optional[TextIO] = None
) -> None:
    """Configure the root logger with console and/or file handlers.

    Should be called once at application startup. Existing root handlers
    are replaced.

    Args:
        log_level: Logging level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        log_file: Optional log file name (e.g., 'sqlfrag.log')
        log_dir: Optional log directory path (defaults to 'logs/')
        console_output: If True, log to the console stream
        use_colors: If True, use colored output for console
        stream: Console stream (defaults to sys.stderr)

    Example:
        >>> setup_logging(log_level='WARNING', use_colors=False)
    """
    level = getattr(logging, log_level.upper())
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if console_output:
        console_handler = logging.StreamHandler(stream or sys.stderr)
        console_handler.setLevel(level)

        if use_colors:
            console_formatter = ColoredFormatter('%(emoji)s ' + LOG_FORMAT, datefmt=DATE_FORMAT)
        else:
            console_formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_dir) if log_dir else Path('logs')
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path / log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(file_handler)


def get_module_logger(module_name: str) -> logging.Logger:
    """Get a logger for a specific module.

    Convenience wrapper around get_logger() without a level override.
    """
    return get_logger(module_name)
