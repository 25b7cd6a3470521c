"""
corrkit Logging System
======================
Provides consistent, scoped loggers for the package.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, List

CONSOLE_FMT = "[%(name)s] %(levelname)s: %(message)s"

FILE_FMT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"

LOG_FILENAME = "corrkit_execution.log"

# One file handler shared by every logger created through get_logger
_KNOWN_LOGGERS: List[logging.Logger] = []
_SHARED_FILE_HANDLER: Optional[logging.FileHandler] = None


def get_logger(name: str) -> logging.Logger:
    """
    Creates or retrieves a logger with specific formatting and handlers.

    Every logger created through this function shares the same file handler
    once it has been set up by `setup_file_logging`.

    Args:
        name: Dot-separated module name (e.g., 'corrkit.correlate').
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    if logger not in _KNOWN_LOGGERS:
        _KNOWN_LOGGERS.append(logger)

    # at most one console handler per logger
    has_console = any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler) for h in logger.handlers)

    if not has_console:
        c_handler = logging.StreamHandler(sys.stdout)
        c_handler.setLevel(logging.INFO)
        c_handler.setFormatter(logging.Formatter(CONSOLE_FMT))
        logger.addHandler(c_handler)

    if _SHARED_FILE_HANDLER and _SHARED_FILE_HANDLER not in logger.handlers:
        logger.addHandler(_SHARED_FILE_HANDLER)

    return logger


def setup_file_logging(log_dir: Path, file_level: int = logging.DEBUG) -> Path:
    """
    Initializes the shared file logger for every corrkit logger.
    Call once at the start of an analysis script.

    Args:
        log_dir: The directory where the log file will be created.
        file_level: The logging level for the file.

    Returns:
        Path of the log file.
    """
    global _SHARED_FILE_HANDLER

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILENAME

    new_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
    new_handler.setLevel(file_level)
    new_handler.setFormatter(logging.Formatter(FILE_FMT))

    if _SHARED_FILE_HANDLER:
        _SHARED_FILE_HANDLER.close()

    _SHARED_FILE_HANDLER = new_handler

    for known in _KNOWN_LOGGERS:
        for h in [h for h in known.handlers if isinstance(h, logging.FileHandler)]:
            known.removeHandler(h)
        known.addHandler(new_handler)

    get_logger("corrkit").info(f"File logging initialized at: {log_file}")
    return log_file


def close_file_logging() -> None:
    """Detach and close the shared file handler, if any."""
    global _SHARED_FILE_HANDLER

    if _SHARED_FILE_HANDLER is None:
        return

    for known in _KNOWN_LOGGERS:
        if _SHARED_FILE_HANDLER in known.handlers:
            known.removeHandler(_SHARED_FILE_HANDLER)
    _SHARED_FILE_HANDLER.close()
    _SHARED_FILE_HANDLER = None
