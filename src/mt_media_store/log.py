"""Logging setup for command-line runs.

Library modules only create loggers; handlers are attached here, once,
by the CLI.
"""

import logging
import sys
from pathlib import Path

LOGGER_NAME = "mt_media_store"

_console_handler: logging.Handler | None = None
_file_handler: logging.FileHandler | None = None


def setup_logging(verbosity: int = 0, log_file: Path | None = None) -> logging.Logger:
    """Attach console (and optionally file) handlers to the package logger.

    Args:
        verbosity: 0 = warnings only, 1 = progress, 2+ = per-file detail
        log_file: Also write a timestamped DEBUG log here

    Returns:
        The package logger
    """
    global _console_handler, _file_handler

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    if _console_handler is not None:
        logger.removeHandler(_console_handler)
    _console_handler = logging.StreamHandler(sys.stderr)
    if verbosity >= 2:
        _console_handler.setLevel(logging.DEBUG)
    elif verbosity == 1:
        _console_handler.setLevel(logging.INFO)
    else:
        _console_handler.setLevel(logging.WARNING)
    _console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(_console_handler)

    if _file_handler is not None:
        logger.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None

    if log_file is not None:
        # Overwrite log file each run
        _file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        _file_handler.setLevel(logging.DEBUG)
        _file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(_file_handler)

    return logger
