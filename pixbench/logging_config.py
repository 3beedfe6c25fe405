"""Logger setup for the pixbench CLI.

Progress and diagnostics go to stderr so that stdout carries only the
benchmark report printed by ``pixbench.main``.
"""
from __future__ import annotations

import logging
import sys
from typing import IO, Optional

LOGGER_NAME = "pixbench"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """Attach console (and optional file) handlers to the ``pixbench`` logger.

    Parameters
    ----------
    level : int
        Threshold for the logger and its handlers.
    log_file : str | None
        Also write the log here, truncating any previous run's log.
    stream : file-like | None
        Console stream; ``sys.stderr`` when None.

    Returns
    -------
    logging.Logger
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    # repeated main() calls in one process replace, not stack, handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")
    handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging to %s", "console and " + log_file if log_file else "console")
    return logger
