"""File logging for the console.

The terminal belongs to Textual while the app runs, so records only go to
the configured log file.
"""

from __future__ import annotations

import logging
from pathlib import Path

from kubeconsole.models.state.app_settings import LoggingSettings

_PACKAGE_LOGGER = "kubeconsole"
_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(funcName)s:%(lineno)d | %(message)s"
_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def resolve_level(name: str, verbose: bool = False) -> int:
    if verbose:
        return logging.DEBUG
    return _LEVELS.get(name.strip().lower(), logging.INFO)


def configure_logging(settings: LoggingSettings, verbose: bool = False) -> logging.Logger:
    """Attach a file handler to the package logger and return it.

    Calling this again replaces the previous handlers. If the log file
    cannot be opened, logging is disabled rather than sent to the terminal.
    """
    logger = logging.getLogger(_PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    level = resolve_level(settings.level, verbose)
    logger.setLevel(level)
    logger.propagate = False

    log_file = Path(settings.file).expanduser()
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError:
        logger.addHandler(logging.NullHandler())
        return logger

    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(file_handler)
    logger.debug("Logging to %s at %s", log_file, logging.getLevelName(level))
    return logger
