# File: src/mstair/objprint/xlogging/logger_factory.py
"""
Logger factory for creating CoreLogger instances.

Loggers are registered through `logging.getLogger()` so they take part in the
normal hierarchy (parents, propagation, pytest's caplog).
"""

import logging
import sys
from pathlib import Path

from mstair.objprint.base.caller_module import caller_module_name
from mstair.objprint.xlogging.core_logger import CoreLogger


__all__ = ["create_logger", "get_caller_logger_name"]


def create_logger(
    name: str | None = None,
    *,
    level: int | str | None = None,
    stacklevel: int = 1,
) -> CoreLogger:
    """
    Return the CoreLogger named `name`, creating it if needed.

    - ``"__main__"`` is replaced by the script's file stem.
    - An empty name is derived from the calling module.

    :param name: Logger name, usually ``__name__``.
    :param level: Explicit level; by default the level comes from LOG_LEVEL* variables.
    :param stacklevel: Frames above the caller to inspect when `name` is empty.
    :raises TypeError: If a plain `logging.Logger` already owns the name.
    """
    logger_name: str = name or ""
    if logger_name == "__main__":
        logger_name = _main_name()
    if not logger_name:
        logger_name = get_caller_logger_name(stacklevel=stacklevel + 1)

    logger = _get_core_logger_from_logging(logger_name)

    if level is not None:
        logger.setLevel(level)
    return logger


def _get_core_logger_from_logging(name: str) -> CoreLogger:
    """
    Create or retrieve a CoreLogger through logging.getLogger().

    Temporarily sets CoreLogger as the logger class so the new logger is wired
    into the hierarchy like any other.

    :raises TypeError: If getLogger() returns wrong type.
    """
    logging_class = logging.getLoggerClass()
    if logging_class is not CoreLogger:
        logging.setLoggerClass(CoreLogger)
    try:
        logger = logging.getLogger(name)
    finally:
        if logging_class is not CoreLogger:
            logging.setLoggerClass(logging_class)
    if not isinstance(logger, CoreLogger):
        raise TypeError(f"Failed to create CoreLogger: {logger!r}")
    return logger


def get_caller_logger_name(*, stacklevel: int = 1) -> str:
    """Resolve the default logger name from the calling module."""
    name = caller_module_name(stacklevel=stacklevel + 1)
    if not name or name == "__main__":
        name = _main_name()
    return name


def _main_name() -> str:
    executable = sys.argv[0] if sys.argv and sys.argv[0] else sys.executable
    return Path(executable).stem or "main"


# End of file: src/mstair/objprint/xlogging/logger_factory.py
