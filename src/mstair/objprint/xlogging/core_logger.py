# File: src/mstair/objprint/xlogging/core_logger.py
"""
Structured logging with environment-driven configuration.

Example:
    >>> from mstair.objprint.xlogging import create_logger
    >>> logger = create_logger(__name__)
    >>> logger.info("Application started")
    >>>
    >>> with logger.prefix_with("[INIT]"):
    ...     logger.debug("Loading configuration")
    >>>
    >>> logger.dump(order, PrintingConfig(Order).exclude(lambda o: o.customer))

Features:
- Custom TRACE level below DEBUG
- Per-logger levels from LOG_LEVEL* environment variables
- Context-scoped message prefixes
- Non-primitive format arguments rendered with `print_to_string()`
- `dump()` for logging the full structure of an object

Design:
- Only the root logger owns handlers/formatters; CoreLogger instances propagate.
- initialize_root() is the only entry point for root setup and is idempotent.
"""

from __future__ import annotations

import contextvars
import logging
import os
import sys
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any, ClassVar, TextIO

from mstair.objprint.base.constants import NEWLINE
from mstair.objprint.base.types import PRIMITIVE_TYPES
from mstair.objprint.printing.object_printer import print_to_string
from mstair.objprint.printing.printing_config import PrintingConfig
from mstair.objprint.xlogging.logger_constants import DUMP, TRACE, initialize_logger_constants
from mstair.objprint.xlogging.logger_formatter import DEFAULT_DATEFMT, DEFAULT_FORMAT, CoreFormatter
from mstair.objprint.xlogging.logger_util import LogLevelConfig


__all__: list[str] = [
    "CoreLogger",
    "initialize_root",
]

_LOG_KWARGS_FORBIDDEN: set[str] = {"filename", "lineno", "msg", "args", "levelname", "levelno"}
_LOG_KWARGS_STANDARD: set[str] = {"exc_info", "stack_info", "stacklevel", "extra"}
_LOG_ROOT_ATTR_NAME = "_objprint_corelogger_initialized"

_log_prefix: contextvars.ContextVar[str] = contextvars.ContextVar("log_prefix", default="")


class CoreLogger(logging.Logger):
    """
    Application logger that extends logging.Logger with:

    - A TRACE level below DEBUG.
    - Safe rendering of non-primitive args as indented object dumps.
    - `dump()` for logging one object's structure.
    - Prefix context manager for scoped message prefixes.

    Handlers are not attached directly; all CoreLogger instances propagate
    to the root logger, which holds a single stderr handler per initialize_root().
    """

    _INTERNAL_FRAME_OFFSET: ClassVar[int] = 2  # _emit() + public method (log/debug/info/etc)

    def __init__(
        self,
        name: str,
        level: int | str | None = logging.NOTSET,
    ) -> None:
        """
        Initialize the CoreLogger with a name and log level.

        :param name: The name of the logger, typically the module name.
        :param level: The initial log level; NOTSET resolves it from the environment.
        """
        initialize_logger_constants()

        if level in {logging.NOTSET, "NOTSET", "", None}:
            level = LogLevelConfig.get_instance().get_effective_level(name)
        super().__init__(name, level)

        root_level = logging.getLogger().getEffectiveLevel()
        if self.level < root_level:
            self.setLevel(root_level)

    def __repr__(self) -> str:
        level = self.getEffectiveLevel()
        return f"<{type(self).__name__} '{self.name}' {logging.getLevelName(level)}={level}>"

    def log(self, level: int, *args: Any, **kwargs: Any) -> None:  # type: ignore[override]
        """Emit a log record at `level`; `args` are the message and its format arguments."""
        self._emit(level, args, kwargs)

    def trace(self, *args: Any, **kwargs: Any) -> None:
        """Log a message at TRACE level (below DEBUG)."""
        self._emit(kwargs.pop("level", TRACE), args, kwargs)

    def debug(self, *args: Any, **kwargs: Any) -> None:
        self._emit(logging.DEBUG, args, kwargs)

    def info(self, *args: Any, **kwargs: Any) -> None:
        self._emit(logging.INFO, args, kwargs)

    def warning(self, *args: Any, **kwargs: Any) -> None:
        self._emit(logging.WARNING, args, kwargs)

    def error(self, *args: Any, **kwargs: Any) -> None:
        self._emit(logging.ERROR, args, kwargs)

    def critical(self, *args: Any, **kwargs: Any) -> None:
        self._emit(logging.CRITICAL, args, kwargs)

    def exception(self, *args: Any, **kwargs: Any) -> None:
        """Log a message at ERROR level with exception info."""
        kwargs.setdefault("exc_info", True)
        self._emit(logging.ERROR, args, kwargs)

    def dump(
        self,
        obj: Any,
        config: PrintingConfig[Any] | None = None,
        *,
        label: str | None = None,
        level: int = DUMP,
        **kwargs: Any,
    ) -> None:
        """
        Log the full structure of `obj` as rendered by `print_to_string()`.

        The dump is only built when `level` is enabled.

        :param obj: The object to describe.
        :param config: Exclusions and custom renderers for the dump.
        :param label: Optional first line of the message.
        :param level: Log level (default DEBUG).
        """
        if not self.isEnabledFor(level):
            return
        text = print_to_string(obj, config).rstrip(NEWLINE)
        args: tuple[Any, ...] = ("%s\n%s", label, text) if label else ("%s", text)
        self._emit(level, args, kwargs)

    def _emit(self, level: int, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        """
        Build and hand one record to `logging.Logger.log()`.

        Every public logging method calls this directly so the caller's frame
        is always `_INTERNAL_FRAME_OFFSET` frames above it.
        """
        initialize_root()
        if not self.isEnabledFor(level):
            return

        _validate_and_move_kwargs_to_extra(kwargs)
        stacklevel: int = kwargs.pop("stacklevel", 1) + self._INTERNAL_FRAME_OFFSET

        args = _normalize_unsupported_args(*args)
        msg: Any = args[0] if args else ""
        log_args: tuple[Any, ...] = args[1:]

        prefix = _log_prefix.get()
        if prefix:
            msg = f"{prefix}{msg}"

        super().log(
            level,
            msg,
            *log_args,
            exc_info=kwargs.get("exc_info"),
            stack_info=kwargs.get("stack_info", False),
            stacklevel=stacklevel,
            extra=kwargs.get("extra"),
        )

    @contextmanager
    def prefix_with(self, prefix: str) -> Iterator[None]:
        """
        Context manager to prefix all log messages within the current context.

        Nested prefixes accumulate. State lives in a contextvar, so threads and
        asyncio tasks each see their own prefix.

        :param prefix: The prefix string to prepend to all log messages.
        """
        formatted_prefix = (prefix + " > ") if not prefix.endswith("\n") else (prefix[:-1] + " >\n")
        current_prefix = _log_prefix.get()
        token = _log_prefix.set(current_prefix + formatted_prefix)
        try:
            yield
        finally:
            _log_prefix.reset(token)


def initialize_root(
    fmt: str | None = None,
    datefmt: str | None = None,
    level: int | str | None = None,
    force: bool = False,
) -> None:
    """
    Idempotently configure the root logger for CoreLogger.

    - Ensures exactly one stderr StreamHandler with CoreFormatter exists.
    - If `force=True`, removes and recreates the stderr handler.
    - Sets root level to `level` if provided, otherwise uses WARNING if NOTSET.
    - Does not modify non-stderr handlers owned by the host application.

    :param fmt: Format string. Defaults to LOG_FORMAT or the package default.
    :param datefmt: Date format. Defaults to LOG_DATEFMT or the package default.
    :param level: Root logger level (int or name).
    :param force: Reinitialize even if already initialized.
    """
    root: logging.Logger = logging.getLogger()
    if getattr(root, _LOG_ROOT_ATTR_NAME, False) and not force:
        return
    setattr(root, _LOG_ROOT_ATTR_NAME, True)

    initialize_logger_constants()

    if force:
        root.handlers = [h for h in root.handlers if not _is_stderr_handler(h)]

    _ensure_stderr_coreformatter(fmt=fmt, datefmt=datefmt)

    if level is not None:
        if isinstance(level, str):
            level = logging.getLevelNamesMapping().get(level.upper(), logging.WARNING)
        root.setLevel(level)
    elif root.level == logging.NOTSET:
        root.setLevel(logging.WARNING)


def _is_stderr_handler(handler: logging.Handler) -> bool:
    return isinstance(handler, logging.StreamHandler) and handler.stream is sys.stderr


def _ensure_stderr_coreformatter(*, fmt: str | None = None, datefmt: str | None = None) -> None:
    """Ensure the root logger has one stderr handler using CoreFormatter."""
    fmt = fmt or os.environ.get("LOG_FORMAT", DEFAULT_FORMAT)
    datefmt = datefmt or os.environ.get("LOG_DATEFMT", DEFAULT_DATEFMT)

    root: logging.Logger = logging.getLogger()
    stderr_handlers: list[logging.StreamHandler[TextIO]] = [
        h for h in root.handlers if _is_stderr_handler(h)  # type: ignore[misc]
    ]
    if not stderr_handlers:
        handler: logging.StreamHandler[TextIO] = logging.StreamHandler(sys.stderr)
        handler.setFormatter(CoreFormatter(fmt, datefmt))
        root.addHandler(handler)
    elif not any(isinstance(h.formatter, CoreFormatter) for h in stderr_handlers):
        stderr_handlers[0].setFormatter(CoreFormatter(fmt, datefmt))


def _validate_and_move_kwargs_to_extra(kwargs: dict[str, Any]) -> None:
    """
    Move non-standard keyword arguments into the `extra` dict.

    :raises ValueError: If a key would overwrite a LogRecord attribute.
    """
    for _key in list(kwargs):
        if _key in _LOG_KWARGS_FORBIDDEN:
            raise ValueError(f"Invalid keyword argument {_key!r}")
        if _key not in _LOG_KWARGS_STANDARD:
            kwargs.setdefault("extra", {})[_key] = kwargs.pop(_key)


def _normalize_unsupported_args(*args: Any) -> tuple[Any, ...]:
    """
    Render non-primitive format arguments with `print_to_string()`.

    A single mapping argument is left alone so ``%(key)s`` formatting keeps
    working. An argument that cannot be rendered becomes an
    ``<unserializable: ...>`` placeholder instead of raising.
    """
    if len(args) == 2 and isinstance(args[1], Mapping):
        return args

    arg_list: list[Any] = []
    for arg in args:
        if isinstance(arg, PRIMITIVE_TYPES):
            arg_list.append(arg)
            continue
        try:
            arg_list.append(print_to_string(arg).rstrip(NEWLINE))
        except Exception as e:
            arg_list.append(f"<unserializable: {type(arg).__name__}: {e}>")
    return tuple(arg_list)


# End of file: src/mstair/objprint/xlogging/core_logger.py
