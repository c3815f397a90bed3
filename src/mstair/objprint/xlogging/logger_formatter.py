# File: src/mstair/objprint/xlogging/logger_formatter.py

import logging
import os
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Literal

import pytz
from colorama import Fore

import mstair.objprint.base.config as cfg
from mstair.objprint.xlogging.logger_constants import K_COLOR


__all__ = ["CoreFormatter", "get_color_code", "rgb_code"]


FormatStyle = Literal["%", "{", "$"]
"""Format string style accepted by `CoreFormatter` (and `logging.Formatter`)."""

DEFAULT_FORMAT = "%(asctime)s %(levelName)s %(name)s %(fileAndLine)s %(message)s"
DEFAULT_DATEFMT = "%H:%M:%S"
ENV_LOG_TIMEZONE = "LOG_TIMEZONE"


def rgb_code(r: int, g: int, b: int) -> str:
    """
    Convert RGB values to ANSI escape code for terminal color output.

    :param r: Red component (0-255)
    :param g: Green component (0-255)
    :param b: Blue component (0-255)
    :return str: ANSI escape code for the specified RGB color.
    """
    return f"\033[38;2;{max(0, min(255, r))};{max(0, min(255, g))};{max(0, min(255, b))}m"


RGB_LOCATION = rgb_code(4 << 4, 8 << 4, 10 << 4)
COLOR_MAP = {
    "fileAndLine": RGB_LOCATION,
    "TRACE": rgb_code(96, 0, 64),  # Mauve
    "DEBUG": rgb_code(128, 128, 128),  # Gray
    "INFO": rgb_code(184, 184, 216),  # Light gray
    "WARNING": rgb_code(192, 176, 0),  # Yellow
    "ERROR": rgb_code(224, 128, 0),  # Orange
    "CRITICAL": rgb_code(255, 64, 64),  # Red
    None: Fore.RESET,
}


def get_color_code(key: Any = None) -> str:
    """
    Return the ANSI color code for `key`, or "" when not in desktop mode.

    `key` may be a level name, a `COLOR_MAP` key, a "#rrggbb" string or a
    colorama `Fore` name such as "light_cyan".
    """
    if not cfg.in_desktop_mode():
        return ""

    if key in {"", "RESET"} or key is None:
        return Fore.RESET

    if key in COLOR_MAP:
        return COLOR_MAP[key]

    if isinstance(key, str) and key.startswith("#") and len(key) == 7:
        return rgb_code(*[int(key[i : i + 2], 16) for i in (1, 3, 5)])

    # "light_cyan", "bright cyan" and "LIGHTCYAN_EX" all name Fore.LIGHTCYAN_EX
    clean_key = str(key).upper().replace("BRIGHT", "LIGHT").replace("_", "").replace(" ", "")
    if clean_key.startswith("LIGHT"):
        clean_key = clean_key.removesuffix("EX") + "_EX"
    return getattr(Fore, clean_key, Fore.RESET)


class CoreFormatter(logging.Formatter):
    """
    Formatter for CoreLogger records: colored level names, a "file:line"
    location field and timestamps in a configurable timezone.

    Extra record fields available to format strings:
    - ``%(levelName)s``: level name, colored per level
    - ``%(fileAndLine)s``: caller location relative to the working directory
    """

    tz: Any
    """pytz timezone for `formatTime()`, from LOG_TIMEZONE (default UTC)."""

    def __init__(
        self,
        fmt: str | None = DEFAULT_FORMAT,
        datefmt: str | None = DEFAULT_DATEFMT,
        style: FormatStyle = "%",
        validate: bool = True,
        *,
        defaults: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style, validate=validate, defaults=defaults)
        self.tz = _get_timezone(os.getenv(ENV_LOG_TIMEZONE, "UTC"))

    def format(self, record: logging.LogRecord) -> str:
        record.fileAndLine = self.format_fileAndLine(record.pathname, record.lineno)
        record.levelName = get_color_code(record.levelname) + record.levelname + get_color_code()
        try:
            message_str = super().format(record)
        except Exception as exc:
            return format_logging_error(record, exc)
        color_key = getattr(record, K_COLOR, record.levelname)
        return get_color_code(color_key) + message_str + get_color_code()

    @staticmethod
    def format_file(file: str) -> str:
        """Return `file` relative to the working directory when possible, in posix form."""
        if not file:
            return "<unknown file>"
        path = Path(file)
        try:
            return path.absolute().relative_to(Path.cwd()).as_posix()
        except ValueError:
            return path.as_posix()

    def format_fileAndLine(self, file: str, lineno: int) -> str:
        fileAndLine = f"{self.format_file(file)}:{lineno}"
        return get_color_code("fileAndLine") + fileAndLine + get_color_code()

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        _datetime = datetime.fromtimestamp(record.created, self.tz)
        if datefmt:
            return _datetime.strftime(datefmt)
        return _datetime.isoformat()


def _get_timezone(name: str) -> Any:
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        print(f"Unknown {ENV_LOG_TIMEZONE} {name!r}, using UTC", file=sys.stderr)
        return pytz.utc


def format_logging_error(record: logging.LogRecord, exc: Exception) -> str:
    """
    Describe a failure to format `record` instead of raising from the handler.

    :param record: The LogRecord that failed to format
    :param exc: The exception that occurred during formatting
    :return: Formatted error message string
    """
    posix_path = Path(getattr(record, "pathname", "<unknown>")).as_posix()
    line = getattr(record, "lineno", "?")
    message_lines = [
        "Internal error: Failed to format log record",
        f"{posix_path}:{line}",
        f"{type(exc).__name__}: {exc}",
        f"record.msg: {getattr(record, 'msg', None)!r}",
        f"record.args: {getattr(record, 'args', None)!r}",
        "",
        *traceback.format_exc().splitlines(),
    ]
    return "\n>> " + "\n>> ".join(message_lines) + "\n"


# End of file: src/mstair/objprint/xlogging/logger_formatter.py
