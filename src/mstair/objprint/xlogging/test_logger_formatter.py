# File: src/mstair/objprint/xlogging/test_logger_formatter.py

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
import pytz
from colorama import Fore

from mstair.objprint.base import config as cfg
from mstair.objprint.xlogging.logger_formatter import (
    COLOR_MAP,
    CoreFormatter,
    get_color_code,
    rgb_code,
)


@pytest.fixture
def desktop_mode() -> Iterator[None]:
    cfg.in_desktop_mode(override=True)
    yield
    cfg.in_desktop_mode(unset_override=True)


@pytest.fixture
def plain_mode() -> Iterator[None]:
    cfg.in_desktop_mode(override=False)
    yield
    cfg.in_desktop_mode(unset_override=True)


def make_record(msg: str = "hello %s", args: tuple[object, ...] = ("x",)) -> logging.LogRecord:
    return logging.LogRecord("objprint.test", logging.WARNING, __file__, 10, msg, args, None)


@pytest.mark.unit
class TestColorCodes:
    def test_rgb_code_clamps_components(self) -> None:
        assert rgb_code(-5, 128, 300) == "\033[38;2;0;128;255m"

    def test_no_colors_outside_desktop_mode(self, plain_mode: None) -> None:
        assert get_color_code("WARNING") == ""
        assert get_color_code() == ""

    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            (None, Fore.RESET),
            ("RESET", Fore.RESET),
            ("ERROR", COLOR_MAP["ERROR"]),
            ("#ff8000", rgb_code(255, 128, 0)),
            ("red", Fore.RED),
            ("light_cyan", Fore.LIGHTCYAN_EX),
            ("bright_green", Fore.LIGHTGREEN_EX),
            ("no_such_color", Fore.RESET),
        ],
    )
    def test_color_lookup(self, desktop_mode: None, key: str | None, expected: str) -> None:
        assert get_color_code(key) == expected


@pytest.mark.unit
class TestCoreFormatter:
    def test_plain_format(self, plain_mode: None) -> None:
        formatter = CoreFormatter("%(levelName)s %(message)s")
        assert formatter.format(make_record()) == "WARNING hello x"

    def test_colored_format_wraps_level_and_message(self, desktop_mode: None) -> None:
        formatter = CoreFormatter("%(levelName)s %(message)s")
        text = formatter.format(make_record())
        assert text.startswith(COLOR_MAP["WARNING"])
        assert text.endswith(Fore.RESET)
        assert "hello x" in text

    def test_file_and_line(self, plain_mode: None, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(Path(__file__).parent)
        formatter = CoreFormatter("%(fileAndLine)s")
        assert formatter.format(make_record()) == f"{Path(__file__).name}:10"

    def test_bad_format_arguments_do_not_raise(self, plain_mode: None) -> None:
        formatter = CoreFormatter("%(message)s")
        text = formatter.format(make_record("%d items", ("many",)))
        assert "Internal error: Failed to format log record" in text
        assert "record.msg: '%d items'" in text

    def test_timezone_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_TIMEZONE", "US/Eastern")
        assert CoreFormatter().tz.zone == "US/Eastern"

    def test_unknown_timezone_falls_back_to_utc(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_TIMEZONE", "Nowhere/Special")
        assert CoreFormatter().tz is pytz.utc

    def test_format_time(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LOG_TIMEZONE", raising=False)
        record = make_record()
        record.created = 0.0
        assert CoreFormatter().formatTime(record, "%Y-%m-%d %H:%M") == "1970-01-01 00:00"


# End of file: src/mstair/objprint/xlogging/test_logger_formatter.py
