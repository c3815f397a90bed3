# File: src/mstair/objprint/xlogging/test_core_logger.py
"""
Tests for CoreLogger, initialize_root() and create_logger().

Confirms that:
- Environment levels never lower a logger below the root's level.
- Non-primitive arguments and dump() use the object printer.
- Prefixes nest and caller locations point at the calling test.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator
from dataclasses import dataclass

import pytest

from mstair.objprint.printing.printing_config import PrintingConfig
from mstair.objprint.xlogging import core_logger
from mstair.objprint.xlogging import logger_util as lu
from mstair.objprint.xlogging.core_logger import CoreLogger, initialize_root
from mstair.objprint.xlogging.logger_constants import TRACE
from mstair.objprint.xlogging.logger_factory import create_logger
from mstair.objprint.xlogging.logger_formatter import CoreFormatter


_ROOT_ATTR = "_objprint_corelogger_initialized"


@dataclass
class Order:
    id: int
    customer: str


class Unprintable:
    @property
    def broken(self) -> int:
        raise RuntimeError("cannot read")


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear LOG_LEVEL* vars and reset the singleton; do not read .env during tests."""
    monkeypatch.setattr(lu, "fs_load_dotenv", lambda *a, **k: False)
    for key in [k for k in os.environ if k.startswith("LOG_LEVEL")]:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(lu, "_log_level_config_instance", None)
    yield
    monkeypatch.setattr(lu, "_log_level_config_instance", None)


@pytest.fixture
def clean_logging() -> Iterator[None]:
    """Reset root level and init flag; drop any stderr handler a test installed."""
    root = logging.getLogger()
    prev_level = root.level
    prev_handlers = list(root.handlers)
    prev_attr = getattr(root, _ROOT_ATTR, None)

    root.setLevel(logging.WARNING)
    if hasattr(root, _ROOT_ATTR):
        delattr(root, _ROOT_ATTR)

    yield

    root.handlers = [
        h for h in root.handlers if h in prev_handlers or not isinstance(h.formatter, CoreFormatter)
    ]
    root.setLevel(prev_level)
    if prev_attr is not None:
        setattr(root, _ROOT_ATTR, prev_attr)
    elif hasattr(root, _ROOT_ATTR):
        delattr(root, _ROOT_ATTR)


@pytest.fixture
def logger(clean_env: None, clean_logging: None, request: pytest.FixtureRequest) -> CoreLogger:
    return create_logger(f"objprint_tests.{request.node.name}", level=TRACE)


# ---------- Levels ----------


@pytest.mark.unit
class TestLevels:
    def test_env_trace_does_not_lower_logger_below_root(
        self, clean_env: None, clean_logging: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("LOG_LEVELS", "pkg.*:TRACE")
        log = CoreLogger("pkg.module")
        assert log.level == logging.WARNING
        assert not log.isEnabledFor(logging.DEBUG)

    def test_root_level_is_the_floor(
        self, clean_env: None, clean_logging: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("LOG_LEVELS", "pkg.*:TRACE")
        logging.getLogger().setLevel(logging.DEBUG)
        log = CoreLogger("pkg.module")
        assert log.level == logging.DEBUG

    def test_env_level_applies_above_root(
        self, clean_env: None, clean_logging: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("LOG_LEVEL_PKG", "ERROR")
        assert CoreLogger("pkg.module").level == logging.ERROR

    def test_repr(self, clean_env: None, clean_logging: None) -> None:
        assert repr(CoreLogger("pkg.module", logging.ERROR)) == "<CoreLogger 'pkg.module' ERROR=40>"


# ---------- Emitting ----------


@pytest.mark.unit
class TestEmitting:
    def test_trace_records_use_trace_level(
        self, logger: CoreLogger, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(TRACE, logger=logger.name):
            logger.trace("fine detail %d", 7)
        record = caplog.records[-1]
        assert record.levelno == TRACE
        assert record.levelname == "TRACE"
        assert record.getMessage() == "fine detail 7"

    def test_caller_location_is_the_calling_function(
        self, logger: CoreLogger, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger=logger.name):
            logger.info("here")
            logger.log(logging.INFO, "there")
            logger.dump([1], level=logging.INFO)
        assert [r.funcName for r in caplog.records] == [
            "test_caller_location_is_the_calling_function"
        ] * 3
        assert all(r.filename == os.path.basename(__file__) for r in caplog.records)

    def test_explicit_stacklevel_is_honored(
        self, logger: CoreLogger, caplog: pytest.LogCaptureFixture
    ) -> None:
        def helper() -> None:
            logger.warning("from helper", stacklevel=2)

        with caplog.at_level(logging.WARNING, logger=logger.name):
            helper()
        assert caplog.records[-1].funcName == "test_explicit_stacklevel_is_honored"

    def test_non_primitive_args_are_printed(
        self, logger: CoreLogger, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger=logger.name):
            logger.info("items: %s (%d)", [1, "a"], 2)
        assert caplog.records[-1].getMessage() == "items: list\n\tElement 0: 1\n\tElement 1: a (2)"

    def test_single_mapping_arg_is_left_for_named_formatting(
        self, logger: CoreLogger, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger=logger.name):
            logger.info("%(user)s logged in", {"user": "ann"})
        assert caplog.records[-1].getMessage() == "ann logged in"

    def test_unprintable_arg_does_not_raise(
        self, logger: CoreLogger, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger=logger.name):
            logger.info("value: %s", Unprintable())
        assert caplog.records[-1].getMessage() == "value: <unserializable: Unprintable: cannot read>"

    def test_extra_keywords_become_record_attributes(
        self, logger: CoreLogger, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger=logger.name):
            logger.info("colored", color="light_cyan")
        assert caplog.records[-1].color == "light_cyan"  # type: ignore[attr-defined]

    def test_reserved_keywords_are_rejected(self, logger: CoreLogger) -> None:
        with pytest.raises(ValueError, match="lineno"):
            logger.error("bad", lineno=3)

    def test_exception_includes_exc_info(
        self, logger: CoreLogger, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.ERROR, logger=logger.name):
            try:
                raise KeyError("k")
            except KeyError:
                logger.exception("failed")
        record = caplog.records[-1]
        assert record.exc_info is not None
        assert record.exc_info[0] is KeyError

    def test_disabled_level_emits_nothing(
        self, logger: CoreLogger, caplog: pytest.LogCaptureFixture
    ) -> None:
        logger.setLevel(logging.ERROR)
        with caplog.at_level(logging.DEBUG):
            logger.warning("hidden")
        assert not [r for r in caplog.records if r.name == logger.name]


# ---------- Prefixes ----------


@pytest.mark.unit
class TestPrefix:
    def test_prefix_nests_and_resets(
        self, logger: CoreLogger, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger=logger.name):
            with logger.prefix_with("[A]"):
                logger.info("one")
                with logger.prefix_with("[B]"):
                    logger.info("two %s", "x")
            logger.info("three")
        assert [r.getMessage() for r in caplog.records] == ["[A] > one", "[A] > [B] > two x", "three"]

    def test_prefix_ending_in_newline(
        self, logger: CoreLogger, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger=logger.name), logger.prefix_with("[A]\n"):
            logger.info("body")
        assert caplog.records[-1].getMessage() == "[A] >\nbody"


# ---------- dump() ----------


@pytest.mark.unit
class TestDump:
    def test_dump_logs_the_object_structure(
        self, logger: CoreLogger, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger=logger.name):
            logger.dump({"x": 1})
        record = caplog.records[-1]
        assert record.levelno == logging.DEBUG
        assert record.getMessage() == "dict\n\tKey 0: x\n\tValue 0: 1"

    def test_dump_with_config_and_label(
        self, logger: CoreLogger, caplog: pytest.LogCaptureFixture
    ) -> None:
        config = PrintingConfig(Order).exclude(lambda o: o.customer)
        with caplog.at_level(logging.INFO, logger=logger.name):
            logger.dump(Order(id=7, customer="ann"), config, label="order:", level=logging.INFO)
        assert caplog.records[-1].getMessage() == "order:\nOrder\n\tid = 7"

    def test_dump_is_not_built_when_disabled(
        self, logger: CoreLogger, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def _fail(*args: object, **kwargs: object) -> str:
            raise AssertionError("dump should not be built")

        monkeypatch.setattr(core_logger, "print_to_string", _fail)
        logger.setLevel(logging.INFO)
        logger.dump(Order(id=1, customer="ann"))

    def test_dump_propagates_printing_errors(self, logger: CoreLogger) -> None:
        with pytest.raises(RuntimeError, match="cannot read"):
            logger.dump(Unprintable(), level=logging.ERROR)


# ---------- Root setup and factory ----------


@pytest.mark.unit
class TestRootAndFactory:
    def test_initialize_root_installs_one_stderr_handler(self, clean_logging: None) -> None:
        initialize_root()
        initialize_root()
        root = logging.getLogger()
        stderr_handlers = [
            h for h in root.handlers if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr
        ]
        assert len(stderr_handlers) == 1
        assert isinstance(stderr_handlers[0].formatter, CoreFormatter)

    def test_initialize_root_level_by_name(self, clean_logging: None) -> None:
        initialize_root(level="info", force=True)
        assert logging.getLogger().level == logging.INFO

    def test_create_logger_returns_the_registered_instance(
        self, clean_env: None, clean_logging: None
    ) -> None:
        first = create_logger("objprint_tests.factory")
        assert isinstance(first, CoreLogger)
        assert logging.getLogger("objprint_tests.factory") is first
        assert create_logger("objprint_tests.factory", level=logging.INFO) is first
        assert first.level == logging.INFO

    def test_create_logger_keeps_the_default_logger_class(
        self, clean_env: None, clean_logging: None
    ) -> None:
        logger_class = logging.getLoggerClass()
        create_logger("objprint_tests.factory_class")
        assert logging.getLoggerClass() is logger_class
        assert not isinstance(logging.getLogger("objprint_tests.plain_after"), CoreLogger)

    def test_create_logger_without_name_uses_caller_module(
        self, clean_env: None, clean_logging: None
    ) -> None:
        assert create_logger().name == __name__

    def test_create_logger_rejects_plain_logger_names(
        self, clean_env: None, clean_logging: None
    ) -> None:
        logging.getLogger("objprint_tests.plain")
        with pytest.raises(TypeError):
            create_logger("objprint_tests.plain")


# End of file: src/mstair/objprint/xlogging/test_core_logger.py
