# File: src/mstair/objprint/base/config.py
"""
Execution context flags for the logging layer.

Two questions are answered here: is the code running under a test runner,
and should log output carry ANSI colors. Each answer may be forced per
thread, which keeps tests isolated from each other and from the developer's
shell.

Exports:
- in_test_mode(): detect (or force) test-runner execution.
- in_desktop_mode(): detect (or force) colored, interactive output.
"""

from __future__ import annotations

import os
import sys
import threading
from dataclasses import dataclass
from typing import Literal


_tls = threading.local()

_TEST_RUNNER_MODULES = ("pytest", "unittest")
_TEST_RUNNER_ENV_VARS = ("PYTEST_CURRENT_TEST", "PYTEST_RUNNING", "UNITTEST_RUNNING")


@dataclass
class TLSAttrs:
    """Per-thread forced values; None means "detect"."""

    in_test_mode_override: bool | None = None
    in_desktop_mode_override: bool | None = None


def _get_tls() -> TLSAttrs:
    state: TLSAttrs | None = getattr(_tls, "state", None)
    if state is None:
        state = _tls.state = TLSAttrs()
    return state


def _apply_override(
    attr: Literal["in_test_mode_override", "in_desktop_mode_override"],
    unset_override: bool,
    override: bool | None,
) -> bool | None:
    """Update the forced value named `attr` and return whatever is now forced."""
    tls = _get_tls()
    if unset_override:
        setattr(tls, attr, None)
    if override is not None:
        setattr(tls, attr, override)
    return getattr(tls, attr)


def in_test_mode(
    *,
    unset_override: bool = False,
    override: bool | None = None,
) -> bool:
    """
    Return True when running under pytest or unittest.

    A forced value for this thread wins; otherwise a loaded test-runner
    module, a test-runner environment variable or ``CI=true`` means test mode.

    :param unset_override: Drop this thread's forced value before answering.
    :param override: Force the answer for this thread.
    """
    forced = _apply_override("in_test_mode_override", unset_override, override)
    if forced is not None:
        return forced
    if any(name in sys.modules for name in _TEST_RUNNER_MODULES):
        return True
    return any(os.environ.get(k) for k in _TEST_RUNNER_ENV_VARS) or os.environ.get("CI") == "true"


def in_desktop_mode(
    *,
    unset_override: bool = False,
    override: bool | None = None,
) -> bool:
    """
    Return True when log output should be colored.

    Rules, first match wins:
      - A forced value for this thread.
      - NO_COLOR set in the environment disables colors.
      - Test mode enables them.
      - Otherwise colors follow whether stderr is a terminal.

    :param unset_override: Drop this thread's forced value before answering.
    :param override: Force the answer for this thread.
    """
    forced = _apply_override("in_desktop_mode_override", unset_override, override)
    if forced is not None:
        return forced
    if os.environ.get("NO_COLOR"):
        return False
    if in_test_mode():
        return True
    isatty = getattr(sys.stderr, "isatty", None)
    return bool(isatty is not None and isatty())


# End of file: src/mstair/objprint/base/config.py
