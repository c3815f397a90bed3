# File: src/mstair/objprint/printing/terminal_types.py
"""
The closed set of types the printer treats as atoms.

A terminal value is rendered with its default ``str()`` text and is never
decomposed into members, never tracked for cycles, and never subject to
exclusion or custom rendering. Membership is by exact runtime type, so
subclasses (``IntEnum`` members, ``str`` subclasses) are decomposed like
any other object unless a renderer is registered for them.
"""

from __future__ import annotations

from typing import Any, TypeGuard

from mstair.objprint.base.types import TERMINAL_TYPES, TerminalTypes


__all__ = [
    "TERMINAL_TYPES",
    "is_terminal",
    "terminal_text",
]

_TERMINAL_TYPE_SET: frozenset[type] = frozenset(TERMINAL_TYPES)


def is_terminal(value: Any) -> TypeGuard[TerminalTypes]:
    """Return True if the runtime type of `value` is exactly one of the terminal types."""
    return type(value) in _TERMINAL_TYPE_SET


def terminal_text(value: TerminalTypes) -> str:
    """Return the default scalar text of a terminal value."""
    return str(value)


# End of file: src/mstair/objprint/printing/terminal_types.py
