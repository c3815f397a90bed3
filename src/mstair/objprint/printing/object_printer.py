# File: src/mstair/objprint/printing/object_printer.py
"""
Recursive, indented text dumps of arbitrary Python objects.

`print_to_string()` walks a value and describes its structure one line per
leaf, for logging and debugging. The output is not meant to be parsed back.

Each visited value is classified, in this order:

- ``None`` renders as ``null``.
- A terminal value (see `terminal_types`) renders as its ``str()`` text.
- An object already being printed further up the current path renders as
  ``Cycle reference``.
- A value nested deeper than `MAX_NESTING_LEVEL` renders as
  ``Nesting level is exceeded``; only that branch is cut short.
- A mapping renders its type name, then ``Key i:`` / ``Value i:`` lines.
- Any other collection renders its type name, then ``Element i:`` lines.
- Anything else renders its type name, then one ``name = ...`` line per
  public member, honoring the exclusions and renderers of the configuration.

Example:
```
>>> print(print_to_string({"x": 1, "y": 2}), end="")
dict
	Key 0: x
	Value 0: 1
	Key 1: y
	Value 1: 2
```
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterator, Mapping
from typing import Any, TypeVar

from mstair.objprint.base.constants import (
    CYCLE_REFERENCE_TEXT,
    ELEMENT_LABEL,
    INDENT,
    KEY_LABEL,
    MAX_NESTING_LEVEL,
    MEMBER_ASSIGNMENT,
    NESTING_EXCEEDED_TEXT,
    NEWLINE,
    NULL_TEXT,
    VALUE_LABEL,
)
from mstair.objprint.printing.member import iter_members
from mstair.objprint.printing.printing_config import PrintingConfig
from mstair.objprint.printing.terminal_types import is_terminal, terminal_text


__all__ = [
    "ObjectPrinter",
    "print_to_string",
]

_LOG = logging.getLogger(__name__)

TOwner = TypeVar("TOwner")


def print_to_string(value: Any, config: PrintingConfig[Any] | None = None) -> str:
    """
    Render a structured, human-readable dump of `value`.

    :param value: The object to render.
    :param config: Exclusions and custom renderers; None prints every member by default.
    :return str: The dump, one line per leaf, each terminated by a line break.
    """
    return ObjectPrinter(config).print_to_string(value)


class ObjectPrinter:
    """
    Traversal engine behind `print_to_string()`.

    The printer itself holds no per-call state: the set of ancestors used for
    cycle detection is created at the start of every `print_to_string()` call
    and threaded through the recursion, so one printer may be reused freely.
    """

    config: PrintingConfig[Any]
    """Configuration consulted at every member; never modified by the printer."""

    def __init__(self, config: PrintingConfig[Any] | None = None) -> None:
        self.config = config if config is not None else PrintingConfig()

    @staticmethod
    def for_type(owner_type: type[TOwner]) -> PrintingConfig[TOwner]:
        """Return a new, empty configuration for dumping objects of `owner_type`."""
        return PrintingConfig(owner_type)

    def print_to_string(self, value: Any) -> str:
        """Return the dump of `value`, starting at nesting level 0."""
        return self._print_value(value, 0, set())

    def _print_value(self, value: Any, nesting_level: int, ancestors: set[int]) -> str:
        if value is None:
            return NULL_TEXT + NEWLINE
        if is_terminal(value):
            return terminal_text(value) + NEWLINE
        if id(value) in ancestors:
            if _LOG.isEnabledFor(logging.DEBUG):
                _LOG.debug("Cycle reference to %s at level %d", type(value).__name__, nesting_level)
            return CYCLE_REFERENCE_TEXT + NEWLINE
        if nesting_level > MAX_NESTING_LEVEL:
            if _LOG.isEnabledFor(logging.DEBUG):
                _LOG.debug("Truncated %s at level %d", type(value).__name__, nesting_level)
            return NESTING_EXCEEDED_TEXT + NEWLINE
        return self._print_nested(value, nesting_level, ancestors)

    def _print_nested(self, value: Any, nesting_level: int, ancestors: set[int]) -> str:
        """Render a container or composite object, tracking it as an ancestor meanwhile."""
        ancestors.add(id(value))
        try:
            chunks: list[str] = [type(value).__name__ + NEWLINE]
            if isinstance(value, Mapping):
                chunks.extend(self._mapping_lines(value, nesting_level, ancestors))
            elif isinstance(value, Collection):
                chunks.extend(self._collection_lines(value, nesting_level, ancestors))
            else:
                chunks.extend(self._member_lines(value, nesting_level, ancestors))
            return "".join(chunks)
        finally:
            ancestors.discard(id(value))

    def _mapping_lines(
        self, mapping: Mapping[Any, Any], nesting_level: int, ancestors: set[int]
    ) -> Iterator[str]:
        indentation = INDENT * (nesting_level + 1)
        for i, (key, item) in enumerate(mapping.items()):
            key_text = self._print_value(key, nesting_level + 1, ancestors)
            yield f"{indentation}{KEY_LABEL} {i}: {key_text}"
            item_text = self._print_value(item, nesting_level + 1, ancestors)
            yield f"{indentation}{VALUE_LABEL} {i}: {item_text}"

    def _collection_lines(
        self, collection: Collection[Any], nesting_level: int, ancestors: set[int]
    ) -> Iterator[str]:
        indentation = INDENT * (nesting_level + 1)
        for i, element in enumerate(collection):
            element_text = self._print_value(element, nesting_level + 1, ancestors)
            yield f"{indentation}{ELEMENT_LABEL} {i}: {element_text}"

    def _member_lines(self, obj: Any, nesting_level: int, ancestors: set[int]) -> Iterator[str]:
        indentation = INDENT * (nesting_level + 1)
        for member in iter_members(obj):
            if self.config.is_excluded(member):
                continue
            member_value = member.value
            renderer = self.config.find_renderer(member)
            if renderer is not None:
                try:
                    member_value = renderer(member.value)
                except Exception:
                    _LOG.debug(
                        "Renderer for %s.%s raised", type(obj).__name__, member.name, exc_info=True
                    )
                    raise
            member_text = self._print_value(member_value, nesting_level + 1, ancestors)
            yield f"{indentation}{member.name}{MEMBER_ASSIGNMENT}{member_text}"


# End of file: src/mstair/objprint/printing/object_printer.py
