# File: src/mstair/objprint/printing/printing_config.py
"""
Per-root-type printing configuration and its fluent builder.

A `PrintingConfig` records which members to leave out of a dump and which
members (by name) or member types get a custom renderer. It is built once,
then handed to the printer for as many calls as needed:

```
config = (
    PrintingConfig(Person)
    .exclude(lambda p: p.parent)
    .for_member(float).using(lambda f: f"{f:.2f}")
    .for_member(lambda p: p.name).trimmed_to_length(10)
)
text = config.print_to_string(person)
```

Every builder method mutates and returns the same configuration. Building
while a print that reads the same configuration is in flight is not
supported.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from mstair.objprint.printing.member import Member
from mstair.objprint.printing.selector import MemberSelector, resolve_member_name


__all__ = [
    "MemberPrintingConfig",
    "PrintingConfig",
    "RenderFunction",
]

RenderFunction = Callable[[Any], Any]
"""
A caller-supplied function mapping a member value to its text.

:param value: The original member value.
:return: Replacement value, normally a `str`; it is printed like any other value.
"""

_LOG = logging.getLogger(__name__)

TOwner = TypeVar("TOwner")


class PrintingConfig(Generic[TOwner]):
    """Exclusions and custom renderers for dumping objects rooted at `owner_type`."""

    owner_type: type[TOwner] | None
    """Root type this configuration was built for (informational)."""

    excluded_types: set[type]
    """Members whose declared type is exactly one of these are left out."""

    excluded_member_names: set[str]
    """Members with one of these names are left out, whatever object owns them."""

    renderers_by_type: dict[type, RenderFunction]
    """Custom renderers keyed by declared member type."""

    renderers_by_member_name: dict[str, RenderFunction]
    """Custom renderers keyed by member name; consulted before `renderers_by_type`."""

    def __init__(self, owner_type: type[TOwner] | None = None) -> None:
        self.owner_type = owner_type
        self.excluded_types = set()
        self.excluded_member_names = set()
        self.renderers_by_type = {}
        self.renderers_by_member_name = {}

    def __repr__(self) -> str:
        owner = self.owner_type.__name__ if self.owner_type is not None else None
        return (
            f"{type(self).__name__}("
            f"owner_type={owner}, "
            f"excluded_types={sorted(t.__name__ for t in self.excluded_types)}, "
            f"excluded_member_names={sorted(self.excluded_member_names)}, "
            f"renderers_by_type={sorted(t.__name__ for t in self.renderers_by_type)}, "
            f"renderers_by_member_name={sorted(self.renderers_by_member_name)})"
        )

    # == Builder ==

    def for_member(self, target: type | MemberSelector) -> MemberPrintingConfig[TOwner]:
        """
        Begin configuring either every member of a declared type or one named member.

        :param target: A type, ``lambda owner: owner.member``, or a member name.
        :return MemberPrintingConfig: Selector whose `using()` completes the registration.
        :raises InvalidSelectorError: If `target` is a malformed selector.
        """
        if isinstance(target, type):
            return MemberPrintingConfig(self, member_type=target)
        return MemberPrintingConfig(self, member_name=resolve_member_name(target, self.owner_type))

    def exclude(self, target: type | MemberSelector) -> PrintingConfig[TOwner]:
        """
        Leave members out of the output.

        - A type excludes every member whose declared type is exactly that type, at any depth.
        - A selector excludes the single named member.

        :raises InvalidSelectorError: If `target` is a malformed selector.
        """
        if isinstance(target, type):
            self.excluded_types.add(target)
            _LOG.debug("Excluding members of type %s", target.__name__)
        else:
            member_name = resolve_member_name(target, self.owner_type)
            self.excluded_member_names.add(member_name)
            _LOG.debug("Excluding member %r", member_name)
        return self

    # == Queries used while printing ==

    def is_excluded(self, member: Member) -> bool:
        """Return True if `member` is suppressed by name or by declared type."""
        return (
            member.name in self.excluded_member_names or member.declared_type in self.excluded_types
        )

    def find_renderer(self, member: Member) -> RenderFunction | None:
        """Return the renderer for `member`: the name-keyed one first, then the type-keyed one."""
        renderer = self.renderers_by_member_name.get(member.name)
        if renderer is None:
            renderer = self.renderers_by_type.get(member.declared_type)
        return renderer

    def print_to_string(self, obj: TOwner) -> str:
        """Return the dump of `obj` using this configuration."""
        from mstair.objprint.printing.object_printer import print_to_string  # noqa: PLC0415

        return print_to_string(obj, self)


class MemberPrintingConfig(Generic[TOwner]):
    """Pending registration for a member type or a member name, completed by `using()`."""

    member_type: type | None
    member_name: str | None

    def __init__(
        self,
        parent: PrintingConfig[TOwner],
        *,
        member_type: type | None = None,
        member_name: str | None = None,
    ) -> None:
        if (member_type is None) == (member_name is None):
            raise ValueError("exactly one of member_type or member_name is required")
        self._parent = parent
        self.member_type = member_type
        self.member_name = member_name

    def __repr__(self) -> str:
        target = self.member_name if self.member_name is not None else self.member_type
        return f"{type(self).__name__}({target!r})"

    def using(self, render: RenderFunction) -> PrintingConfig[TOwner]:
        """
        Register `render` as the custom renderer for the selected member(s).

        :param render: Called with the original member value; its result is printed instead.
        :return PrintingConfig: The parent configuration, for chaining.
        """
        if not callable(render):
            raise TypeError(f"renderer must be callable, got {type(render).__name__}")
        if self.member_name is not None:
            self._parent.renderers_by_member_name[self.member_name] = render
            _LOG.debug("Custom renderer for member %r", self.member_name)
        else:
            assert self.member_type is not None
            self._parent.renderers_by_type[self.member_type] = render
            _LOG.debug("Custom renderer for type %s", self.member_type.__name__)
        return self._parent

    def trimmed_to_length(self, max_length: int) -> PrintingConfig[TOwner]:
        """Render the selected values as `str()` text cut to at most `max_length` characters."""
        if max_length < 0:
            raise ValueError(f"max_length must be >= 0, got {max_length}")

        def _trimmed(value: Any) -> str | None:
            return None if value is None else str(value)[:max_length]

        return self.using(_trimmed)

    def using_format(self, format_spec: str) -> PrintingConfig[TOwner]:
        """Render the selected values with the built-in ``format(value, format_spec)``."""

        def _formatted(value: Any) -> str | None:
            return None if value is None else format(value, format_spec)

        return self.using(_formatted)


# End of file: src/mstair/objprint/printing/printing_config.py
