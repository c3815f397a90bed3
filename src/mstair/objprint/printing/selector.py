# File: src/mstair/objprint/printing/selector.py
"""
Resolve member selectors such as ``lambda p: p.name`` to a member name.

A selector is evaluated once, at configuration time, against a recording
stand-in for the owner type. It is accepted only when it performs exactly
one attribute read on its argument and returns the result of that read
unchanged. Anything else (a computed expression, a nested attribute chain,
a constant) raises `InvalidSelectorError` immediately.

A plain identifier string is accepted as shorthand for the same thing.

When the owner type is known and carries annotations, the name must also be
declared on it (annotated somewhere in its MRO, or a class attribute such as
a property), so a misspelled member is reported instead of silently matching
nothing.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any


__all__ = [
    "InvalidSelectorError",
    "MemberSelector",
    "resolve_member_name",
]

MemberSelector = Callable[[Any], Any] | str
"""A single-attribute lambda (``lambda owner: owner.member``) or the member name itself."""


class InvalidSelectorError(ValueError):
    """Raised when a member selector is not a direct reference to a single public member."""

    selector: object
    """The offending selector, kept for diagnostics."""

    def __init__(self, selector: object, reason: str) -> None:
        self.selector = selector
        super().__init__(f"Invalid member selector {_describe(selector)}: {reason}")


class _MemberAccess:
    """Marker handed back by the recorder for each attribute read."""

    __slots__ = ("member_name",)

    def __init__(self, member_name: str) -> None:
        self.member_name = member_name

    def __repr__(self) -> str:
        return f"<member {self.member_name}>"


class _MemberRecorder:
    """Stand-in owner instance that records every attribute read made on it."""

    __slots__ = ("_accesses",)

    def __init__(self) -> None:
        object.__setattr__(self, "_accesses", [])

    def __getattribute__(self, name: str) -> _MemberAccess:
        access = _MemberAccess(name)
        object.__getattribute__(self, "_accesses").append(access)
        return access

    def __setattr__(self, name: str, value: Any) -> None:
        raise TypeError("member selectors must not assign attributes")


def _recorded_accesses(recorder: _MemberRecorder) -> list[_MemberAccess]:
    return list(object.__getattribute__(recorder, "_accesses"))


def _describe(selector: object) -> str:
    code = getattr(selector, "__code__", None)
    if code is not None:
        name = getattr(selector, "__qualname__", "<selector>")
        return f"{name} ({code.co_filename}:{code.co_firstlineno})"
    return repr(selector)


def _annotated_names(owner_type: type) -> set[str]:
    names: set[str] = set()
    for klass in owner_type.__mro__:
        names.update(inspect.get_annotations(klass))
    return names


def resolve_member_name(selector: MemberSelector, owner_type: type | None = None) -> str:
    """
    Return the name of the member referenced by `selector`.

    :param selector: ``lambda owner: owner.member`` or a member name string.
    :param owner_type: Owner type; when annotated, the name must be one of its members.
    :return str: The referenced member name.
    :raises InvalidSelectorError: If the selector is not a direct member reference.
    """
    owner = f" on {owner_type.__name__}" if owner_type is not None else ""

    if isinstance(selector, str):
        if not selector.isidentifier():
            raise InvalidSelectorError(selector, f"{selector!r} is not a member name{owner}")
        member_name = selector
    elif callable(selector) and not isinstance(selector, type):
        recorder = _MemberRecorder()
        try:
            result = selector(recorder)
        except Exception as exc:
            raise InvalidSelectorError(
                selector, f"evaluating it raised {type(exc).__name__}: {exc}"
            ) from exc
        accesses = _recorded_accesses(recorder)
        if type(result) is not _MemberAccess or len(accesses) != 1 or result is not accesses[0]:
            raise InvalidSelectorError(
                selector, f"expected a single direct member access such as `lambda o: o.name`{owner}"
            )
        member_name = result.member_name
    else:
        raise InvalidSelectorError(selector, "expected a callable or a member name")

    if member_name.startswith("_"):
        raise InvalidSelectorError(selector, f"{member_name!r} is not a public member{owner}")
    if owner_type is not None:
        annotated = _annotated_names(owner_type)
        if annotated and member_name not in annotated and not hasattr(owner_type, member_name):
            raise InvalidSelectorError(
                selector, f"{member_name!r} is not a member of {owner_type.__name__}"
            )
    return member_name


# End of file: src/mstair/objprint/printing/selector.py
