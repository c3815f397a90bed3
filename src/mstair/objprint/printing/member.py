# File: src/mstair/objprint/printing/member.py
"""
Uniform view of the named, typed, valued slots of an object.

Python exposes instance state in several ways: dataclass fields, plain
``__dict__`` attributes, ``__slots__`` and accessor-backed ``property`` /
``functools.cached_property`` descriptors. `describe_members()` folds all
of them into one ordered list of `MemberDescriptor` objects, and
`iter_members()` turns those into read-only `Member` snapshots.

Enumeration order:

1. Dataclass fields, in declaration order.
2. Remaining instance ``__dict__`` entries, in insertion order.
3. ``__slots__`` entries, walking the MRO from base to derived.
4. Properties, walking the MRO from base to derived.

Names beginning with an underscore are not public and are never listed.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import types
import typing
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from functools import cache, cached_property
from typing import Any

from mstair.objprint.base.types import MISSING, Missing


__all__ = [
    "Member",
    "MemberDescriptor",
    "describe_members",
    "iter_members",
]

# enum.property (behind Enum.name and Enum.value) derives from DynamicClassAttribute
_ACCESSOR_TYPES: tuple[type, ...] = (property, cached_property, types.DynamicClassAttribute)

Accessor = property | cached_property[Any] | types.DynamicClassAttribute

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Member:
    """Snapshot of one member of an object at the moment the object was visited."""

    name: str
    """Attribute name, used as the key for name-based exclusions and renderers."""

    declared_type: type
    """Annotated class of the member if known, otherwise the runtime type of its value."""

    value: Any
    """Value read from the owning object."""


@dataclass(frozen=True, slots=True)
class MemberDescriptor:
    """How to read one member: its name, its annotation (if any) and a getter."""

    name: str
    annotation: type | Missing
    getter: Callable[[Any], Any]

    def snapshot(self, owner: Any) -> Member:
        """Read the member from `owner` and resolve its declared type."""
        value = self.getter(owner)
        declared_type = self.annotation if isinstance(self.annotation, type) else type(value)
        return Member(name=self.name, declared_type=declared_type, value=value)


def _is_public(name: str) -> bool:
    return not name.startswith("_")


def _plain_class(annotation: Any) -> type | Missing:
    """
    Return the annotation if it is a plain class usable as a type key, else MISSING.

    ``X | None`` and ``Optional[X]`` count as `X`, so a nullable member keeps
    the same declared type whether or not it currently holds a value.
    """
    if annotation is Any:
        return MISSING
    if typing.get_origin(annotation) in (types.UnionType, typing.Union):
        non_null = [arg for arg in typing.get_args(annotation) if arg is not types.NoneType]
        if len(non_null) != 1:
            return MISSING
        annotation = non_null[0]
        if annotation is Any:
            return MISSING
    if isinstance(annotation, type) and typing.get_origin(annotation) is None:
        return annotation
    return MISSING


@cache
def _field_annotations(cls: type) -> dict[str, Any]:
    """Resolved class-level annotations across the MRO; unresolvable entries stay as strings."""
    try:
        return typing.get_type_hints(cls)
    except Exception:
        hints: dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            try:
                hints.update(inspect.get_annotations(klass))
            except Exception:
                continue
        return hints


def _accessor_annotation(accessor: Accessor) -> type | Missing:
    """Return the return annotation of a property getter, if it is a plain class."""
    fget = accessor.func if isinstance(accessor, cached_property) else accessor.fget
    if fget is None:
        return MISSING
    try:
        hints = typing.get_type_hints(fget)
    except Exception:
        return MISSING
    return _plain_class(hints.get("return", MISSING))


@cache
def _class_accessors(cls: type) -> dict[str, Accessor]:
    """Public properties visible on `cls`, in base-to-derived definition order."""
    accessors: dict[str, Accessor] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name, attr in vars(klass).items():
            if not _is_public(name):
                continue
            if isinstance(attr, _ACCESSOR_TYPES) and getattr(attr, "member", None) is None:
                accessors.setdefault(name, attr)
            else:
                # A derived class shadowed the property with something else
                accessors.pop(name, None)
    return accessors


@cache
def _class_slots(cls: type) -> tuple[str, ...]:
    """Public ``__slots__`` names declared along the MRO, base first."""
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if _is_public(name) and name not in names:
                names.append(name)
    return tuple(names)


def _field_getter(name: str) -> Callable[[Any], Any]:
    def _get(owner: Any) -> Any:
        return getattr(owner, name)

    return _get


def describe_members(obj: Any) -> list[MemberDescriptor]:
    """
    Return descriptors for the public instance fields and properties of `obj`.

    Fields that are declared but not yet assigned (an ``init=False`` dataclass field
    or an empty slot) are skipped rather than reported as errors.

    :param obj: The object whose members are described.
    :return list[MemberDescriptor]: Descriptors in enumeration order.
    """
    cls = type(obj)
    accessors = _class_accessors(cls)
    annotations = _field_annotations(cls)

    field_names: list[str] = []
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        field_names.extend(f.name for f in dataclasses.fields(obj))
    instance_dict = getattr(obj, "__dict__", None)
    if isinstance(instance_dict, dict):
        field_names.extend(k for k in list(instance_dict) if isinstance(k, str))
    field_names.extend(_class_slots(cls))

    descriptors: list[MemberDescriptor] = []
    seen: set[str] = set()
    for name in field_names:
        if name in seen or not _is_public(name) or name in accessors:
            continue
        seen.add(name)
        if not hasattr(obj, name):
            _LOG.debug("Skipping unassigned field: %s.%s", cls.__name__, name)
            continue
        descriptors.append(
            MemberDescriptor(
                name=name,
                annotation=_plain_class(annotations.get(name, MISSING)),
                getter=_field_getter(name),
            )
        )

    for name, accessor in accessors.items():
        descriptors.append(
            MemberDescriptor(
                name=name,
                annotation=_accessor_annotation(accessor),
                getter=_field_getter(name),
            )
        )
    return descriptors


def iter_members(obj: Any) -> Iterator[Member]:
    """
    Yield a `Member` snapshot for each public member of `obj`.

    Snapshots are taken lazily, one at a time, so a getter runs only when the
    caller reaches its member. Exceptions raised by a getter propagate.
    """
    for descriptor in describe_members(obj):
        yield descriptor.snapshot(obj)


# End of file: src/mstair/objprint/printing/member.py
