# File: src/mstair/objprint/base/types.py

import datetime
from decimal import Decimal
from fractions import Fraction
from typing import Final, Self, TypeAlias


# ---------- Static typing aliases (for annotations) ----------

TerminalTypes: TypeAlias = (
    int
    | float
    | complex
    | bool
    | str
    | Decimal
    | datetime.datetime
    | datetime.date
    | datetime.time
    | datetime.timedelta
)

# ---------- Runtime tuples (for exact-type membership and isinstance) ----------

TERMINAL_TYPES: Final[tuple[type, ...]] = (
    int,
    float,
    complex,
    bool,
    str,
    Decimal,
    datetime.datetime,
    datetime.date,
    datetime.time,
    datetime.timedelta,
)
"""Types the printer renders via str() instead of descending into their members."""

PRIMITIVE_TYPES: Final[tuple[type, ...]] = (
    int,
    float,
    complex,
    bool,
    Decimal,
    Fraction,
    str,
    type(None),
)
"""Types that logging passes through to %-formatting untouched."""


class Sentinel:
    """
    Robust singleton base class for sentinel objects such as MISSING.

    Behaves as a falsy, unique, singleton marker, distinct from None.
    """

    __slots__ = ()

    _repr_name: str = "SENTINEL"

    def __repr__(self) -> str:
        return self._repr_name

    def __str__(self) -> str:
        return self._repr_name

    def __bool__(self) -> bool:
        return False

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __copy__(self) -> Self:
        return self

    def __deepcopy__(
        self,
        _memo: dict[int, object],
    ) -> Self:
        return self

    def __new__(cls) -> Self:
        if "_instance" in cls.__dict__:
            return cls.__dict__["_instance"]
        instance = super().__new__(cls)
        setattr(cls, "_instance", instance)
        return instance


class Missing(Sentinel):
    """Singleton indicating a missing or unset value."""

    _repr_name = "MISSING"


MISSING: Final[Missing] = Missing()


# End of file: src/mstair/objprint/base/types.py
