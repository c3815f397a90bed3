# File: src/mstair/objprint/base/caller_module.py

import inspect
from types import FrameType


__all__ = [
    "caller_module_name",
]


def caller_module_name(*, stacklevel: int = 1) -> str:
    """
    Return the ``__name__`` of the module `stacklevel` frames above the caller.

    :param stacklevel: 1 names the module of the function calling this one.
    :return str: The module name, or "" when the stack is shorter than requested.
    """
    if stacklevel < 1:
        raise ValueError("stacklevel must be greater than 0")

    frame: FrameType | None = inspect.currentframe()
    try:
        for _ in range(stacklevel):
            if frame is None:
                return ""
            frame = frame.f_back
        if frame is None:
            return ""
        return str(frame.f_globals.get("__name__", ""))
    finally:
        # Break reference cycle: frame -> f_locals -> frame
        del frame


# End of file: src/mstair/objprint/base/caller_module.py
