# File: src/mstair/objprint/base/constants.py
"""
Fixed layout and sentinel constants shared by the printer and its tests.
"""

from __future__ import annotations

from typing import Final


MAX_NESTING_LEVEL: Final[int] = 5
"""Deepest nesting level that is still expanded; deeper branches are truncated."""

NEWLINE: Final[str] = "\n"
"""Line break appended after every leaf value."""

INDENT: Final[str] = "\t"
"""One indentation level."""

# In-band sentinel text emitted instead of raising

NULL_TEXT: Final[str] = "null"
CYCLE_REFERENCE_TEXT: Final[str] = "Cycle reference"
NESTING_EXCEEDED_TEXT: Final[str] = "Nesting level is exceeded"

# Line labels for container entries

KEY_LABEL: Final[str] = "Key"
VALUE_LABEL: Final[str] = "Value"
ELEMENT_LABEL: Final[str] = "Element"
MEMBER_ASSIGNMENT: Final[str] = " = "


# End of file: src/mstair/objprint/base/constants.py
