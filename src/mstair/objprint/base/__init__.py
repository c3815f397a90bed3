"""
package: mstair.objprint.base
"""

# <AUTOGEN_INIT>
from mstair.objprint.base import (
    caller_module,
    config,
    constants,
    fs_helpers,
    types,
)


__all__ = [
    "caller_module",
    "config",
    "constants",
    "fs_helpers",
    "types",
]
# </AUTOGEN_INIT>
