"""
package: mstair.objprint.printing
"""

# <AUTOGEN_INIT>
from mstair.objprint.printing import (
    member,
    object_printer,
    printing_config,
    selector,
    terminal_types,
)


__all__ = [
    "member",
    "object_printer",
    "printing_config",
    "selector",
    "terminal_types",
]
# </AUTOGEN_INIT>
