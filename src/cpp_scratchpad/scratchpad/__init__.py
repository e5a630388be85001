"""Template-seeded C++ projects built in a temp directory."""

from cpp_scratchpad.scratchpad.manager import (
    SCRATCHPAD_MODE,
    ScratchpadInstance,
    ScratchpadManager,
)
from cpp_scratchpad.scratchpad.template import copy_template, ensure_template

__all__ = [
    "SCRATCHPAD_MODE",
    "ScratchpadInstance",
    "ScratchpadManager",
    "copy_template",
    "ensure_template",
]
