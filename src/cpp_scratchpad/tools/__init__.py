"""External build systems that can drive a scratchpad."""

from cpp_scratchpad.tools.registry import (
    DEFAULT_BUILD_TOOLS,
    BuildTool,
    select_build_tool,
    tool_from_dict,
)

__all__ = [
    "DEFAULT_BUILD_TOOLS",
    "BuildTool",
    "select_build_tool",
    "tool_from_dict",
]
