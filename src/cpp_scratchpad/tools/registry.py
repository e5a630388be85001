"""Build tool descriptors and default-tool selection."""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

BUILDDIR = "builddir"

_REQUIRED_KEYS = ("name", "builddir_gen", "compile", "signature")


@dataclass(frozen=True)
class BuildTool:
    """How to drive one external build system.

    Both commands are shell strings run from the scratchpad root. The
    signature file is written into ``builddir/`` by ``builddir_gen`` and by
    no other tool, so its presence tells which tool configured the directory.
    """

    name: str
    builddir_gen: str
    compile: str
    signature: str

    def signature_path(self, root: Path | str) -> Path:
        return Path(root) / BUILDDIR / self.signature


# Priority order: first entry found on PATH becomes the default
DEFAULT_BUILD_TOOLS: tuple[BuildTool, ...] = (
    BuildTool(
        name="meson",
        builddir_gen=f"meson setup {BUILDDIR}",
        compile=f"ninja -C {BUILDDIR}",
        signature="build.ninja",
    ),
    BuildTool(
        name="cmake",
        builddir_gen=f"cmake -S . -B {BUILDDIR} -DCMAKE_EXPORT_COMPILE_COMMANDS=ON",
        compile=f"make -C {BUILDDIR}",
        signature="CMakeCache.txt",
    ),
)


def tool_from_dict(entry: dict) -> BuildTool:
    """Build a BuildTool from one ``build_tools`` entry of the config file.

    Raises:
        ValueError: If the entry is not a mapping or lacks a required key.
    """
    if not isinstance(entry, dict):
        raise ValueError(f"build tool entry is not a mapping: {entry!r}")
    missing = [k for k in _REQUIRED_KEYS if not entry.get(k)]
    if missing:
        raise ValueError(
            f"build tool {entry.get('name', '?')!r} missing: {', '.join(missing)}"
        )
    return BuildTool(**{k: str(entry[k]) for k in _REQUIRED_KEYS})


def select_build_tool(
    tools: tuple[BuildTool, ...] | list[BuildTool],
    which: Callable[[str], str | None] = shutil.which,
) -> BuildTool | None:
    """Return the first tool whose executable resolves on PATH.

    Args:
        tools: Build tools in priority order.
        which: Executable lookup, ``shutil.which`` by default.

    Returns:
        The selected tool, or None if no executable resolves.
    """
    for tool in tools:
        if which(tool.name):
            return tool
    return None
