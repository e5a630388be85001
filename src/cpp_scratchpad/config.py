"""Load the scratchpad configuration from config.yaml and the environment."""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import yaml

from cpp_scratchpad import paths
from cpp_scratchpad.tools.registry import (
    DEFAULT_BUILD_TOOLS,
    BuildTool,
    select_build_tool,
    tool_from_dict,
)

logger = logging.getLogger(__name__)

DEFAULT_ENTRY_FILE = "main.cpp"
DEFAULT_MARKER = "$"


@dataclass(frozen=True)
class ScratchConfig:
    """Process-wide settings, built once at start-up and passed explicitly.

    ``default_tool`` is resolved against PATH when the config is constructed
    and never re-evaluated afterwards.
    """

    scratch_root: Path
    template_dir: Path
    entry_file: str = DEFAULT_ENTRY_FILE
    marker: str = DEFAULT_MARKER
    build_tools: tuple[BuildTool, ...] = DEFAULT_BUILD_TOOLS
    default_tool: BuildTool | None = field(default=None)

    def __post_init__(self) -> None:
        if len(self.marker) != 1:
            raise ValueError(f"marker must be a single character, got {self.marker!r}")

    @classmethod
    def build(
        cls,
        scratch_root: Path | str,
        template_dir: Path | str,
        entry_file: str = DEFAULT_ENTRY_FILE,
        marker: str = DEFAULT_MARKER,
        build_tools: tuple[BuildTool, ...] | list[BuildTool] = DEFAULT_BUILD_TOOLS,
        which: Callable[[str], str | None] = shutil.which,
    ) -> "ScratchConfig":
        """Construct a config, selecting the default tool from ``build_tools``."""
        tools = tuple(build_tools)
        default = select_build_tool(tools, which)
        if default is None:
            logger.warning(
                "No build tool found on PATH (tried: %s)",
                ", ".join(t.name for t in tools) or "nothing",
            )
        else:
            logger.info("Using build tool %s", default.name)
        return cls(
            scratch_root=Path(scratch_root).expanduser(),
            template_dir=Path(template_dir).expanduser(),
            entry_file=entry_file,
            marker=marker,
            build_tools=tools,
            default_tool=default,
        )


def read_config_file(path: Path | str) -> dict:
    """Read and parse a config.yaml file.

    Args:
        path: Path to the config file.

    Returns:
        Parsed mapping. An empty file yields an empty dict.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the top level is not a mapping.
    """
    config_file = Path(path)
    with open(config_file) as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"config at {config_file} is not a YAML mapping")
    return data


def load_config(
    path: Path | str | None = None,
    scratch_dir: Path | str | None = None,
    template_dir: Path | str | None = None,
) -> ScratchConfig:
    """Resolve the configuration.

    Precedence, highest first: explicit arguments, environment variables,
    the config file, built-in defaults. A missing config file is not an
    error unless it was named explicitly.

    Args:
        path: Config file. Defaults to ``paths.config_path()``.
        scratch_dir: Override for the scratch root.
        template_dir: Override for the template directory.

    Returns:
        A frozen ScratchConfig.
    """
    config_file = Path(path) if path else paths.config_path()
    if path or config_file.is_file():
        data = read_config_file(config_file)
        logger.debug("Loaded config from %s", config_file)
    else:
        data = {}

    tools_data = data.get("build_tools")
    if tools_data is None:
        tools = DEFAULT_BUILD_TOOLS
    elif isinstance(tools_data, list):
        tools = tuple(tool_from_dict(entry) for entry in tools_data)
    else:
        raise ValueError("build_tools must be a list")

    root = (
        scratch_dir
        or os.environ.get("CPP_SCRATCHPAD_DIR")
        or data.get("scratch_dir")
        or paths.scratch_root()
    )
    template = (
        template_dir
        or os.environ.get("CPP_SCRATCHPAD_TEMPLATE")
        or data.get("template_dir")
        or paths.template_dir()
    )

    return ScratchConfig.build(
        scratch_root=root,
        template_dir=template,
        entry_file=str(data.get("entry_file") or DEFAULT_ENTRY_FILE),
        marker=str(data.get("marker") or DEFAULT_MARKER),
        build_tools=tools,
    )
