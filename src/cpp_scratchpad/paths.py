"""Scratchpad path resolution.

Resolves the canonical locations cpp-scratchpad reads from and writes to.
Uses environment variables when available, falls back to conventional
defaults.

Environment variables:
    CPP_SCRATCHPAD_CONFIG: config file (default: ~/.config/cpp-scratchpad/config.yaml)
    CPP_SCRATCHPAD_DIR: root for scratch directories (default: <tmp>/cpp-scratchpad)
    CPP_SCRATCHPAD_TEMPLATE: template directory (default: built-in template)
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

_DEFAULT_CONFIG = Path.home() / ".config" / "cpp-scratchpad" / "config.yaml"
_BUILTIN_TEMPLATE = Path(__file__).parent / "template"


def config_path() -> Path:
    """Return the path to the YAML config file."""
    return Path(os.environ.get("CPP_SCRATCHPAD_CONFIG", str(_DEFAULT_CONFIG))).expanduser()


def scratch_root() -> Path:
    """Return the directory scratchpads are created under."""
    env = os.environ.get("CPP_SCRATCHPAD_DIR")
    if env:
        return Path(env).expanduser()
    return Path(tempfile.gettempdir()) / "cpp-scratchpad"


def template_dir() -> Path:
    """Return the template directory copied into each new scratchpad."""
    env = os.environ.get("CPP_SCRATCHPAD_TEMPLATE")
    if env:
        return Path(env).expanduser()
    return builtin_template_dir()


def builtin_template_dir() -> Path:
    """Return the template shipped with the package."""
    return _BUILTIN_TEMPLATE
