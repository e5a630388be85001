"""Build tool CLI commands."""

import argparse
import shutil

from cpp_scratchpad.config import load_config
from cpp_scratchpad.errors import ScratchpadError


def cmd_tools(args: argparse.Namespace) -> int:
    try:
        config = load_config(args.config)
    except (ScratchpadError, ValueError) as e:
        print(f"  ERROR: {e}")
        return 1

    print(f"\n  {'Tool':<10} {'Found':<6} {'Signature':<16} Commands")
    print(f"  {'─' * 72}")
    for tool in config.build_tools:
        marker = "*" if tool == config.default_tool else " "
        found = "yes" if shutil.which(tool.name) else "no"
        print(f"{marker} {tool.name:<10} {found:<6} {tool.signature:<16} {tool.builddir_gen}")
        print(f"  {'':<34} {tool.compile}")

    if config.default_tool is None:
        print("\n  No build tool found on PATH")
        return 1
    print(f"\n  Active: {config.default_tool.name}")
    return 0
