"""Command-line interface for cpp-scratchpad.

Usage:
    cpp-scratchpad new [--template DIR] [--edit]
    cpp-scratchpad compile [PATH] [--no-run]
    cpp-scratchpad destroy PATH
    cpp-scratchpad session [--template DIR] [--no-run]
    cpp-scratchpad list
    cpp-scratchpad tools
"""

import argparse
import logging
import sys

from cpp_scratchpad import __version__
from cpp_scratchpad.cli.scratch import (
    cmd_compile,
    cmd_destroy,
    cmd_list,
    cmd_new,
    cmd_session,
)
from cpp_scratchpad.cli.tools import cmd_tools


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cpp-scratchpad",
        description="Disposable C++ projects, compiled and run in one step",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--config", default=None,
        help="Path to config.yaml (default: ~/.config/cpp-scratchpad/config.yaml)",
    )
    parser.add_argument(
        "--scratch-dir", default=None,
        help="Directory scratchpads are created under",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command")

    new = sub.add_parser("new", help="Create a scratchpad from the template")
    new.add_argument("--template", default=None, help="Template directory")
    new.add_argument(
        "--edit", action="store_true",
        help="Open the entry file in $VISUAL/$EDITOR",
    )

    comp = sub.add_parser("compile", help="Compile a scratchpad and run it")
    comp.add_argument(
        "path", nargs="?", default=None,
        help="Scratchpad directory (default: current directory)",
    )
    comp.add_argument(
        "--no-run", action="store_true",
        help="Build only, do not run the binary",
    )

    des = sub.add_parser("destroy", help="Delete a scratchpad")
    des.add_argument("path", help="Scratchpad directory")

    ses = sub.add_parser(
        "session", help="Create, edit, build and run until quit, then delete",
    )
    ses.add_argument("--template", default=None, help="Template directory")
    ses.add_argument(
        "--no-run", action="store_true",
        help="Build only, do not run the binary",
    )

    sub.add_parser("list", help="List existing scratchpads")
    sub.add_parser("tools", help="Show configured build tools")

    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    level = logging.WARNING
    if args.verbose:
        level = logging.INFO
    if args.debug:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 0

    _configure_logging(args)

    dispatch = {
        "new": cmd_new,
        "compile": cmd_compile,
        "destroy": cmd_destroy,
        "session": cmd_session,
        "list": cmd_list,
        "tools": cmd_tools,
    }

    handler = dispatch.get(args.command)
    if handler:
        return handler(args)

    parser.parse_args([args.command, "--help"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
