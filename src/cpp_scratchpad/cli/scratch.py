"""Scratchpad CLI commands."""

import argparse
import os
import shlex
import subprocess
import sys
from pathlib import Path

from cpp_scratchpad.config import load_config
from cpp_scratchpad.errors import ScratchpadError
from cpp_scratchpad.scratchpad.manager import ScratchpadManager
from cpp_scratchpad.tools.registry import BUILDDIR


def _manager(args: argparse.Namespace) -> ScratchpadManager:
    config = load_config(
        args.config,
        scratch_dir=getattr(args, "scratch_dir", None),
        template_dir=getattr(args, "template", None),
    )
    return ScratchpadManager(config, echo=sys.stdout)


def _open_editor(path: Path) -> int:
    editor = os.environ.get("VISUAL") or os.environ.get("EDITOR")
    if not editor:
        print(f"  No $VISUAL or $EDITOR set; edit {path} by hand")
        return 0
    return subprocess.run(shlex.split(editor) + [str(path)]).returncode


def _report_build(ok: bool, run: bool) -> None:
    if ok:
        print("\n  Build succeeded" + ("" if run else " (not run)"))
    else:
        print("\n  Build FAILED")


def cmd_new(args: argparse.Namespace) -> int:
    try:
        manager = _manager(args)
        instance = manager.create()
    except (ScratchpadError, ValueError) as e:
        print(f"  ERROR: {e}")
        return 1

    print(f"  Created scratchpad: {instance.path}")
    print(f"  Entry file: {instance.display.path} (offset {instance.display.point})")
    if args.edit:
        _open_editor(instance.display.path)
    return 0


def cmd_compile(args: argparse.Namespace) -> int:
    try:
        manager = _manager(args)
        instance = manager.attach(args.path or Path.cwd())
        ok = manager.compile(instance, run=not args.no_run)
    except (ScratchpadError, ValueError) as e:
        print(f"  ERROR: {e}")
        return 1

    _report_build(ok, not args.no_run)
    return 0 if ok else 1


def cmd_destroy(args: argparse.Namespace) -> int:
    try:
        manager = _manager(args)
        instance = manager.attach(args.path)
    except (ScratchpadError, ValueError) as e:
        print(f"  ERROR: {e}")
        return 1

    instance.display.close()
    print(f"  Removed {instance.path}")
    return 0


def cmd_session(args: argparse.Namespace) -> int:
    try:
        manager = _manager(args)
        instance = manager.create()
    except (ScratchpadError, ValueError) as e:
        print(f"  ERROR: {e}")
        return 1

    print(f"  Scratchpad: {instance.path}")
    ok = False
    try:
        while True:
            _open_editor(instance.display.path)
            instance.display.revert()
            ok = manager.compile(instance, run=not args.no_run)
            _report_build(ok, not args.no_run)

            answer = input("\n  [r]ebuild / [q]uit: ").strip().lower()
            if answer.startswith("q"):
                break
    except (EOFError, KeyboardInterrupt):
        print()
    finally:
        instance.display.close()
        print(f"  Removed {instance.path}")
    return 0 if ok else 1


def cmd_list(args: argparse.Namespace) -> int:
    try:
        manager = _manager(args)
    except (ScratchpadError, ValueError) as e:
        print(f"  ERROR: {e}")
        return 1

    scratchpads = manager.list_scratchpads()
    if not scratchpads:
        print(f"  No scratchpads under {manager.config.scratch_root}")
        return 0

    for path in scratchpads:
        built = "built" if (path / BUILDDIR).is_dir() else "-"
        print(f"  {path.name:<30} {built:<6} {path}")
    print(f"\n  {len(scratchpads)} scratchpad(s)")
    return 0
