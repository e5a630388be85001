"""Shell out to the selected build tool inside a scratch directory."""

import contextlib
import logging
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Callable

from cpp_scratchpad.tools.registry import BUILDDIR, BuildTool

logger = logging.getLogger(__name__)

BINARY_NAME = "scratchpad"
COMPILE_COMMANDS = "compile_commands.json"
RUN_COMMAND = f"cd {BUILDDIR} && ./{BINARY_NAME}"


def shell_command(cwd: Path | str, command: str) -> str:
    """Prefix ``command`` with a ``cd`` into ``cwd``."""
    return f"cd {shlex.quote(str(cwd))} && {command}"


def _run_shell(
    command: str,
    cwd: Path,
    sink: Callable[[str], None] | None = None,
) -> int:
    """Run a shell command, streaming combined stdout/stderr into ``sink``."""
    full = shell_command(cwd, command)
    logger.info("Running: %s", full)
    with subprocess.Popen(
        full,
        shell=True,
        cwd=cwd,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        encoding="utf-8",
        errors="replace",
    ) as proc:
        for line in proc.stdout:
            if sink is not None:
                sink(line)
            else:
                logger.debug("%s", line.rstrip("\n"))
    returncode = proc.returncode
    logger.info("Exit status %d: %s", returncode, command)
    return returncode


def link_compile_commands(root: Path | str) -> None:
    """Point ``<root>/compile_commands.json`` at the one in builddir.

    The link is made even when the build tool did not emit the file. Any
    OSError is ignored.
    """
    link = Path(root) / COMPILE_COMMANDS
    with contextlib.suppress(OSError):
        if link.is_symlink() or link.exists():
            link.unlink()
        link.symlink_to(Path(BUILDDIR) / COMPILE_COMMANDS)


def regenerate_build_files(
    root: Path | str,
    tool: BuildTool,
    sink: Callable[[str], None] | None = None,
) -> bool:
    """Recreate ``builddir`` from scratch with ``tool``.

    Args:
        root: Scratch directory.
        tool: Build tool whose ``builddir_gen`` command is run.
        sink: Receives the command's output line by line.

    Returns:
        True if the generation command exited with status 0.
    """
    root_path = Path(root)
    builddir = root_path / BUILDDIR
    if builddir.is_symlink():
        builddir.unlink()
    elif builddir.exists():
        shutil.rmtree(builddir)

    if _run_shell(tool.builddir_gen, root_path, sink) != 0:
        return False

    link_compile_commands(root_path)
    return True


def needs_regeneration(root: Path | str, tool: BuildTool) -> bool:
    """True if builddir was not configured by ``tool``."""
    return not tool.signature_path(root).exists()


def compile_project(
    root: Path | str,
    tool: BuildTool,
    sink: Callable[[str], None] | None = None,
) -> bool:
    """Run ``tool``'s compile command. Returns True on exit status 0."""
    return _run_shell(tool.compile, Path(root), sink) == 0
