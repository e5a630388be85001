"""In-process stand-ins for the editor surfaces a scratchpad is shown in.

SourceBuffer holds the scratchpad's entry file; OutputBuffer receives build
output and is then switched into one of two modes: a read-only diagnostics
view, or an interactive terminal that executes the commands sent to it.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path
from typing import Callable, TextIO

from cpp_scratchpad.hooks import HookList

logger = logging.getLogger(__name__)

DIAGNOSTICS = "diagnostics"
TERMINAL = "terminal"


def _read(path: Path) -> str:
    # newline="" keeps CRLF; surrogateescape round-trips non-UTF-8 bytes
    with open(path, encoding="utf-8", errors="surrogateescape", newline="") as f:
        return f.read()


def _write(path: Path, text: str) -> None:
    with open(path, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
        f.write(text)


class SourceBuffer:
    """A file-backed text buffer with a cursor and a modified flag."""

    def __init__(self, path: Path | str, text: str = "", point: int = 0) -> None:
        self.path = Path(path)
        self.text = text
        self.point = point
        self.modified = False
        self.modes: set[str] = set()
        self.close_hooks = HookList(f"close:{self.path.name}")
        self.closed = False

    @classmethod
    def visit(cls, path: Path | str) -> "SourceBuffer":
        """Open ``path`` in a new buffer with the cursor at the start."""
        file_path = Path(path)
        return cls(file_path, _read(file_path))

    def take_marker(self, marker: str) -> int:
        """Delete the first ``marker`` character and move the cursor there.

        Returns:
            The cursor offset, or -1 if the marker is absent (text unchanged).
        """
        index = self.text.find(marker)
        if index < 0:
            return -1
        self.text = self.text[:index] + self.text[index + len(marker):]
        self.point = index
        self.modified = True
        return index

    def insert(self, text: str) -> None:
        self.text = self.text[: self.point] + text + self.text[self.point:]
        self.point += len(text)
        self.modified = True

    def revert(self) -> None:
        """Reload from disk, keeping the cursor within bounds."""
        self.text = _read(self.path)
        self.point = min(self.point, len(self.text))
        self.modified = False

    def save(self) -> bool:
        """Write the buffer to disk if modified. Returns True if written."""
        if not self.modified:
            return False
        _write(self.path, self.text)
        self.modified = False
        logger.debug("Saved %s", self.path)
        return True

    def close(self) -> None:
        """Run close hooks, then mark the buffer closed. Idempotent."""
        if self.closed:
            return
        self.close_hooks.run()
        self.closed = True


class OutputBuffer:
    """Build output, followed by either diagnostics or an interactive run.

    ``echo`` mirrors everything written to the buffer onto a stream (the
    CLI passes stdout). ``runner`` executes commands sent in terminal mode;
    the default runs them through the shell attached to the real terminal.
    """

    def __init__(
        self,
        name: str,
        cwd: Path | str,
        echo: TextIO | None = None,
        runner: Callable[[str, Path], int] | None = None,
    ) -> None:
        self.name = name
        self.cwd = Path(cwd)
        self.echo = echo
        self.runner = runner or run_in_terminal
        self.lines: list[str] = []
        self.mode: str | None = None
        self.read_only = False
        self.live = True
        self.sent: list[str] = []

    @property
    def text(self) -> str:
        return "".join(self.lines)

    def write(self, chunk: str) -> None:
        if self.read_only:
            raise RuntimeError(f"Output buffer {self.name} is read-only")
        self.lines.append(chunk)
        if self.echo is not None:
            self.echo.write(chunk)
            self.echo.flush()

    def enter_diagnostics(self) -> None:
        self.mode = DIAGNOSTICS
        self.read_only = True

    def enter_terminal(self) -> None:
        self.mode = TERMINAL
        self.read_only = False

    def send(self, command: str) -> int:
        """Execute ``command`` in the terminal. Returns its exit status."""
        if self.mode != TERMINAL:
            raise RuntimeError(f"Output buffer {self.name} is not a terminal")
        if not self.live:
            raise RuntimeError(f"Output buffer {self.name} has been killed")
        self.sent.append(command)
        return self.runner(command, self.cwd)

    def kill(self) -> None:
        self.live = False


def run_in_terminal(command: str, cwd: Path) -> int:
    """Run a shell command attached to this process's stdin/stdout/stderr."""
    sys.stdout.flush()
    result = subprocess.run(command, shell=True, cwd=cwd)
    return result.returncode
