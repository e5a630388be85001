"""Scratchpad lifecycle: create from template, compile and run, tear down."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, TextIO

from cpp_scratchpad.buffers import OutputBuffer, SourceBuffer
from cpp_scratchpad.config import ScratchConfig
from cpp_scratchpad.errors import MarkerMissing, NoBuildToolFound, NotInScratchpad, TemplateMissing
from cpp_scratchpad.hooks import Hook, HookList
from cpp_scratchpad.scratchpad import build
from cpp_scratchpad.scratchpad.template import copy_template, ensure_template
from cpp_scratchpad.tools.registry import BuildTool

logger = logging.getLogger(__name__)

SCRATCHPAD_MODE = "cpp-scratchpad"


@dataclass
class ScratchpadInstance:
    """One scratch project on disk and the buffers showing it.

    ``output`` is replaced on every compile; only the newest one is live.
    """

    path: Path
    display: SourceBuffer
    output: OutputBuffer | None = None
    close_hook: Hook | None = field(default=None, repr=False)

    @property
    def builddir(self) -> Path:
        return self.path / build.BUILDDIR


class ScratchpadManager:
    """Creates, compiles and destroys scratchpads for one configuration.

    Args:
        config: Settings built once at start-up.
        echo: Stream that output buffers mirror build output onto.
        runner: Command runner handed to output buffers in terminal mode.
    """

    def __init__(
        self,
        config: ScratchConfig,
        echo: TextIO | None = None,
        runner: Callable[[str, Path], int] | None = None,
    ) -> None:
        self.config = config
        self.echo = echo
        self.runner = runner
        self.pre_compile_hooks = HookList("pre-compile")
        self.pre_destroy_hooks = HookList("pre-destroy")

    # ── Creation ────────────────────────────────────────────────────

    def create(self) -> ScratchpadInstance:
        """Copy the template into a new scratch directory and open it.

        Raises:
            TemplateMissing: If the template directory or its entry file
                does not exist. Nothing is written in the first case.
            MarkerMissing: If the entry file has no marker.
        """
        ensure_template(self.config.template_dir)
        path = copy_template(self.config.template_dir, self.config.scratch_root)
        logger.info("Created scratchpad %s", path)

        try:
            display = self._open_entry(path)
            if display.take_marker(self.config.marker) < 0:
                raise MarkerMissing(
                    f"No {self.config.marker!r} marker in {self.config.entry_file}"
                )
        except (TemplateMissing, MarkerMissing):
            shutil.rmtree(path)
            raise
        display.save()

        instance = self._adopt(path, display)
        try:
            self.regenerate_build_files(instance)
        except NoBuildToolFound as e:
            logger.warning("%s; scratchpad created without a build directory", e)
        return instance

    def attach(self, path: Path | str) -> ScratchpadInstance:
        """Open an existing scratchpad created by an earlier process.

        Raises:
            NotInScratchpad: If ``path`` is not a scratch directory.
        """
        scratch = Path(path).expanduser().resolve()
        root = self.config.scratch_root.expanduser().resolve()
        entry = scratch / self.config.entry_file
        if scratch.parent != root or not entry.is_file():
            raise NotInScratchpad(f"Not a scratchpad: {scratch}")
        return self._adopt(scratch, SourceBuffer.visit(entry))

    def list_scratchpads(self) -> list[Path]:
        """Scratch directories currently under the scratch root."""
        root = self.config.scratch_root
        if not root.is_dir():
            return []
        return sorted(
            child for child in root.iterdir()
            if child.is_dir() and (child / self.config.entry_file).is_file()
        )

    def _open_entry(self, path: Path) -> SourceBuffer:
        entry = path / self.config.entry_file
        if not entry.is_file():
            raise TemplateMissing(f"Template has no entry file {self.config.entry_file}")
        return SourceBuffer.visit(entry)

    def _adopt(self, path: Path, display: SourceBuffer) -> ScratchpadInstance:
        instance = ScratchpadInstance(path=path, display=display)
        display.modes.add(SCRATCHPAD_MODE)

        def close_hook() -> None:
            self.destroy(instance)

        instance.close_hook = close_hook
        display.close_hooks.register(close_hook)
        return instance

    # ── Building ────────────────────────────────────────────────────

    def regenerate_build_files(
        self,
        instance: ScratchpadInstance,
        sink: Callable[[str], None] | None = None,
    ) -> bool:
        """Delete builddir and regenerate it with the default build tool.

        Raises:
            NoBuildToolFound: If no configured tool resolved on PATH.
        """
        tool = self._default_tool()
        ok = build.regenerate_build_files(instance.path, tool, sink)
        if not ok:
            logger.warning("%s failed to configure %s", tool.name, instance.path)
        return ok

    def compile(self, instance: ScratchpadInstance, run: bool = True) -> bool:
        """Build the scratchpad and, on success, run the binary.

        Output goes to a fresh output buffer; the previous one is killed.
        The buffer ends in diagnostics mode when the build fails or
        ``run`` is False, and in terminal mode otherwise.

        Returns:
            True if the build succeeded.

        Raises:
            NotInScratchpad: If ``instance`` is not an open scratchpad.
        """
        self._check(instance)

        if instance.output is not None:
            instance.output.kill()
        output = OutputBuffer(
            f"*{SCRATCHPAD_MODE}: {instance.path.name}*",
            instance.path,
            echo=self.echo,
            runner=self.runner,
        )
        instance.output = output

        instance.display.save()
        self.pre_compile_hooks.run()

        try:
            ok = self._build(instance, output)
        except NoBuildToolFound as e:
            output.write(f"{e}\n")
            ok = False

        if not ok or not run:
            output.enter_diagnostics()
            return ok

        output.enter_terminal()
        status = output.send(build.RUN_COMMAND)
        logger.info("%s exited with status %d", build.BINARY_NAME, status)
        return True

    def _build(self, instance: ScratchpadInstance, output: OutputBuffer) -> bool:
        tool = self._default_tool()
        if build.needs_regeneration(instance.path, tool):
            logger.info("No %s in builddir, regenerating", tool.signature)
            if not self.regenerate_build_files(instance, output.write):
                return False
        return build.compile_project(instance.path, tool, output.write)

    def _default_tool(self) -> BuildTool:
        tool = self.config.default_tool
        if tool is None:
            names = ", ".join(t.name for t in self.config.build_tools)
            raise NoBuildToolFound(f"No build tool found on PATH (tried: {names or 'nothing'})")
        return tool

    def _check(self, instance) -> None:
        if (
            not isinstance(instance, ScratchpadInstance)
            or SCRATCHPAD_MODE not in instance.display.modes
            or not instance.path.is_dir()
        ):
            raise NotInScratchpad("Not in a scratchpad")

    # ── Teardown ────────────────────────────────────────────────────

    def destroy(self, instance: ScratchpadInstance) -> None:
        """Remove the scratch directory and kill its output buffer.

        Filesystem errors propagate. The display is left unmodified so
        closing it does not prompt to save.
        """
        self.pre_destroy_hooks.run()

        if instance.output is not None and instance.output.live:
            instance.output.kill()

        if instance.close_hook is not None:
            instance.display.close_hooks.unregister(instance.close_hook)
            instance.close_hook = None

        shutil.rmtree(instance.path)
        instance.display.modified = False
        instance.display.modes.discard(SCRATCHPAD_MODE)
        logger.info("Destroyed scratchpad %s", instance.path)
