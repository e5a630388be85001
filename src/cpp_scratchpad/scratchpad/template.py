"""Copy the project template into a fresh scratch directory."""

import shutil
import tempfile
from pathlib import Path

from cpp_scratchpad.errors import TemplateMissing
from cpp_scratchpad.tools.registry import BUILDDIR

SCRATCH_PREFIX = "scratch-"


def ensure_template(template_dir: Path | str) -> Path:
    """Return the template directory, or raise TemplateMissing."""
    template = Path(template_dir)
    if not template.is_dir():
        raise TemplateMissing(f"Template directory not found: {template}")
    return template


def copy_template(template_dir: Path | str, scratch_root: Path | str) -> Path:
    """Copy the template into a new directory under ``scratch_root``.

    A ``builddir`` left in the template is not copied.

    Args:
        template_dir: Template to copy.
        scratch_root: Parent for the new directory; created if absent.

    Returns:
        Absolute path of the new scratch directory.
    """
    template = ensure_template(template_dir)
    root = Path(scratch_root)
    root.mkdir(parents=True, exist_ok=True)

    target = Path(tempfile.mkdtemp(prefix=SCRATCH_PREFIX, dir=root)).resolve()
    try:
        shutil.copytree(
            template,
            target,
            ignore=shutil.ignore_patterns(BUILDDIR),
            dirs_exist_ok=True,
        )
    except OSError:
        shutil.rmtree(target, ignore_errors=True)
        raise
    return target
