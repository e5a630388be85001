"""Errors raised by scratchpad operations."""


class ScratchpadError(Exception):
    """Base class for all cpp-scratchpad errors."""


class TemplateMissing(ScratchpadError, FileNotFoundError):
    """The configured template directory does not exist."""


class MarkerMissing(ScratchpadError, ValueError):
    """The template's entry file has no point-placement marker."""


class NotInScratchpad(ScratchpadError, ValueError):
    """An operation was invoked on a directory that is not a scratchpad."""


class NoBuildToolFound(ScratchpadError, RuntimeError):
    """None of the configured build tools resolves on PATH."""
