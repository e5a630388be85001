"""Disposable C++ projects, compiled and run in one step."""

__version__ = "0.1.0"
