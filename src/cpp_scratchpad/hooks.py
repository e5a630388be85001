"""Ordered lists of zero-argument callbacks run at fixed points."""

from __future__ import annotations

from typing import Callable

Hook = Callable[[], object]


class HookList:
    """Callbacks invoked synchronously, in registration order.

    A callback registered twice runs twice. Exceptions propagate to the
    caller of :meth:`run` and stop the remaining callbacks.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._hooks: list[Hook] = []

    def register(self, hook: Hook) -> None:
        self._hooks.append(hook)

    def unregister(self, hook: Hook) -> None:
        """Remove the most recently registered occurrence of ``hook``."""
        for i in range(len(self._hooks) - 1, -1, -1):
            if self._hooks[i] == hook:
                del self._hooks[i]
                return
        raise ValueError(f"{hook!r} is not registered on {self.name}")

    def run(self) -> None:
        for hook in list(self._hooks):
            hook()

    def __len__(self) -> int:
        return len(self._hooks)

    def __iter__(self):
        return iter(list(self._hooks))
