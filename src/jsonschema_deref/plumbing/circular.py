"""Tracking of references that are currently being resolved."""

from collections.abc import Iterator
from contextlib import contextmanager


class ResolutionPathSet:
    """Set of ``locator#pointer`` keys on the active resolution stack.

    A key that is already present when it is met again closes a cycle.
    """

    def __init__(self) -> None:
        self._active: set[str] = set()

    @staticmethod
    def key(locator: str, pointer: str) -> str:
        return f"{locator}#{pointer}"

    def __contains__(self, key: object) -> bool:
        return key in self._active

    def __len__(self) -> int:
        return len(self._active)

    @contextmanager
    def entered(self, key: str) -> Iterator[None]:
        """Hold ``key`` on the stack for the duration of the block."""
        self._active.add(key)
        try:
            yield
        finally:
            self._active.discard(key)
