"""Resolution state threaded through the walker and resolver."""

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import Any

from jsonschema_deref.plumbing.cache import DocumentCache
from jsonschema_deref.plumbing.circular import ResolutionPathSet

Fetch = Callable[[str], bytes]
Parse = Callable[[bytes], Any]


@dataclass(frozen=True)
class ResolverContext:
    """Where the walker currently is, plus state shared by one resolution run.

    ``base`` and ``pointer`` change as the walk descends; ``cache`` and
    ``active`` are shared by every derived context.
    """

    base: str
    pointer: str = ""
    cache: DocumentCache = field(default_factory=DocumentCache)
    active: ResolutionPathSet = field(default_factory=ResolutionPathSet)

    def at(self, pointer: str) -> "ResolverContext":
        return replace(self, pointer=pointer)

    def rebased(self, base: str, pointer: str = "") -> "ResolverContext":
        return replace(self, base=base, pointer=pointer)

    @property
    def location(self) -> str:
        return f"{self.base}#{self.pointer}"
