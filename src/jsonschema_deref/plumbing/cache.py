"""Cache of parsed documents keyed by absolute locator."""

import logging
import threading
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class DocumentCache:
    """Parsed documents, loaded at most once per locator.

    Population of each locator is serialized by its own lock, so threads
    sharing a cache never fetch the same document twice.
    """

    def __init__(self) -> None:
        self._documents: dict[str, Any] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def __contains__(self, locator: object) -> bool:
        return locator in self._documents

    def __len__(self) -> int:
        return len(self._documents)

    def put(self, locator: str, document: Any) -> None:
        with self._guard:
            self._documents[locator] = document

    def get_or_load(self, locator: str, load: Callable[[str], Any]) -> Any:
        """Return the cached document, calling ``load(locator)`` on first use.

        Exceptions raised by ``load`` propagate and leave nothing cached.
        """
        if locator in self._documents:
            logger.debug(f"Document cache hit for {locator}")
            return self._documents[locator]

        with self._guard:
            lock = self._locks.setdefault(locator, threading.Lock())

        with lock:
            if locator not in self._documents:
                document = load(locator)
                self.put(locator, document)
            return self._documents[locator]

    def clear(self) -> None:
        with self._guard:
            self._documents.clear()
            self._locks.clear()
