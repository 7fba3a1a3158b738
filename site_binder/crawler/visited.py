"""
Shared set of URLs already scheduled during a crawl.
"""
from __future__ import annotations

import threading
from typing import Iterator, Set


class VisitedSet:
    """Concurrency-safe, grow-only set of canonical URL strings.

    URLs are compared as exact strings; ``/docs`` and ``/docs/`` are distinct.
    """

    def __init__(self) -> None:
        self._urls: Set[str] = set()
        self._lock = threading.Lock()
        self._frozen = False

    def mark(self, url: str) -> bool:
        """Atomically insert *url*; return True only for the first caller."""
        with self._lock:
            if self._frozen:
                raise RuntimeError("VisitedSet is frozen")
            if url in self._urls:
                return False
            self._urls.add(url)
            return True

    def freeze(self) -> None:
        with self._lock:
            self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._urls

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(sorted(self._urls))
