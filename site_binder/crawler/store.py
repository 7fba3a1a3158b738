"""
Shared collection of extracted page records.
"""
from __future__ import annotations

import threading
from typing import List

from site_binder.crawler.models import PageRecord


class PageStore:
    """Append-only, concurrency-safe list of :class:`PageRecord`.

    Records arrive in completion order; ordering is the synthesizer's job.
    """

    def __init__(self) -> None:
        self._records: List[PageRecord] = []
        self._lock = threading.Lock()
        self._frozen = False

    def append(self, record: PageRecord) -> None:
        with self._lock:
            if self._frozen:
                raise RuntimeError("PageStore is frozen")
            self._records.append(record)

    def snapshot(self) -> List[PageRecord]:
        """Return a copy of the records collected so far."""
        with self._lock:
            return list(self._records)

    def freeze(self) -> List[PageRecord]:
        """Stop accepting records and return the final snapshot."""
        with self._lock:
            self._frozen = True
            return list(self._records)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
