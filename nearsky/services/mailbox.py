"""Single-slot, latest-value-wins handoff from the tracker to readers."""

from __future__ import annotations

import threading
from typing import Optional

from nearsky.models.tracking import CycleResult


class ResultMailbox:
    """Hold the most recent cycle result.

    ``put`` replaces whatever is stored, consumed or not. Readers never
    block: ``peek`` returns the latest result and ``take`` returns it only if
    nobody has taken it since it was posted.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._result: Optional[CycleResult] = None
        self._unread = False
        self._dropped = 0

    def put(self, result: CycleResult) -> None:
        with self._lock:
            if self._unread:
                self._dropped += 1
            self._result = result
            self._unread = True

    def peek(self) -> Optional[CycleResult]:
        with self._lock:
            return self._result

    def take(self) -> Optional[CycleResult]:
        with self._lock:
            if not self._unread:
                return None
            self._unread = False
            return self._result

    @property
    def dropped(self) -> int:
        """Results overwritten before any reader took them."""

        with self._lock:
            return self._dropped


__all__ = ["ResultMailbox"]
