"""
In-memory response cache for the auto-fill assistant.

Keyed by (mode, input, user id). Callers pass exactly the text their
computation sees, so a hit returns what a fresh call would have returned.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from typing import Callable, Generic, TypeVar

from part450_portal.utils.hashing import composite_key

logger = logging.getLogger(__name__)

V = TypeVar("V")


class ResponseCache(Generic[V]):
    def __init__(
        self,
        max_entries: int = 256,
        ttl_seconds: float = 900.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: OrderedDict[str, tuple[float, V]] = OrderedDict()
        self._lock = threading.Lock()

    def make_key(self, mode: str, user_input: str, user_id: str = "") -> str:
        return composite_key(mode, user_input or "", user_id or "")

    def get(self, key: str) -> V | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, value = entry
            if self._clock() - stored_at > self.ttl_seconds:
                del self._entries[key]
                return None
            self._entries.move_to_end(key)
            return value

    def put(self, key: str, value: V) -> None:
        if self.max_entries <= 0:
            return
        with self._lock:
            self._entries[key] = (self._clock(), value)
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"[CACHE] Evicted {evicted[:12]}…")

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
