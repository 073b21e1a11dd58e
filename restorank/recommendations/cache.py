from __future__ import annotations

import hashlib
import json
import threading
import time
from typing import Any, Callable

_DEFAULT_TTL = 300.0  # 5 minutes
_DEFAULT_MAX_ENTRIES = 500


def make_key(request_dict: dict) -> str:
    normalized = json.dumps(request_dict, sort_keys=True, default=str)
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


class ResultCache:
    """In-memory TTL cache for ranking results.

    Owned by whoever builds the pipeline and passed in explicitly. When full,
    expired entries are dropped first, then the oldest ones.
    """

    def __init__(
        self,
        ttl: float = _DEFAULT_TTL,
        max_entries: int = _DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, request_dict: dict) -> Any | None:
        key = make_key(request_dict)
        with self._lock:
            entry = self._entries.get(key)
            if entry and self._clock() - entry["created_at"] < entry["ttl"]:
                self._hits += 1
                return entry["value"]
            if entry:
                del self._entries[key]
            self._misses += 1
            return None

    def set(self, request_dict: dict, value: Any, ttl: float | None = None) -> None:
        key = make_key(request_dict)
        with self._lock:
            if key not in self._entries and len(self._entries) >= self.max_entries:
                self._evict()
            self._entries[key] = {
                "value": value,
                "created_at": self._clock(),
                "ttl": self.ttl if ttl is None else ttl,
            }

    def delete(self, request_dict: dict) -> None:
        with self._lock:
            self._entries.pop(make_key(request_dict), None)

    def _evict(self) -> None:
        now = self._clock()
        for key in [k for k, e in self._entries.items() if now - e["created_at"] >= e["ttl"]]:
            del self._entries[key]

        overflow = len(self._entries) - self.max_entries + 1
        if overflow > 0:
            oldest = sorted(self._entries, key=lambda k: self._entries[k]["created_at"])
            for key in oldest[:overflow]:
                del self._entries[key]

    def stats(self) -> dict:
        with self._lock:
            total = self._hits + self._misses
            return {
                "size": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(self._hits / total * 100, 1) if total > 0 else 0.0,
            }

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
