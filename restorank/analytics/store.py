from __future__ import annotations

import threading
import time
from typing import Any

_MAX_EVENTS = 10_000

_events: list[dict[str, Any]] = []
_lock = threading.Lock()


def record_event(event_type: str, data: dict[str, Any]) -> None:
    """Append an operational event (ranking call, signal, rebuild)."""
    with _lock:
        _events.append({
            "type": event_type,
            "timestamp": time.time(),
            **data,
        })
        # Bounded: drop the oldest events once the log is full
        if len(_events) > _MAX_EVENTS:
            del _events[: len(_events) - _MAX_EVENTS]


def get_events(event_type: str | None = None) -> list[dict[str, Any]]:
    with _lock:
        if event_type is None:
            return list(_events)
        return [e for e in _events if e["type"] == event_type]


def clear_events() -> None:
    with _lock:
        _events.clear()
