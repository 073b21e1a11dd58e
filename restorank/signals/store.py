from __future__ import annotations

import threading

from .models import SignalType, TasteSignal


class SignalStore:
    """Append-only in-memory signal log.

    Signals are only ever added or deleted (by their owner), never updated.
    """

    def __init__(self) -> None:
        self._signals: list[TasteSignal] = []
        self._lock = threading.Lock()

    def append(self, signal: TasteSignal) -> TasteSignal:
        with self._lock:
            self._signals.append(signal)
        return signal

    def list_for_user(
        self,
        user_id: str,
        limit: int | None = 50,
        signal_type: SignalType | None = None,
    ) -> list[TasteSignal]:
        """Return the user's signals, newest first."""
        with self._lock:
            matches = [
                s for s in reversed(self._signals)
                if s.user_id == user_id and (signal_type is None or s.signal_type == signal_type)
            ]
        return matches if limit is None else matches[:limit]

    def count_for_user(self, user_id: str) -> int:
        with self._lock:
            return sum(1 for s in self._signals if s.user_id == user_id)

    def delete(self, user_id: str, signal_id: str) -> bool:
        """Remove one of the user's signals. Returns False if it is not theirs or unknown."""
        with self._lock:
            for i, s in enumerate(self._signals):
                if s.id == signal_id and s.user_id == user_id:
                    del self._signals[i]
                    return True
        return False

    def all(self) -> list[TasteSignal]:
        with self._lock:
            return list(self._signals)

    def clear(self) -> None:
        with self._lock:
            self._signals.clear()
