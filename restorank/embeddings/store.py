from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone

import numpy as np


@dataclass(frozen=True)
class TasteEmbedding:
    user_id: str
    taste_text: str
    components: dict[str, np.ndarray]
    combined: np.ndarray
    signals_used: int
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def summary(self) -> dict:
        return {
            "user_id": self.user_id,
            "taste_text": self.taste_text,
            "components": sorted(self.components),
            "dimension": int(self.combined.shape[0]),
            "signals_used": self.signals_used,
            "updated_at": self.updated_at.isoformat(),
        }


class TasteEmbeddingStore:
    """Latest taste embedding per user. Concurrent rebuilds: last write wins."""

    def __init__(self) -> None:
        self._records: dict[str, TasteEmbedding] = {}
        self._lock = threading.Lock()

    def put(self, record: TasteEmbedding) -> None:
        with self._lock:
            self._records[record.user_id] = record

    def get(self, user_id: str) -> TasteEmbedding | None:
        with self._lock:
            return self._records.get(user_id)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
