from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class EmbeddingConfig:
    model_name: str = os.getenv("EMBEDDING_MODEL", "all-MiniLM-L6-v2")
    dimension: int = 384

    # Component weights for the combined taste vector
    taste_weight: float = 0.3
    chat_weight: float = 0.4
    reviews_weight: float = 0.3

    max_signals: int = 50
    max_chat_signals: int = 20
    max_review_signals: int = 20
    min_text_length: int = 10

    @property
    def weights(self) -> dict[str, float]:
        return {
            "taste": self.taste_weight,
            "chat": self.chat_weight,
            "reviews": self.reviews_weight,
        }


DEFAULT_EMBEDDING_CONFIG = EmbeddingConfig()
