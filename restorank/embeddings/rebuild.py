from __future__ import annotations

import logging

import numpy as np

from ..signals.store import SignalStore
from .combine import combine_embeddings
from .config import DEFAULT_EMBEDDING_CONFIG, EmbeddingConfig
from .encoder import encode_text
from .store import TasteEmbedding, TasteEmbeddingStore
from .taste_text import build_chat_text, build_reviews_text, build_taste_text

logger = logging.getLogger(__name__)


def rebuild_user_embedding(
    user_id: str,
    signal_store: SignalStore,
    embedding_store: TasteEmbeddingStore,
    config: EmbeddingConfig = DEFAULT_EMBEDDING_CONFIG,
) -> TasteEmbedding | None:
    """
    Recompute and store a user's taste embedding from their recent signals.

    Returns None (and stores nothing) when the taste text is too short to be
    worth embedding. Encoder errors propagate to the caller.
    """
    signals = signal_store.list_for_user(user_id, limit=config.max_signals)
    taste_text = build_taste_text(signals)

    if len(taste_text) < config.min_text_length:
        logger.info("Not enough data to build taste embedding for user %s", user_id)
        return None

    texts = {
        "taste": taste_text,
        "chat": build_chat_text(signals, limit=config.max_chat_signals),
        "reviews": build_reviews_text(signals, limit=config.max_review_signals),
    }

    components: dict[str, np.ndarray] = {}
    for name, text in texts.items():
        if text:
            components[name] = encode_text(text, config)

    combined = combine_embeddings(components, config.weights)
    if combined is None:
        return None

    record = TasteEmbedding(
        user_id=user_id,
        taste_text=taste_text,
        components=components,
        combined=combined,
        signals_used=len(signals),
    )
    embedding_store.put(record)
    logger.info(
        "Rebuilt taste embedding for user %s from %d signals (%s)",
        user_id, len(signals), ", ".join(sorted(components)),
    )
    return record
