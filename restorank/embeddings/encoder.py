from __future__ import annotations

import threading

import numpy as np
from sentence_transformers import SentenceTransformer

from .config import DEFAULT_EMBEDDING_CONFIG, EmbeddingConfig

_model: SentenceTransformer | None = None
_model_lock = threading.Lock()


def _get_model(config: EmbeddingConfig = DEFAULT_EMBEDDING_CONFIG) -> SentenceTransformer:
    # Loaded on first use; rebuilds run on worker threads
    global _model
    with _model_lock:
        if _model is None:
            _model = SentenceTransformer(config.model_name)
        return _model


def encode_text(text: str, config: EmbeddingConfig = DEFAULT_EMBEDDING_CONFIG) -> np.ndarray:
    """Encode a single string into a 1-D float32 embedding vector."""
    model = _get_model(config)
    return np.asarray(model.encode(text, show_progress_bar=False), dtype=np.float32)
