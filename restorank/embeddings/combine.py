from __future__ import annotations

from typing import Mapping

import numpy as np


def combine_embeddings(
    components: Mapping[str, np.ndarray | None],
    weights: Mapping[str, float],
) -> np.ndarray | None:
    """
    Weighted average of the available component vectors.

    Missing components (None or without a weight) are skipped and the
    remaining weights renormalised. Returns None when nothing is available.
    """
    vectors: list[np.ndarray] = []
    used_weights: list[float] = []
    for name, vector in components.items():
        weight = weights.get(name, 0.0)
        if vector is None or weight <= 0:
            continue
        vectors.append(np.asarray(vector, dtype=np.float32))
        used_weights.append(weight)

    if not vectors:
        return None

    stacked = np.vstack(vectors)
    w = np.asarray(used_weights, dtype=np.float32)
    return (w @ stacked) / w.sum()
