from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class RankingConfig:
    """Pipeline settings. Scorer thresholds live in ``scoring`` and are not tunable."""

    rerank_top_n: int = int(os.getenv("RERANK_TOP_N", "15"))
    enable_diversity: bool = os.getenv("ENABLE_DIVERSITY", "true").lower() in {"1", "true", "yes", "on"}
    max_same_category: int = 3
    cache_ttl_seconds: float = 300.0
    cache_max_entries: int = 500
    log_top_k: int = 5
    picks_count: int = 3


DEFAULT_RANKING_CONFIG = RankingConfig()
