from __future__ import annotations

from collections import Counter
from typing import Any

from ..signals.models import TasteSignal


def compute_analytics(
    events: list[dict[str, Any]],
    signals: list[TasteSignal],
) -> dict[str, Any]:
    reranks = [e for e in events if e["type"] == "rerank"]
    total = len(reranks)

    # Average response time
    times = [e["response_time_ms"] for e in reranks if "response_time_ms" in e]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Average pipeline sizes
    candidates = [e.get("total_candidates", 0) for e in reranks]
    avg_candidates = round(sum(candidates) / total, 1) if total else 0.0

    # Occasion / budget tag usage
    occasion_counter: Counter[str] = Counter()
    budget_counter: Counter[str] = Counter()
    for e in reranks:
        for tag in e.get("occasions", []) or []:
            occasion_counter[tag] += 1
        if e.get("budget_tier"):
            budget_counter[e["budget_tier"]] += 1

    diversity_used = sum(1 for e in reranks if e.get("diversified"))
    with_location = sum(1 for e in reranks if e.get("has_location"))

    # Cache stats
    cache_hits = sum(1 for e in reranks if e.get("cache_hit"))
    cache_misses = total - cache_hits

    # Taste signal summary
    by_type: Counter[str] = Counter(s.signal_type.value for s in signals)
    positive = sum(1 for s in signals if s.is_positive)

    return {
        "total_reranks": total,
        "avg_response_time_ms": avg_time,
        "avg_candidates": avg_candidates,
        "occasion_usage": dict(occasion_counter),
        "budget_usage": dict(budget_counter),
        "diversity_rate": round(diversity_used / total * 100, 1) if total else 0.0,
        "location_rate": round(with_location / total * 100, 1) if total else 0.0,
        "cache_stats": {
            "hits": cache_hits,
            "misses": cache_misses,
            "hit_rate": round(cache_hits / total * 100, 1) if total else 0.0,
        },
        "signal_summary": {
            "total": len(signals),
            "by_type": dict(by_type),
            "positive": positive,
            "negative": len(signals) - positive,
            "positive_rate": round(positive / len(signals) * 100, 1) if signals else 0.0,
        },
    }
