from __future__ import annotations

import logging
import math
import time
from datetime import datetime
from typing import Any, Callable

from ..analytics.store import record_event
from ..geo.filters import apply_hard_filters
from ..llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from ..llm.groq_client import select_with_llm
from .cache import ResultCache
from .config import DEFAULT_RANKING_CONFIG, RankingConfig
from .diversity import enhance_diversity
from .keywords import classify_budget, classify_occasion
from .models import (
    PicksRequest,
    PicksResponse,
    RankedRestaurant,
    Recommendation,
    RerankRequest,
    RerankResponse,
)
from .rerank import rerank

logger = logging.getLogger(__name__)

EventSink = Callable[[str, dict[str, Any]], None]


def match_percentage(final_score: float) -> int:
    """Display percentage for a recommended restaurant, kept within 70..99."""
    # Half-up rounding, not banker's rounding
    return max(70, min(99, math.floor(final_score * 100 + 0.5)))


def _record_rerank(
    request: RerankRequest,
    response: RerankResponse,
    diversified: bool,
    start_time: float,
    record: EventSink,
) -> None:
    budget = request.context.budget
    record("rerank", {
        "total_candidates": response.total_candidates,
        "results_returned": len(response.restaurants),
        "occasions": sorted(o.value for o in classify_occasion(request.context.occasion)),
        "budget_tier": classify_budget(budget).value if budget else None,
        "has_location": request.user_location is not None,
        "diversified": diversified,
        "response_time_ms": round((time.time() - start_time) * 1000, 1),
        "cache_hit": response.cache_hit,
    })


def rank_candidates(
    request: RerankRequest,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
    cache: ResultCache | None = None,
    now: datetime | None = None,
    record: EventSink = record_event,
) -> RerankResponse:
    """Hard filters (optional), re-rank, then diversity, memoised per request.

    The cache holds its own copy of each response, so callers may mutate what
    they get back. ``record`` receives one "rerank" event per call.
    """
    start_time = time.time()
    top_n = request.top_n or config.rerank_top_n
    diversify = config.enable_diversity if request.diversify is None else request.diversify

    # --- Cache check ---
    request_dict = request.model_dump()
    request_dict["_top_n"] = top_n
    request_dict["_diversify"] = diversify
    cached = cache.get(request_dict) if cache is not None and not request.apply_filters else None
    if cached is not None:
        response = cached.model_copy(deep=True, update={"cache_hit": True})
        _record_rerank(request, response, diversify, start_time, record)
        return response

    # --- Hard filters ---
    candidates = request.candidates
    if request.apply_filters:
        candidates = apply_hard_filters(candidates, request.context, request.user_location, now=now)

    # --- Re-rank + diversity ---
    ranked = rerank(
        candidates,
        request.context,
        request.user_location,
        top_n=top_n,
        log_top_k=config.log_top_k,
    )
    if diversify:
        ranked = enhance_diversity(
            ranked,
            target_count=top_n,
            max_same_category=request.max_same_category or config.max_same_category,
        )

    response = RerankResponse(
        restaurants=ranked,
        total_candidates=len(request.candidates),
    )

    # Filtered results depend on the clock, so they are not memoised
    if cache is not None and not request.apply_filters:
        cache.set(request_dict, response.model_copy(deep=True))

    _record_rerank(request, response, diversify, start_time, record)
    return response


def build_recommendations(
    selections: list[dict[str, str]],
    candidates: list[RankedRestaurant],
) -> list[Recommendation]:
    by_id = {c.place_id: c for c in candidates}
    recommendations: list[Recommendation] = []
    for selection in selections:
        restaurant = by_id.get(selection["place_id"])
        if restaurant is None:
            logger.warning("Selection references unknown place %s, dropping", selection["place_id"])
            continue
        recommendations.append(Recommendation(
            restaurant=restaurant,
            reason=selection["reason"],
            match_percentage=match_percentage(restaurant.final_score),
        ))
    return recommendations


def select_picks(
    request: PicksRequest,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
    cache: ResultCache | None = None,
    llm_config: LLMConfig = DEFAULT_LLM_CONFIG,
    record: EventSink = record_event,
) -> PicksResponse:
    """Rank the candidates and let the LLM pick the final few with reasons."""
    ranked = rank_candidates(request, config=config, cache=cache, record=record)
    selections = select_with_llm(
        ranked.restaurants,
        request.context,
        request.messages,
        count=config.picks_count,
        config=llm_config,
    )
    return PicksResponse(
        recommendations=build_recommendations(selections, ranked.restaurants),
        ranked_count=len(ranked.restaurants),
    )
