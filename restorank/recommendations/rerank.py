from __future__ import annotations

import logging

from .models import ConversationContext, RankedRestaurant, ScoredRestaurant, UserLocation
from .scoring import (
    budget_score,
    distance_penalty,
    occasion_boost,
    popularity_boost,
    rating_boost,
    restaurant_distance,
)

logger = logging.getLogger(__name__)

_CANDIDATE_FIELDS = set(ScoredRestaurant.model_fields)


def score_candidate(
    restaurant: ScoredRestaurant,
    context: ConversationContext | None,
    user_location: UserLocation | None,
) -> RankedRestaurant:
    """Apply every scorer to one candidate and keep the components for debugging."""
    components = {
        "rating_boost": rating_boost(restaurant.rating),
        "popularity_boost": popularity_boost(restaurant.review_count),
        "distance_penalty": distance_penalty(restaurant, user_location),
        "occasion_boost": occasion_boost(restaurant, context),
        "budget_score": budget_score(restaurant, context),
    }
    final_score = (
        restaurant.vector_score
        + components["rating_boost"]
        + components["popularity_boost"]
        - components["distance_penalty"]
        + components["occasion_boost"]
        + components["budget_score"]
    )
    return RankedRestaurant(
        **restaurant.model_dump(include=_CANDIDATE_FIELDS),
        final_score=final_score,
        distance_meters=restaurant_distance(restaurant, user_location),
        **components,
    )


def _log_top(ranked: list[RankedRestaurant], limit: int) -> None:
    for i, r in enumerate(ranked[:limit], start=1):
        logger.info(
            "%d. %s: final=%.1f%% (vector=%.1f%%, rating+%.0f%%, pop+%.0f%%, dist-%.0f%%, "
            "occasion+%.0f%%, budget%+.0f%%)",
            i,
            r.name,
            r.final_score * 100,
            r.vector_score * 100,
            r.rating_boost * 100,
            r.popularity_boost * 100,
            r.distance_penalty * 100,
            r.occasion_boost * 100,
            r.budget_score * 100,
        )


def rerank(
    candidates: list[ScoredRestaurant],
    context: ConversationContext | None,
    user_location: UserLocation | None,
    top_n: int = 15,
    log_top_k: int = 5,
) -> list[RankedRestaurant]:
    """Re-rank candidates by vector score plus rating/popularity/distance/context adjustments.

    The final score is not clamped. Sorting is stable, so ties keep input order.
    """
    logger.info("Re-ranking %d restaurants", len(candidates))
    if not candidates:
        return []

    ranked = [score_candidate(r, context, user_location) for r in candidates]
    ranked.sort(key=lambda r: r.final_score, reverse=True)
    top = ranked[: max(top_n, 0)]

    _log_top(top, log_top_k)
    return top
