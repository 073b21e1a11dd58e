"""
Signal scorers used by the re-ranker.

Each scorer maps one feature of a (restaurant, context) pair to an additive
adjustment. Missing data always yields 0. The thresholds are fixed constants
shared with the previous ranking service; keep them as they are, including
the uneven rating cut-offs (4.5 / 4.0 / 4.3).
"""
from __future__ import annotations

from ..geo.distance import distance_meters
from .keywords import EXPECTED_PRICE_LEVEL, BudgetTier, Occasion, classify_budget, classify_occasion
from .models import ConversationContext, ScoredRestaurant, UserLocation

RATING_EXCELLENT = 0.10  # rating >= 4.5
RATING_GOOD = 0.05  # rating >= 4.0

POPULAR_HIGH = 0.10  # > 1000 reviews
POPULAR_MEDIUM = 0.05  # > 500 reviews

DISTANCE_PENALTY_PER_KM = 0.01
DISTANCE_PENALTY_CAP = 0.10

DATE_HIGH_RATING_BOOST = 0.10  # romantic + rating >= 4.3
QUICK_CHEAP_BOOST = 0.10  # quick + price <= 2
BUSINESS_BOOST = 0.05  # business + price >= 2 + rating >= 4.0

BUDGET_MATCH_BOOST = 0.08
BUDGET_NEAR_BOOST = BUDGET_MATCH_BOOST / 2
BUDGET_MISMATCH_PENALTY = 0.05

DEFAULT_PRICE_LEVEL = 2


def rating_boost(rating: float | None) -> float:
    if rating is None:
        return 0.0
    if rating >= 4.5:
        return RATING_EXCELLENT
    if rating >= 4.0:
        return RATING_GOOD
    return 0.0


def popularity_boost(review_count: int | None) -> float:
    if review_count is None:
        return 0.0
    if review_count > 1000:
        return POPULAR_HIGH
    if review_count > 500:
        return POPULAR_MEDIUM
    return 0.0


def restaurant_distance(
    restaurant: ScoredRestaurant, user_location: UserLocation | None
) -> float | None:
    """Distance in meters, or None when either side has no coordinates."""
    if user_location is None or not restaurant.has_coordinates:
        return None
    return distance_meters(
        user_location.lat, user_location.lng, restaurant.latitude, restaurant.longitude
    )


def distance_penalty(restaurant: ScoredRestaurant, user_location: UserLocation | None) -> float:
    meters = restaurant_distance(restaurant, user_location)
    if meters is None:
        return 0.0
    return min(meters / 1000.0 * DISTANCE_PENALTY_PER_KM, DISTANCE_PENALTY_CAP)


def occasion_boost(restaurant: ScoredRestaurant, context: ConversationContext | None) -> float:
    if context is None:
        return 0.0

    occasions = classify_occasion(context.occasion)
    if not occasions:
        return 0.0

    rating = restaurant.rating or 0.0
    price_level = restaurant.price_level or DEFAULT_PRICE_LEVEL

    boost = 0.0
    if Occasion.romantic in occasions and rating >= 4.3:
        boost += DATE_HIGH_RATING_BOOST
    if Occasion.quick in occasions and price_level <= 2:
        boost += QUICK_CHEAP_BOOST
    if Occasion.business in occasions and price_level >= 2 and rating >= 4.0:
        boost += BUSINESS_BOOST
    return boost


def budget_score(restaurant: ScoredRestaurant, context: ConversationContext | None) -> float:
    if context is None or not context.budget:
        return 0.0

    tier = classify_budget(context.budget)
    if tier is BudgetTier.unrecognized:
        return 0.0

    price_level = restaurant.price_level or DEFAULT_PRICE_LEVEL
    gap = abs(price_level - EXPECTED_PRICE_LEVEL[tier])
    if gap == 0:
        return BUDGET_MATCH_BOOST
    if gap == 1:
        return BUDGET_NEAR_BOOST
    return -BUDGET_MISMATCH_PENALTY
