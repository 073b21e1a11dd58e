from __future__ import annotations

import logging
from datetime import datetime
from typing import TypeVar

from ..recommendations.models import ConversationContext, ScoredRestaurant, UserLocation
from .distance import distance_meters
from .hours import is_open_at, time_window

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=ScoredRestaurant)

TEL_AVIV_CITIES: tuple[str, ...] = (
    "Tel Aviv",
    "Tel Aviv-Yafo",
    "Tel Aviv-Jaffa",
    "תל אביב",
    "תל אביב-יפו",
    "Jaffa",
    "יפו",
)


def filter_by_distance(
    restaurants: list[R],
    user_location: UserLocation,
    max_distance_meters: float,
) -> list[R]:
    """Keep restaurants with coordinates within ``max_distance_meters`` of the user."""
    kept: list[R] = []
    for r in restaurants:
        if not r.has_coordinates:
            continue
        d = distance_meters(user_location.lat, user_location.lng, r.latitude, r.longitude)
        if d <= max_distance_meters:
            kept.append(r)
    return kept


def filter_by_city(restaurants: list[R], context: ConversationContext) -> list[R]:
    if context.location_preference == "tel_aviv":
        names = [c.lower() for c in TEL_AVIV_CITIES]
    elif context.location_preference == "specific_city" and context.specific_city:
        names = [context.specific_city.strip().lower()]
    else:
        return list(restaurants)

    return [
        r for r in restaurants
        if r.city and any(name in r.city.lower() for name in names)
    ]


def _sunday_first_weekday(moment: datetime) -> int:
    return (moment.weekday() + 1) % 7


def apply_hard_filters(
    restaurants: list[R],
    context: ConversationContext,
    user_location: UserLocation | None,
    now: datetime | None = None,
) -> list[R]:
    """Narrow candidates by location preference, then by opening hours.

    The opening-hours check uses the start of the window implied by
    ``context.timing``; ``anytime`` skips it.
    """
    filtered = list(restaurants)

    if context.location_preference == "nearby" and context.max_distance_meters:
        if user_location is None:
            logger.warning("Nearby filter requested without a user location, skipping")
        else:
            filtered = filter_by_distance(filtered, user_location, context.max_distance_meters)
    else:
        filtered = filter_by_city(filtered, context)

    logger.info("After location filter: %d of %d restaurants", len(filtered), len(restaurants))

    if context.timing == "anytime":
        return filtered

    now = now or datetime.now()
    day = context.specific_day if context.specific_day is not None else _sunday_first_weekday(now)
    start, _ = time_window(context.timing, context.specific_time, now)

    open_now = [r for r in filtered if is_open_at(r.opening_hours, day, start)]
    logger.info("After time filter (%s, day %d): %d restaurants", context.timing, day, len(open_now))
    return open_now
