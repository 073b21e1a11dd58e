from __future__ import annotations

import logging

from .config import DEFAULT_SIGNAL_CONFIG, SignalConfig
from .models import AddSignalRequest, SignalType, TasteSignal
from .store import SignalStore
from .trigger import EmbeddingTrigger

logger = logging.getLogger(__name__)

REVIEW_SIGNAL_STRENGTH = 5
POSITIVE_REVIEW_RATING = 4


def build_signal(
    user_id: str,
    request: AddSignalRequest,
    config: SignalConfig = DEFAULT_SIGNAL_CONFIG,
) -> TasteSignal:
    strength = request.signal_strength
    if strength is None:
        strength = config.default_strengths.get(request.signal_type, 1)
    return TasteSignal(
        user_id=user_id,
        signal_type=request.signal_type,
        signal_strength=strength,
        is_positive=request.is_positive,
        restaurant_id=request.restaurant_id,
        place_id=request.place_id,
        restaurant_name=request.restaurant_name,
        cuisine_types=tuple(request.cuisine_types),
        content=request.content,
        source_id=request.source_id,
    )


def record_signal(
    user_id: str,
    request: AddSignalRequest,
    store: SignalStore,
    trigger: EmbeddingTrigger | None = None,
    config: SignalConfig = DEFAULT_SIGNAL_CONFIG,
) -> TasteSignal | None:
    """
    Store a signal and kick off an embedding rebuild for the user.

    Best-effort: a storage failure is logged and returns None without
    triggering the rebuild. A failing trigger never affects the result.
    """
    try:
        signal = store.append(build_signal(user_id, request, config))
    except Exception:
        logger.error("Failed to add %s signal for user %s", request.signal_type.value, user_id, exc_info=True)
        return None

    logger.info("Added %s signal for user %s", signal.signal_type.value, user_id)

    if trigger is not None:
        try:
            trigger.dispatch(user_id)
        except Exception:
            logger.warning("Could not dispatch embedding rebuild for user %s", user_id, exc_info=True)
    return signal


def add_signal(
    user_id: str,
    request: AddSignalRequest,
    store: SignalStore,
    trigger: EmbeddingTrigger | None = None,
    config: SignalConfig = DEFAULT_SIGNAL_CONFIG,
) -> bool:
    return record_signal(user_id, request, store, trigger, config) is not None


def signal_from_review(
    restaurant_name: str,
    rating: float,
    cuisine_types: list[str] | None = None,
    restaurant_id: str | None = None,
    place_id: str | None = None,
    review_id: str | None = None,
) -> AddSignalRequest:
    """Signal request for a written review, the strongest signal (the user actually visited)."""
    is_positive = rating >= POSITIVE_REVIEW_RATING
    cuisines = list(cuisine_types or [])
    suffix = f", {', '.join(cuisines)}" if cuisines else ""
    if is_positive:
        content = f"Visited and liked {restaurant_name}{suffix}"
    else:
        content = f"Visited but didn't like {restaurant_name}{suffix}"

    return AddSignalRequest(
        signal_type=SignalType.review,
        signal_strength=REVIEW_SIGNAL_STRENGTH,
        is_positive=is_positive,
        restaurant_id=restaurant_id,
        place_id=place_id,
        restaurant_name=restaurant_name,
        cuisine_types=cuisines,
        content=content,
        source_id=review_id,
    )
