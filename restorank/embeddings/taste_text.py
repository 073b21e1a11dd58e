"""
Text views of a user's taste signals.

Each builder takes signals newest first (as ``SignalStore.list_for_user``
returns them) and produces the text that gets embedded. An empty string means
there was nothing to say.
"""
from __future__ import annotations

from collections import Counter

from ..signals.models import SignalType, TasteSignal

MAX_POSITIVE_CONTENTS = 15
MAX_NEGATIVE_CONTENTS = 10
MAX_LIKED_CUISINES = 5
MAX_AVOIDED_CUISINES = 3
AVOID_SCORE_THRESHOLD = -2
MAX_FREQUENT_VISITS = 5


def _cuisine_scores(signals: list[TasteSignal]) -> dict[str, int]:
    scores: dict[str, int] = {}
    for signal in signals:
        weight = signal.signal_strength if signal.is_positive else -signal.signal_strength
        for cuisine in signal.cuisine_types:
            scores[cuisine] = scores.get(cuisine, 0) + weight
    return scores


def build_taste_text(signals: list[TasteSignal]) -> str:
    if not signals:
        return ""

    parts: list[str] = []

    positive = [s.content for s in signals if s.is_positive and s.content][:MAX_POSITIVE_CONTENTS]
    if positive:
        parts.append(f"Learned preferences: {'. '.join(positive)}.")

    negative = [s.content for s in signals if not s.is_positive and s.content][:MAX_NEGATIVE_CONTENTS]
    if negative:
        parts.append(f"Things they dislike: {'. '.join(negative)}.")

    # sorted() is stable, so equal scores keep first-seen order
    scores = _cuisine_scores(signals)
    liked = sorted((c for c, s in scores.items() if s > 0), key=lambda c: -scores[c])
    if liked:
        parts.append(f"Frequently enjoys: {', '.join(liked[:MAX_LIKED_CUISINES])}.")

    avoided = sorted((c for c, s in scores.items() if s < AVOID_SCORE_THRESHOLD), key=lambda c: scores[c])
    if avoided:
        parts.append(f"Tends to avoid: {', '.join(avoided[:MAX_AVOIDED_CUISINES])}.")

    visits = Counter(
        s.restaurant_name for s in signals
        if s.signal_type == SignalType.review and s.restaurant_name
    )
    frequent = [name for name, count in visits.items() if count > 1][:MAX_FREQUENT_VISITS]
    if frequent:
        parts.append(f"Frequently visits: {', '.join(frequent)}.")

    return " ".join(parts).strip()


def build_chat_text(signals: list[TasteSignal], limit: int = 20) -> str:
    chats = [s for s in signals if s.signal_type == SignalType.chat][:limit]
    contents = [s.content for s in chats if s.content]
    if not contents:
        return ""
    return f"Recent search preferences: {'. '.join(contents)}"


def build_reviews_text(signals: list[TasteSignal], limit: int = 20) -> str:
    reviews = [s for s in signals if s.signal_type == SignalType.review][:limit]
    parts: list[str] = []

    liked = [s for s in reviews if s.is_positive]
    if liked:
        names = [s.restaurant_name for s in liked if s.restaurant_name][:5]
        if names:
            parts.append(f"Highly rated: {', '.join(names)}")
        feedback = [s.content for s in liked if s.content][:3]
        if feedback:
            parts.append(f"Positive feedback: {'. '.join(feedback)}")

    disliked = [s.restaurant_name for s in reviews if not s.is_positive and s.restaurant_name][:3]
    if disliked:
        parts.append(f"Did not enjoy: {', '.join(disliked)}")

    return ". ".join(parts)
