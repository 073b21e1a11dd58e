"""
Bilingual (English / Hebrew) keyword classification of free-text context.

Matching is case-insensitive substring search over the tables below. It is a
heuristic, not NLP: "update" contains "date" and will be read as romantic.
To add a language, extend the keyword tuples; the scorers only see the tags.
"""
from __future__ import annotations

from enum import Enum


class Occasion(str, Enum):
    romantic = "romantic"
    quick = "quick"
    business = "business"


class BudgetTier(str, Enum):
    cheap = "cheap"
    moderate = "moderate"
    expensive = "expensive"
    unrecognized = "unrecognized"


OCCASION_KEYWORDS: dict[Occasion, tuple[str, ...]] = {
    Occasion.romantic: ("date", "romantic", "דייט", "רומנטי"),
    Occasion.quick: ("quick", "light", "מהיר", "קל"),
    Occasion.business: ("business", "meeting", "עסקים", "פגישה"),
}

# Checked in order; the first tier with a hit wins.
BUDGET_KEYWORDS: tuple[tuple[BudgetTier, tuple[str, ...]], ...] = (
    (BudgetTier.cheap, ("cheap", "זול", "תקציב")),
    (BudgetTier.moderate, ("moderate", "בינוני", "סביר")),
    (BudgetTier.expensive, ("expensive", "יקר", "יוקרתי")),
)

EXPECTED_PRICE_LEVEL: dict[BudgetTier, int] = {
    BudgetTier.cheap: 1,
    BudgetTier.moderate: 2,
    BudgetTier.expensive: 3,
}


def _normalize(text: str | None) -> str:
    return (text or "").strip().lower()


def classify_occasion(text: str | None) -> frozenset[Occasion]:
    """Return every occasion tag whose keywords appear in ``text`` (empty = none)."""
    lower = _normalize(text)
    if not lower:
        return frozenset()
    return frozenset(
        occasion
        for occasion, keywords in OCCASION_KEYWORDS.items()
        if any(kw in lower for kw in keywords)
    )


def classify_budget(text: str | None) -> BudgetTier:
    lower = _normalize(text)
    for tier, keywords in BUDGET_KEYWORDS:
        if any(kw in lower for kw in keywords):
            return tier
    return BudgetTier.unrecognized
