from __future__ import annotations

from .models import RankedRestaurant

OTHER_CATEGORY = "Other"


def primary_category(restaurant: RankedRestaurant) -> str:
    return restaurant.categories[0] if restaurant.categories else OTHER_CATEGORY


def enhance_diversity(
    ranked: list[RankedRestaurant],
    target_count: int = 15,
    max_same_category: int = 3,
) -> list[RankedRestaurant]:
    """Cap how many restaurants share a primary category, keeping rank order.

    One forward pass admits a restaurant while its category count is below
    ``max_same_category``. If that yields fewer than ``target_count`` results,
    the skipped restaurants are appended in their original order, ignoring the
    cap. The input is never re-sorted.
    """
    if target_count <= 0:
        return []

    result: list[RankedRestaurant] = []
    skipped: list[RankedRestaurant] = []
    category_counts: dict[str, int] = {}

    for restaurant in ranked:
        category = primary_category(restaurant)
        count = category_counts.get(category, 0)
        if count < max_same_category:
            result.append(restaurant)
            category_counts[category] = count + 1
            if len(result) >= target_count:
                return result
        else:
            skipped.append(restaurant)

    # Backfill regardless of category
    result.extend(skipped[: target_count - len(result)])
    return result
