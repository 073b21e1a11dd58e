from __future__ import annotations

import json
import logging

from groq import Groq

from ..recommendations.models import ChatMessage, ConversationContext, RankedRestaurant
from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

SYSTEM_PROMPT_EN = (
    "You are a restaurant expert helping people find the perfect place. "
    "You get a conversation with a user and a ranked list of candidate restaurants.\n\n"
    "Pick the {count} restaurants that best match what the user asked for and write "
    "a short, personal reason for each: one or two sentences, like a friend who "
    "knows them, referencing what they asked for. No generic marketing phrases.\n\n"
    "Return ONLY valid JSON in this exact format:\n"
    '{{"selections": [{{"place_id": "<id>", "reason": "<reason>"}}]}}\n'
    "Use only ids from the provided list."
)

SYSTEM_PROMPT_HE = (
    "אתה מומחה מסעדות שעוזר לאנשים למצוא את המקום המושלם. "
    "קיבלת שיחה עם משתמש ורשימת מסעדות מועמדות מדורגת.\n\n"
    "בחר {count} מסעדות שמתאימות בדיוק למה שהמשתמש ביקש, וכתוב לכל אחת נימוק "
    "אישי וקצר של משפט או שניים, כמו חבר שמכיר אותו. בלי ניסוחים שיווקיים.\n\n"
    "החזר JSON תקין בלבד בפורמט הזה:\n"
    '{{"selections": [{{"place_id": "<id>", "reason": "<נימוק>"}}]}}\n'
    "השתמש רק במזהים מהרשימה."
)

FALLBACK_REASONS = {
    "en": [
        "Top recommendation based on your preferences",
        "Great place matching what you asked",
        "Excellent option in your area",
    ],
    "he": [
        "המלצה מובילה בהתאם להעדפות שלך",
        "מקום מצוין שמתאים למה שחיפשת",
        "אופציה נהדרת באזור שלך",
    ],
}


def _format_candidate(restaurant: RankedRestaurant, index: int) -> str:
    distance = f"{round(restaurant.distance_meters)}m" if restaurant.distance_meters is not None else "N/A"
    lines = [
        f"{index + 1}. {restaurant.name}",
        f"   ID: {restaurant.place_id}",
        f"   Rating: {restaurant.rating if restaurant.rating is not None else 'N/A'}/5 "
        f"({restaurant.review_count or 0} reviews)",
        f"   Price: {'$' * (restaurant.price_level or 2)}",
        f"   Categories: {', '.join(restaurant.categories) or 'Restaurant'}",
        f"   Distance: {distance}",
        f"   Match Score: {restaurant.final_score * 100:.0f}%",
    ]
    if restaurant.summary:
        lines.append(f"   Summary: {restaurant.summary[:150]}...")
    return "\n".join(lines)


def _build_user_message(
    candidates: list[RankedRestaurant],
    context: ConversationContext,
    messages: list[ChatMessage],
    count: int,
) -> str:
    if context.language == "he":
        roles = {"user": "משתמש", "assistant": "עוזר"}
        header_conv, header_cand = "השיחה עם המשתמש:", "המועמדים:"
        ask = f"בחר {count} מסעדות וכתוב נימוק קצר ואישי לכל אחת."
    else:
        roles = {"user": "User", "assistant": "Assistant"}
        header_conv, header_cand = "Conversation with user:", "Candidates:"
        ask = f"Select {count} restaurants and write a short, personal reason for each."

    conversation = "\n".join(f"{roles[m.role]}: {m.content}" for m in messages)
    if not conversation:
        conversation = context.conversation_text
    candidates_text = "\n\n".join(_format_candidate(c, i) for i, c in enumerate(candidates))
    return f"{header_conv}\n{conversation}\n\n{header_cand}\n{candidates_text}\n\n{ask}"


def fallback_selections(
    candidates: list[RankedRestaurant],
    language: str = "en",
    count: int = 3,
) -> list[dict[str, str]]:
    reasons = FALLBACK_REASONS.get(language, FALLBACK_REASONS["en"])
    return [
        {"place_id": c.place_id, "reason": reasons[i % len(reasons)]}
        for i, c in enumerate(candidates[:count])
    ]


def _strip_code_fence(content: str) -> str:
    text = content.strip()
    if text.startswith("```"):
        text = text.strip("`")
        if text.lower().startswith("json"):
            text = text[4:]
    return text.strip()


def select_with_llm(
    candidates: list[RankedRestaurant],
    context: ConversationContext,
    messages: list[ChatMessage] | None = None,
    count: int = 3,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> list[dict[str, str]]:
    """
    Ask Groq to pick ``count`` restaurants from the ranked candidates.

    Returns a list of ``{"place_id", "reason"}`` dicts in the LLM's order.
    Falls back to the top ``count`` candidates with generic reasons when the
    LLM is disabled, unreachable or returns invalid JSON.
    """
    if not candidates:
        return []

    if not config.enabled or not config.api_key:
        return fallback_selections(candidates, context.language, count)

    system_prompt = SYSTEM_PROMPT_HE if context.language == "he" else SYSTEM_PROMPT_EN

    try:
        client = Groq(api_key=config.api_key, timeout=config.timeout)
        response = client.chat.completions.create(
            model=config.model,
            messages=[
                {"role": "system", "content": system_prompt.format(count=count)},
                {
                    "role": "user",
                    "content": _build_user_message(candidates, context, messages or [], count),
                },
            ],
            max_tokens=config.max_tokens,
            temperature=config.temperature,
            response_format={"type": "json_object"},
        )

        content = response.choices[0].message.content or ""
        parsed = json.loads(_strip_code_fence(content))

        selections: list[dict[str, str]] = []
        for item in parsed.get("selections", []):
            pid = str(item.get("place_id", ""))
            reason = item.get("reason", "")
            if pid and reason:
                selections.append({"place_id": pid, "reason": reason})

        if not selections:
            return fallback_selections(candidates, context.language, count)
        logger.info("LLM selected %d restaurants", len(selections))
        return selections[:count]

    except Exception:
        logger.warning("Groq selection failed, falling back to top of ranking", exc_info=True)
        return fallback_selections(candidates, context.language, count)
