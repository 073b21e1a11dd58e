from __future__ import annotations

from restorank.embeddings.taste_text import build_chat_text, build_reviews_text, build_taste_text
from restorank.signals.models import SignalType, TasteSignal


def _signal(signal_type=SignalType.like, strength=3, positive=True, **kwargs):
    return TasteSignal(
        user_id="u1",
        signal_type=signal_type,
        signal_strength=strength,
        is_positive=positive,
        **kwargs,
    )


def test_empty_signals():
    assert build_taste_text([]) == ""
    assert build_chat_text([]) == ""
    assert build_reviews_text([]) == ""


def test_full_taste_text():
    signals = [
        _signal(SignalType.review, 5, restaurant_name="Cafe Noir", cuisine_types=("French",),
                content="Visited and liked Cafe Noir, French"),
        _signal(SignalType.like, 3, cuisine_types=("Italian",), content="Great pasta"),
        _signal(SignalType.review, 5, positive=False, restaurant_name="Burger Hut",
                cuisine_types=("Burgers",), content="Visited but didn't like Burger Hut, Burgers"),
        _signal(SignalType.review, 5, restaurant_name="Cafe Noir", cuisine_types=("French",)),
    ]

    assert build_taste_text(signals) == (
        "Learned preferences: Visited and liked Cafe Noir, French. Great pasta. "
        "Things they dislike: Visited but didn't like Burger Hut, Burgers. "
        "Frequently enjoys: French, Italian. "
        "Tends to avoid: Burgers. "
        "Frequently visits: Cafe Noir."
    )


def test_cuisine_scores_net_out():
    signals = [
        _signal(strength=5, cuisine_types=("Sushi",)),
        _signal(strength=2, positive=False, cuisine_types=("Sushi", "Thai")),
        _signal(strength=2, positive=False, cuisine_types=("Indian",)),
        _signal(strength=1, positive=False, cuisine_types=("Indian",)),
    ]
    text = build_taste_text(signals)
    # Sushi 5 - 2 = 3, Thai -2 (not strongly negative), Indian -3
    assert "Frequently enjoys: Sushi." in text
    assert "Tends to avoid: Indian." in text
    assert "Thai" not in text


def test_liked_cuisines_ranked_and_capped():
    signals = [_signal(strength=1 + i % 5, cuisine_types=(f"C{i}",)) for i in range(8)]
    text = build_taste_text(signals)
    # strengths 1,2,3,4,5,1,2,3; ties keep first-seen order
    assert "Frequently enjoys: C4, C3, C2, C7, C1." in text


def test_content_caps():
    signals = [_signal(content=f"like {i}") for i in range(20)]
    signals += [_signal(positive=False, content=f"dislike {i}") for i in range(12)]
    text = build_taste_text(signals)
    assert "like 14." in text
    assert "like 15" not in text.replace("dislike", "")
    assert "dislike 9." in text
    assert "dislike 10" not in text


def test_single_visit_is_not_frequent():
    signals = [_signal(SignalType.review, 5, restaurant_name="Once")]
    assert "Frequently visits" not in build_taste_text(signals)


def test_chat_text_uses_recent_chat_contents():
    signals = [
        _signal(SignalType.chat, 4, content="sushi tonight"),
        _signal(SignalType.like, 3, content="not a chat"),
        _signal(SignalType.chat, 4),
        _signal(SignalType.chat, 4, content="cheap eats"),
    ]
    assert build_chat_text(signals) == "Recent search preferences: sushi tonight. cheap eats"


def test_chat_text_limit():
    signals = [_signal(SignalType.chat, 4, content=f"chat {i}") for i in range(25)]
    text = build_chat_text(signals, limit=20)
    assert "chat 19" in text
    assert "chat 20" not in text


def test_reviews_text():
    signals = [
        _signal(SignalType.review, 5, restaurant_name="Good Place", content="Visited and liked Good Place"),
        _signal(SignalType.review, 5, positive=False, restaurant_name="Bad Place"),
        _signal(SignalType.like, 3, restaurant_name="Not A Review"),
    ]
    assert build_reviews_text(signals) == (
        "Highly rated: Good Place. Positive feedback: Visited and liked Good Place. Did not enjoy: Bad Place"
    )
