from datetime import datetime

from restorank.geo.filters import apply_hard_filters, filter_by_city, filter_by_distance
from restorank.recommendations.models import ConversationContext, ScoredRestaurant, UserLocation

USER = UserLocation(lat=32.0853, lng=34.7818)

# Monday 13:00
MONDAY_LUNCH = datetime(2026, 10, 19, 13, 0)


def _restaurant(place_id, **kwargs):
    return ScoredRestaurant(place_id=place_id, name=place_id.title(), vector_score=0.5, **kwargs)


def _ids(restaurants):
    return [r.place_id for r in restaurants]


NEAR = _restaurant("near", latitude=32.0870, longitude=34.7800, city="Tel Aviv-Yafo")
FAR = _restaurant("far", latitude=31.7683, longitude=35.2137, city="Jerusalem")
NOWHERE = _restaurant("nowhere", city="Haifa")


def test_filter_by_distance_drops_far_and_unlocated():
    assert _ids(filter_by_distance([NEAR, FAR, NOWHERE], USER, 1000)) == ["near"]


def test_filter_by_city_tel_aviv_names():
    hebrew = _restaurant("hebrew", city="תל אביב")
    jaffa = _restaurant("jaffa", city="Jaffa")
    context = ConversationContext(location_preference="tel_aviv")
    assert _ids(filter_by_city([NEAR, FAR, NOWHERE, hebrew, jaffa], context)) == ["near", "hebrew", "jaffa"]


def test_filter_by_city_specific_city_substring():
    context = ConversationContext(location_preference="specific_city", specific_city="haifa")
    assert _ids(filter_by_city([NEAR, FAR, NOWHERE], context)) == ["nowhere"]


def test_filter_by_city_anywhere_keeps_all():
    context = ConversationContext(location_preference="anywhere")
    assert _ids(filter_by_city([NEAR, FAR, NOWHERE], context)) == ["near", "far", "nowhere"]


def test_nearby_uses_radius():
    context = ConversationContext(location_preference="nearby", max_distance_meters=1000)
    assert _ids(apply_hard_filters([NEAR, FAR, NOWHERE], context, USER)) == ["near"]


def test_nearby_without_location_is_skipped(caplog):
    context = ConversationContext(location_preference="nearby", max_distance_meters=1000)
    result = apply_hard_filters([NEAR, FAR, NOWHERE], context, None)
    assert _ids(result) == ["near", "far", "nowhere"]
    assert "without a user location" in caplog.text


def test_opening_hours_filter_for_now():
    lunch = _restaurant("lunch", opening_hours={
        "periods": [{"open": {"day": 1, "time": "0900"}, "close": {"day": 1, "time": "1700"}}],
    })
    dinner = _restaurant("dinner", opening_hours={
        "periods": [{"open": {"day": 1, "time": "1800"}, "close": {"day": 1, "time": "2300"}}],
    })
    unknown = _restaurant("unknown")
    context = ConversationContext(timing="now")

    result = apply_hard_filters([lunch, dinner, unknown], context, None, now=MONDAY_LUNCH)
    assert _ids(result) == ["lunch", "unknown"]


def test_specific_day_and_tonight():
    friday_only = _restaurant("friday", opening_hours={
        "periods": [{"open": {"day": 5, "time": "1800"}, "close": {"day": 5, "time": "2300"}}],
    })
    context = ConversationContext(timing="tonight", specific_day=5)
    assert _ids(apply_hard_filters([friday_only], context, None, now=MONDAY_LUNCH)) == ["friday"]

    context = ConversationContext(timing="tonight", specific_day=2)
    assert apply_hard_filters([friday_only], context, None, now=MONDAY_LUNCH) == []


def test_anytime_skips_hours_check():
    closed = _restaurant("closed", opening_hours={"weekday_text": ["Monday: Closed"] * 7})
    context = ConversationContext(timing="anytime")
    assert _ids(apply_hard_filters([closed], context, None, now=MONDAY_LUNCH)) == ["closed"]
