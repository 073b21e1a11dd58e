from __future__ import annotations

from restorank.recommendations.cache import ResultCache, make_key


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def _cache(**kwargs):
    clock = FakeClock()
    return ResultCache(clock=clock, **kwargs), clock


def test_key_ignores_dict_order():
    assert make_key({"a": 1, "b": [1, 2]}) == make_key({"b": [1, 2], "a": 1})
    assert make_key({"a": 1}) != make_key({"a": 2})


def test_miss_then_hit():
    cache, _ = _cache()
    assert cache.get({"q": 1}) is None
    cache.set({"q": 1}, "result")
    assert cache.get({"q": 1}) == "result"
    stats = cache.stats()
    assert stats["hits"] == 1
    assert stats["misses"] == 1
    assert stats["hit_rate"] == 50.0


def test_entries_expire():
    cache, clock = _cache(ttl=10)
    cache.set({"q": 1}, "result")
    clock.now = 9.9
    assert cache.get({"q": 1}) == "result"
    clock.now = 10.0
    assert cache.get({"q": 1}) is None
    assert cache.stats()["size"] == 0


def test_per_entry_ttl_override():
    cache, clock = _cache(ttl=100)
    cache.set({"q": 1}, "short", ttl=1)
    clock.now = 2
    assert cache.get({"q": 1}) is None


def test_full_cache_evicts_oldest():
    cache, clock = _cache(ttl=100, max_entries=2)
    cache.set({"q": "a"}, "a")
    clock.now = 1
    cache.set({"q": "b"}, "b")
    clock.now = 2
    cache.set({"q": "c"}, "c")
    assert cache.get({"q": "a"}) is None
    assert cache.get({"q": "b"}) == "b"
    assert cache.get({"q": "c"}) == "c"


def test_full_cache_evicts_expired_first():
    cache, clock = _cache(ttl=100, max_entries=2)
    cache.set({"q": "a"}, "a")
    clock.now = 1
    cache.set({"q": "b"}, "b", ttl=2)
    clock.now = 5
    cache.set({"q": "c"}, "c")
    assert cache.get({"q": "a"}) == "a"
    assert cache.get({"q": "b"}) is None
    assert cache.get({"q": "c"}) == "c"


def test_overwriting_existing_key_does_not_evict():
    cache, _ = _cache(max_entries=1)
    cache.set({"q": 1}, "first")
    cache.set({"q": 1}, "second")
    assert cache.get({"q": 1}) == "second"


def test_delete_and_clear():
    cache, _ = _cache()
    cache.set({"q": 1}, "x")
    cache.set({"q": 2}, "y")
    cache.delete({"q": 1})
    assert cache.get({"q": 1}) is None
    cache.clear()
    assert cache.stats() == {"size": 0, "hits": 0, "misses": 0, "hit_rate": 0.0}
