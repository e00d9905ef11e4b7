from src.geo_attendance.geo_attendance.common.cache import TTLCache


class CountingLoader:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return f"value-{self.calls}"


def test_returns_cached_value_within_ttl(clock):
    cache = TTLCache(30, clock=clock)
    loader = CountingLoader()

    assert cache.get_or_load("k", loader) == "value-1"
    clock.advance(29)
    assert cache.get_or_load("k", loader) == "value-1"
    assert loader.calls == 1


def test_reloads_after_expiry(clock):
    cache = TTLCache(30, clock=clock)
    loader = CountingLoader()

    cache.get_or_load("k", loader)
    clock.advance(30)

    assert cache.get_or_load("k", loader) == "value-2"


def test_force_refresh_bypasses_cache(clock):
    cache = TTLCache(30, clock=clock)
    loader = CountingLoader()

    cache.get_or_load("k", loader)

    assert cache.get_or_load("k", loader, force_refresh=True) == "value-2"
    assert cache.get_or_load("k", loader) == "value-2"


def test_invalidate_single_key_and_all(clock):
    cache = TTLCache(30, clock=clock)
    cache.get_or_load("a", lambda: 1)
    cache.get_or_load("b", lambda: 2)

    cache.invalidate("a")
    assert len(cache) == 1

    cache.invalidate()
    assert len(cache) == 0


def test_clear_expired(clock):
    cache = TTLCache(10, clock=clock)
    cache.get_or_load("old", lambda: 1)
    clock.advance(6)
    cache.get_or_load("new", lambda: 2)
    clock.advance(5)

    assert cache.clear_expired() == 1
    assert len(cache) == 1


def test_zero_ttl_never_caches(clock):
    cache = TTLCache(0, clock=clock)
    loader = CountingLoader()

    cache.get_or_load("k", loader)
    cache.get_or_load("k", loader)

    assert loader.calls == 2
