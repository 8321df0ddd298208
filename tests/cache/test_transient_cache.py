from __future__ import annotations

from sui_wallet.cache import TransientCache


class FakeClock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def test_get_returns_value_before_ttl():
    clock = FakeClock()
    cache = TransientCache(30, timer=clock)

    cache.set("prices", {"price_native": "0.2967"})
    clock.advance(29.9)

    assert cache.get("prices") == {"price_native": "0.2967"}


def test_entry_is_absent_once_ttl_elapsed():
    clock = FakeClock()
    cache = TransientCache(30, timer=clock)

    cache.set("prices", {"price_native": "0.2967"})
    clock.advance(30)

    assert cache.get("prices") is None
    assert len(cache) == 0


def test_ttl_is_measured_from_latest_insertion():
    clock = FakeClock()
    cache = TransientCache(30, timer=clock)

    cache.set("k", 1)
    clock.advance(20)
    cache.set("k", 2)
    clock.advance(20)

    assert cache.get("k") == 2


def test_missing_key_returns_none():
    cache = TransientCache(30)
    assert cache.get("nope") is None


def test_fresh_instance_starts_empty():
    first = TransientCache(30)
    first.set("k", "v")

    assert TransientCache(30).get("k") is None
