import asyncio

import pytest

from portfolio.clients.query_cache import QueryCache


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_missing_entry_is_stale():
    cache = QueryCache(clock=FakeClock())
    assert cache.get("/api/admin/settings") is None
    assert cache.age("/api/admin/settings") is None
    assert cache.is_stale("/api/admin/settings")


def test_entry_goes_stale_after_threshold():
    clock = FakeClock()
    cache = QueryCache(stale_after=1.0, clock=clock)
    cache.set("k", {"siteName": "x"})

    clock.now = 0.99
    assert not cache.is_stale("k")
    clock.now = 1.0
    assert cache.is_stale("k")
    assert cache.age("k") == 1.0


def test_invalidate_drops_entry():
    cache = QueryCache(clock=FakeClock())
    cache.set("k", 1)
    cache.invalidate("k")
    cache.invalidate("never-set")
    assert cache.get("k") is None


async def test_fetch_stores_result():
    cache = QueryCache(clock=FakeClock())

    async def fetcher():
        return "value"

    assert await cache.fetch("k", fetcher) == "value"
    assert cache.get("k").data == "value"
    assert not cache.is_fetching("k")


async def test_fetch_error_propagates_and_keeps_previous_entry():
    cache = QueryCache(clock=FakeClock())
    cache.set("k", "previous")

    async def fetcher():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        await cache.fetch("k", fetcher)

    assert cache.get("k").data == "previous"
    assert not cache.is_fetching("k")


async def test_keys_fetch_independently():
    cache = QueryCache(clock=FakeClock())
    gate = asyncio.Event()

    async def slow():
        await gate.wait()
        return "slow"

    async def fast():
        return "fast"

    slow_task = asyncio.ensure_future(cache.fetch("a", slow))
    await asyncio.sleep(0)
    assert await cache.fetch("b", fast) == "fast"
    assert cache.is_fetching("a")

    gate.set()
    assert await slow_task == "slow"


async def test_cancelled_waiter_does_not_cancel_shared_fetch():
    cache = QueryCache(clock=FakeClock())
    gate = asyncio.Event()

    async def fetcher():
        await gate.wait()
        return "done"

    first = asyncio.ensure_future(cache.fetch("k", fetcher))
    second = asyncio.ensure_future(cache.fetch("k", fetcher))
    await asyncio.sleep(0)
    first.cancel()
    await asyncio.sleep(0)

    gate.set()
    assert await second == "done"
    assert cache.get("k").data == "done"
