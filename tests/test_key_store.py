import asyncio

import aiohttp
import pytest

from gtranslate.core.exceptions import KeyParseError
from gtranslate.core.key_store import (
    KeyPair, KeyPairStore, parse_key_pair, synthetic_key_pair,
)

PAGE = "<html><script>window.x={ver:'1.2',tkk:'448487.932609646',y:1};</script></html>"


class Clock:
    def __init__(self, now=1700000000.0):
        self.now = now

    def __call__(self):
        return self.now


class FakeFetcher:
    """Returns queued (status, body) tuples; the last one repeats."""

    def __init__(self, *responses, delay=0.0):
        self.responses = list(responses)
        self.delay = delay
        self.urls = []

    async def __call__(self, url):
        self.urls.append(url)
        if self.delay:
            await asyncio.sleep(self.delay)
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, BaseException):
            raise item
        return item


def test_parse_prefers_named_assignment():
    assert parse_key_pair(PAGE) == KeyPair(448487, 932609646)


def test_parse_falls_back_to_first_assignment():
    assert parse_key_pair("a={abc:'5.6'}") == KeyPair(5, 6)


def test_parse_negative_values():
    assert parse_key_pair("tkk:'-1.-2'") == KeyPair(-1, -2)


def test_parse_missing_pattern_raises():
    with pytest.raises(KeyParseError):
        parse_key_pair("<html>nothing here</html>")


def test_parse_out_of_range_raises():
    with pytest.raises(KeyParseError):
        parse_key_pair("tkk:'99999999999999999999.1'")


def test_key_pair_str_and_parse():
    pair = KeyPair.parse("448487.932609646")
    assert pair == KeyPair(448487, 932609646)
    assert str(pair) == "448487.932609646"
    with pytest.raises(KeyParseError):
        KeyPair.parse("448487")


def test_synthetic_pair_is_hour_counter():
    assert synthetic_key_pair(7200.5) == KeyPair(2, 2)
    assert synthetic_key_pair(7199.9) == KeyPair(1, 1)


def test_current_fetches_once_and_caches():
    async def scenario():
        fetch = FakeFetcher((200, PAGE))
        store = KeyPairStore("https://example.test/", fetch, clock=Clock())
        pairs = [await store.current() for _ in range(5)]
        return fetch, store, pairs

    fetch, store, pairs = asyncio.run(scenario())
    assert pairs == [KeyPair(448487, 932609646)] * 5
    assert fetch.urls == ["https://example.test/"]
    assert store.fetch_count == 1
    assert store.cached.synthetic is False


def test_concurrent_callers_share_one_fetch():
    async def scenario():
        fetch = FakeFetcher((200, PAGE), delay=0.01)
        store = KeyPairStore("https://example.test", fetch, clock=Clock())
        pairs = await asyncio.gather(*[store.current() for _ in range(20)])
        return fetch, pairs

    fetch, pairs = asyncio.run(scenario())
    assert len(fetch.urls) == 1
    assert set(pairs) == {KeyPair(448487, 932609646)}


@pytest.mark.parametrize("response", [
    (500, PAGE),
    (404, ""),
    (200, "<html>no key in here</html>"),
    aiohttp.ClientConnectionError("boom"),
    asyncio.TimeoutError(),
])
def test_failures_fall_back_to_synthetic_pair(response):
    clock = Clock(7200.5)

    async def scenario():
        store = KeyPairStore("https://example.test", FakeFetcher(response), clock=clock)
        return store, await store.current()

    store, pair = asyncio.run(scenario())
    assert pair == KeyPair(2, 2)
    assert store.cached.synthetic is True


def test_synthetic_pair_is_retried_after_interval():
    clock = Clock()

    async def scenario():
        fetch = FakeFetcher((503, ""), (200, PAGE))
        store = KeyPairStore("https://example.test", fetch, fallback_retry=60, clock=clock)
        first = await store.current()
        clock.now += 30
        second = await store.current()
        clock.now += 31
        third = await store.current()
        return fetch, first, second, third

    fetch, first, second, third = asyncio.run(scenario())
    assert first == second == synthetic_key_pair(clock.now - 61)
    assert third == KeyPair(448487, 932609646)
    assert len(fetch.urls) == 2


@pytest.mark.parametrize("status", [201, 203, 299])
def test_any_2xx_page_is_scanned(status):
    async def scenario():
        store = KeyPairStore("https://example.test", FakeFetcher((status, PAGE)), clock=Clock())
        pair = await store.current()
        return pair, store.cached

    pair, cached = asyncio.run(scenario())
    assert pair == KeyPair(448487, 932609646)
    assert cached.synthetic is False


def test_refresh_and_invalidate_refetch():
    async def scenario():
        fetch = FakeFetcher((200, "tkk:'1.2'"), (200, "tkk:'3.4'"), (200, "tkk:'5.6'"))
        store = KeyPairStore("https://example.test", fetch, clock=Clock())
        first = await store.current()
        refreshed = await store.refresh()
        store.invalidate()
        assert store.cached is None
        after_invalidate = await store.current()
        return first, refreshed, after_invalidate

    assert asyncio.run(scenario()) == (KeyPair(1, 2), KeyPair(3, 4), KeyPair(5, 6))


def test_max_age_expires_real_pair():
    clock = Clock()

    async def scenario():
        fetch = FakeFetcher((200, "tkk:'1.2'"), (200, "tkk:'3.4'"))
        store = KeyPairStore("https://example.test", fetch, max_age=3600, clock=clock)
        first = await store.current()
        clock.now += 3599
        still = await store.current()
        clock.now += 2
        renewed = await store.current()
        return first, still, renewed

    assert asyncio.run(scenario()) == (KeyPair(1, 2), KeyPair(1, 2), KeyPair(3, 4))


def test_cancelled_fetch_leaves_cache_empty():
    async def scenario():
        blocked = asyncio.Event()
        calls = []

        async def fetch(url):
            calls.append(url)
            if len(calls) == 1:
                await blocked.wait()
            return 200, PAGE

        store = KeyPairStore("https://example.test", fetch, clock=Clock())
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(store.current(), timeout=0.05)
        assert store.cached is None
        pair = await store.current()
        return pair, calls

    pair, calls = asyncio.run(scenario())
    assert pair == KeyPair(448487, 932609646)
    assert len(calls) == 2
