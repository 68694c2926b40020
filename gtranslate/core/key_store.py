# -*- coding: utf-8 -*-
"""
Key-Pair Store
==============

Fetches and caches the rotating ``(a, b)`` key pair that the translate
front-end embeds in its page markup (``tkk:'448487.932609646'``).

- The pair is fetched lazily on first use and kept until it is invalidated,
  refreshed explicitly or (optionally) exceeds ``max_age``.
- Reads and replacements go through one ``asyncio.Lock``, so concurrent
  callers share a single page download.
- A failed download or an unparsable page never reaches the caller: a
  synthetic, hour-bucketed pair is returned instead. Tokens computed from it
  will most likely be rejected by the server; that rejection is the
  observable signal of the fallback.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Tuple

import aiohttp

from gtranslate.core.constants import (
    DEFAULT_KEY_NAME, HOUR_MS, INT64_MAX, INT64_MIN, KEY_FALLBACK_RETRY, KEY_PAIR_RE,
)
from gtranslate.core.exceptions import KeyFetchError, KeyParseError

# (status, body) for GET url
PageFetcher = Callable[[str], Awaitable[Tuple[int, str]]]


@dataclass(frozen=True)
class KeyPair:
    """Server-issued secret pair. Both fields are always set together."""
    a: int
    b: int

    def __str__(self) -> str:
        return f"{self.a}.{self.b}"

    @classmethod
    def parse(cls, raw: str) -> "KeyPair":
        head, sep, tail = raw.strip().partition(".")
        if not sep:
            raise KeyParseError(f"malformed key pair {raw!r}")
        try:
            a, b = int(head), int(tail)
        except ValueError as e:
            raise KeyParseError(f"malformed key pair {raw!r}") from e
        for value in (a, b):
            if not INT64_MIN <= value <= INT64_MAX:
                raise KeyParseError(f"key pair value out of range: {value}")
        return cls(a, b)


@dataclass(frozen=True)
class KeyPairCache:
    """Snapshot of the current pair and the wall-clock time it was obtained."""
    pair: KeyPair
    obtained_at: float
    synthetic: bool = False


def parse_key_pair(body: str, key_name: Optional[str] = DEFAULT_KEY_NAME) -> KeyPair:
    """Find the embedded ``<identifier>:'<int>.<int>'`` assignment in ``body``.

    An assignment named ``key_name`` wins; otherwise the first match is used.
    """
    first = None
    for match in KEY_PAIR_RE.finditer(body or ""):
        if key_name and match.group(1) == key_name:
            first = match
            break
        if first is None:
            first = match
    if first is None:
        raise KeyParseError("key pair assignment not found in host page")
    return KeyPair.parse(f"{first.group(2)}.{first.group(3)}")


def synthetic_key_pair(now: float) -> KeyPair:
    """Hour counter since the epoch, used as both halves of the pair."""
    hours = int(now * 1000) // HOUR_MS
    return KeyPair(hours, hours)


class KeyPairStore:
    """Caches the key pair of one host."""

    def __init__(
        self,
        host: str,
        fetch: PageFetcher,
        *,
        key_name: Optional[str] = DEFAULT_KEY_NAME,
        max_age: Optional[float] = None,
        fallback_retry: float = KEY_FALLBACK_RETRY,
        clock: Callable[[], float] = time.time,
    ):
        self.logger = logging.getLogger(__name__)
        self.host = host.rstrip("/")
        self.key_name = key_name
        self.max_age = max_age
        self.fallback_retry = fallback_retry
        self._fetch = fetch
        self._clock = clock
        self._lock = asyncio.Lock()
        self._cache: Optional[KeyPairCache] = None
        self.fetch_count = 0

    @property
    def cached(self) -> Optional[KeyPairCache]:
        return self._cache

    async def current(self) -> KeyPair:
        """Return a usable pair, loading it first if absent or stale."""
        async with self._lock:
            if not self._is_usable(self._cache):
                self._cache = await self._load()
            return self._cache.pair

    async def refresh(self) -> KeyPair:
        """Force a new download of the host page."""
        async with self._lock:
            self._cache = await self._load()
            return self._cache.pair

    def invalidate(self) -> None:
        # rebinding a single attribute; readers see the old or no snapshot
        self._cache = None

    def _is_usable(self, cache: Optional[KeyPairCache]) -> bool:
        if cache is None:
            return False
        age = self._clock() - cache.obtained_at
        if cache.synthetic:
            return age < self.fallback_retry
        if self.max_age is not None:
            return age < self.max_age
        return True

    async def _load(self) -> KeyPairCache:
        try:
            pair = await self._fetch_pair()
        except (KeyFetchError, KeyParseError) as e:
            pair = synthetic_key_pair(self._clock())
            self.logger.warning(f"Using synthetic key pair {pair} for {self.host}: {e}")
            return KeyPairCache(pair, self._clock(), synthetic=True)
        self.logger.info(f"Fetched key pair from {self.host}")
        self.logger.debug(f"Key pair for {self.host}: {pair}")
        return KeyPairCache(pair, self._clock())

    async def _fetch_pair(self) -> KeyPair:
        url = f"{self.host}/"
        self.fetch_count += 1
        try:
            status, body = await self._fetch(url)
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            raise KeyFetchError(f"GET {url} failed: {e}") from e
        if not 200 <= status < 300:
            raise KeyFetchError(f"GET {url} returned HTTP {status}", status=status)
        return parse_key_pair(body, self.key_name)
