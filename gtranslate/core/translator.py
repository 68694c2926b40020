# -*- coding: utf-8 -*-
"""Google Translate web client: token signing, request building, response decoding."""

from __future__ import annotations

import asyncio
import json
import logging
import random
import urllib.parse
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

import aiohttp
import requests

from gtranslate.core.acquirer import TokenAcquirer
from gtranslate.core.constants import (
    DEFAULT_SERVICE_URLS, LANGUAGES_DOCS_COOKIE, LANGUAGES_DOCS_URL,
    RESPONSE_FLAGS, TRANSLATE_PATH,
)
from gtranslate.core.exceptions import (
    HTTPStatusError, ResponseParseError, TransportError,
)
from gtranslate.core.key_store import KeyPair, KeyPairStore
from gtranslate.core.languages import DEFAULT_LANGUAGES, LanguageTable, parse_languages_page
from gtranslate.utils.config import TranslatorConfig


@dataclass
class Translated:
    src: str     # source language
    dest: str    # destination language
    origin: str  # original text
    text: str    # translated text


@dataclass
class Sentence:
    trans: str = ""
    orig: str = ""
    backend: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Sentence":
        return cls(
            trans=data.get("trans") or "",
            orig=data.get("orig") or "",
            backend=int(data.get("backend") or 0),
        )


@dataclass
class LDResult:
    """Language detection result."""
    srclangs: List[str] = field(default_factory=list)
    srclangs_confidences: List[float] = field(default_factory=list)
    extended_srclangs: List[str] = field(default_factory=list)


@dataclass
class LDResponse:
    """Language detection response."""
    sentences: List[Sentence] = field(default_factory=list)
    src: str = ""
    spell: Any = None
    confidence: float = 0.0
    ld_result: LDResult = field(default_factory=LDResult)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LDResponse":
        ld = data.get("ld_result") or {}
        return cls(
            sentences=_sentences(data),
            src=data.get("src") or "",
            spell=data.get("spell"),
            confidence=float(data.get("confidence") or 0.0),
            ld_result=LDResult(
                srclangs=list(ld.get("srclangs") or []),
                srclangs_confidences=[float(c) for c in ld.get("srclangs_confidences") or []],
                extended_srclangs=list(ld.get("extended_srclangs") or []),
            ),
        )


def _sentences(data: Dict[str, Any]) -> List[Sentence]:
    return [Sentence.from_dict(s) for s in data.get("sentences") or [] if isinstance(s, dict)]


def get_default_service_urls() -> List[str]:
    return list(DEFAULT_SERVICE_URLS)


def normalize_host(host: str) -> str:
    host = host.strip().rstrip("/")
    return host if host.startswith(("http://", "https://")) else "https://" + host


def build_params(query: str, src: str, dest: str, token: str) -> List[Tuple[str, str]]:
    # params from chrome translate extension
    params = [
        ("client", "gtx"),
        ("sl", src),
        ("tl", dest),
        ("hl", dest),
        ("tk", token),
        ("q", query),
    ]
    return params + list(RESPONSE_FLAGS)


class Translator:
    """Client for the web translate endpoint.

    One host and one user agent are chosen at construction time from the
    configured lists, using the client's own random source (``config.seed``).
    """

    def __init__(self, config: Optional[TranslatorConfig] = None, languages: Optional[LanguageTable] = None):
        self.config = config or TranslatorConfig()
        self.logger = logging.getLogger(__name__)
        self._random = random.Random(self.config.seed)
        self.host = normalize_host(self._random.choice(self.config.service_urls))
        self.user_agent = self._random.choice(self.config.user_agents)
        self.proxy = self._resolve_proxy(self.config.proxy)
        self.languages = languages if languages is not None else DEFAULT_LANGUAGES
        self._session: Optional[aiohttp.ClientSession] = None
        self.key_store = KeyPairStore(
            self.host,
            self._fetch_page,
            key_name=self.config.key_name,
            max_age=self.config.key_max_age,
            fallback_retry=self.config.fallback_retry,
        )
        self.token_acquirer = TokenAcquirer(self.key_store)

    async def __aenter__(self) -> "Translator":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    def _resolve_proxy(self, proxy: str) -> Optional[str]:
        proxy = (proxy or "").strip()
        if not proxy:
            return None
        if proxy.startswith(("http://", "https://")):
            return proxy
        self.logger.warning(f"Ignoring unsupported proxy (only http/https): {proxy}")
        return None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(limit=100, ttl_dns_cache=300, ssl=self.config.verify_ssl)
            timeout = aiohttp.ClientTimeout(total=self.config.timeout)
            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=timeout,
                headers={"User-Agent": self.user_agent},
            )
        return self._session

    async def close(self):
        if self._session:
            await self._session.close()
            self._session = None

    async def _fetch_page(self, url: str) -> Tuple[int, str]:
        session = await self._get_session()
        async with session.get(url, proxy=self.proxy) as resp:
            return resp.status, await resp.text(errors="replace")

    async def _request(self, origin: str, src: str, dest: str) -> Dict[str, Any]:
        token = await self.token_acquirer.do(origin)
        endpoint = f"{self.host}{TRANSLATE_PATH}"
        query = urllib.parse.urlencode(build_params(origin, src, dest, token), safe='')
        session = await self._get_session()
        self.logger.debug(f"GET {endpoint}?{query}")
        try:
            async with session.get(f"{endpoint}?{query}", proxy=self.proxy) as resp:
                if resp.status != 200:
                    raise HTTPStatusError(resp.status, endpoint)
                raw = await resp.read()
                charset = resp.charset or "utf-8"
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"GET {endpoint} failed: {e}") from e
        try:
            data = json.loads(raw.decode(charset))
        except (UnicodeDecodeError, LookupError) as e:
            raise ResponseParseError(f"undecodable response from {endpoint}: {e}") from e
        except ValueError as e:
            raise ResponseParseError(f"invalid JSON from {endpoint}: {e}") from e
        if not isinstance(data, dict):
            raise ResponseParseError(f"unexpected response shape from {endpoint}")
        return data

    async def translate(self, origin: str, src: str = "auto", dest: str = "en") -> Translated:
        """Translate ``origin``. Use ``src="auto"`` to let the service detect the language."""
        src = src.lower()
        dest = dest.lower()
        data = await self._request(origin, src, dest)
        text = "".join(s.trans for s in _sentences(data))
        return Translated(src=src, dest=dest, origin=origin, text=text)

    async def detect_language(self, origin: str, dest: str = "en") -> LDResponse:
        """Detect the language ``origin`` is written in."""
        data = await self._request(origin, "auto", dest.lower())
        return LDResponse.from_dict(data)

    async def refresh_key(self) -> KeyPair:
        """Fetch a new key pair from the host page now."""
        return await self.token_acquirer.refresh()

    def get_valid_language_key(self, lang: str) -> str:
        """Accepts a short code ('es') or a full name ('spanish').

        Raises InvalidLanguageError; its ``default`` attribute holds "auto".
        """
        return self.languages.resolve(lang)

    def get_available_languages(self) -> Mapping[str, str]:
        return self.languages.as_mapping()

    async def get_available_languages_http(self, overwrite: bool = False) -> LanguageTable:
        """Scrape the documented language list and merge it over the current table.

        The current table is only replaced when ``overwrite`` is set; either way
        a new table is returned.
        """
        proxies = {"http": self.proxy, "https": self.proxy} if self.proxy else None

        def do():
            return requests.get(
                LANGUAGES_DOCS_URL,
                headers={"Cookie": LANGUAGES_DOCS_COOKIE, "User-Agent": self.user_agent},
                timeout=self.config.timeout,
                proxies=proxies,
            )

        try:
            resp = await asyncio.to_thread(do)
        except requests.RequestException as e:
            raise TransportError(f"GET {LANGUAGES_DOCS_URL} failed: {e}") from e
        if resp.status_code != 200:
            raise HTTPStatusError(resp.status_code, LANGUAGES_DOCS_URL)

        table = self.languages.updated(parse_languages_page(resp.text))
        self.logger.info(f"Fetched {len(table)} languages from documentation page")
        if overwrite:
            self.languages = table
        return table
