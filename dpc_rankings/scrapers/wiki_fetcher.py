import asyncio
import time
from typing import Any, Dict, Optional, Tuple

import httpx
from loguru import logger

from dpc_rankings.config.settings import settings
from dpc_rankings.utils.misc_utils import build_cache_key
from .base_scraper import BaseScraper, TransportError


class WikiFetcher(BaseScraper):
    """Fetches MediaWiki API documents, caching decoded payloads for a while.

    The wiki asks clients to space out ``action=parse`` requests, so network
    requests from one fetcher are serialised and kept at least
    ``min_request_interval`` seconds apart. Cache hits never wait.
    """

    source_name: str = "liquipedia"

    def __init__(
        self,
        api_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        cache_ttl: Optional[float] = None,
        min_request_interval: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(client=client)
        self.api_url = api_url or str(settings.wiki_api_url)
        self.user_agent = user_agent or settings.user_agent
        self.cache_ttl = (
            settings.cache_ttl_seconds if cache_ttl is None else cache_ttl
        )
        self.min_request_interval = (
            settings.min_request_interval
            if min_request_interval is None
            else min_request_interval
        )
        self._cache: Dict[str, Tuple[Dict[str, Any], float]] = {}
        self._request_lock = asyncio.Lock()
        self._last_request: Optional[float] = None
        logger.debug(
            f"WikiFetcher initialized for {self.api_url} (cache TTL {self.cache_ttl}s)"
        )

    @property
    def headers(self) -> Dict[str, str]:
        return {"Accept-Encoding": "gzip", "User-Agent": self.user_agent}

    def _get_cached(self, key: str) -> Optional[Dict[str, Any]]:
        """Get cached payload if still valid"""
        entry = self._cache.get(key)
        if entry is None:
            return None
        payload, stored_at = entry
        if time.monotonic() - stored_at < self.cache_ttl:
            logger.debug(f"Cache hit for {key}")
            return payload
        del self._cache[key]
        return None

    def _set_cached(self, key: str, payload: Dict[str, Any]):
        if self.cache_ttl > 0:
            self._cache[key] = (payload, time.monotonic())

    def clear_cache(self):
        self._cache.clear()

    async def _wait_for_slot(self):
        """Sleeps until min_request_interval has passed since the previous request."""
        if self._last_request is not None:
            elapsed = time.monotonic() - self._last_request
            if elapsed < self.min_request_interval:
                delay = self.min_request_interval - elapsed
                logger.debug(f"Waiting {delay:.1f}s before next wiki request")
                await asyncio.sleep(delay)
        self._last_request = time.monotonic()

    async def fetch_json(self, params: Dict[str, str]) -> Dict[str, Any]:
        """Fetch one API document, from cache when possible.

        Raises:
            TransportError: network failure, non-2xx status or a body that is
                not a JSON object.
        """
        cache_key = build_cache_key(self.api_url, params)
        cached = self._get_cached(cache_key)
        if cached is not None:
            return cached

        async with self._request_lock:
            # Another coroutine may have filled the cache while we waited
            cached = self._get_cached(cache_key)
            if cached is not None:
                return cached

            await self._wait_for_slot()
            logger.info(f"🔍 Fetching {self.api_url} {params}")
            response = await self._make_request(
                "GET", self.api_url, headers=self.headers, params=params
            )

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Malformed JSON from {self.api_url}: {e}")
            raise TransportError(f"Malformed JSON response: {e}") from e
        if not isinstance(payload, dict):
            raise TransportError(
                f"Expected a JSON object, got {type(payload).__name__}"
            )

        self._set_cached(cache_key, payload)
        return payload
