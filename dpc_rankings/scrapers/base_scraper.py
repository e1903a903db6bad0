from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx
from loguru import logger

from dpc_rankings.config.settings import settings


class ScraperError(Exception):
    """Custom exception for scraper-related errors."""

    pass


class TransportError(ScraperError):
    """Exception raised when a page could not be fetched or decoded."""

    pass


class RateLimitError(TransportError):
    """Exception raised when the wiki answers 429."""

    pass


class BaseScraper(ABC):
    """Abstract base class for wiki scrapers."""

    source_name: str = "wiki"

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.request_timeout),
            follow_redirects=True,
        )

    @abstractmethod
    async def fetch_json(self, params: Dict[str, str]) -> Dict[str, Any]:
        """Fetch and decode one JSON document from the source.

        Args:
            params: Query parameters identifying the document.

        Returns:
            The decoded JSON body.
        """
        pass

    async def _make_request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        **kwargs,
    ) -> httpx.Response:
        """Makes an asynchronous HTTP request. Failures are raised, never retried."""
        logger.debug(f"Making request: {method} {url} params={params}")
        try:
            response = await self.client.request(
                method, url, headers=headers, params=params, **kwargs
            )

            if response.status_code == 429:
                retry_after = response.headers.get("Retry-After")
                logger.warning(
                    f"Rate limit hit (429) for {self.source_name} at {url}. Retry-After: {retry_after}"
                )
                raise RateLimitError(f"Rate limited by {self.source_name} (429)")

            response.raise_for_status()  # Raises HTTPStatusError for 4xx/5xx
            logger.debug(f"Request successful: {response.status_code} for {url}")
            return response

        except httpx.HTTPStatusError as e:
            logger.error(
                f"HTTP error during request for {self.source_name}: {e.response.status_code} - {e}"
            )
            raise TransportError(f"HTTP error: {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.error(f"Request error for {self.source_name} at {url}: {e!r}")
            raise TransportError(f"Request failed: {e!r}") from e

    async def close(self):
        """Closes the underlying HTTP client."""
        await self.client.aclose()
        logger.info(f"Closed HTTP client for {self.source_name}")
