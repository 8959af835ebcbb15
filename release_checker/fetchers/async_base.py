"""Async base feed fetcher with HTTP client and retry logic."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional
import logging

import httpx
from tenacity import (
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    AsyncRetrying,
)

from ..config import CheckerConfig
from ..models import ReleaseCandidate
from .base import FeedError, RETRYABLE_ERRORS, RETRY_WAIT_MIN, RETRY_WAIT_MAX

logger = logging.getLogger(__name__)


class AsyncBaseFetcher(ABC):
    """Abstract base class for async release feed fetchers."""

    def __init__(self, config: Optional[CheckerConfig] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config or CheckerConfig()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.config.timeout,
                headers=self.config.headers,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def fetch_json(self, url: str, params: Optional[dict] = None) -> Optional[Any]:
        """Fetch and decode a JSON document with retry logic."""
        client = await self.get_client()

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.config.max_attempts),
            wait=wait_exponential(multiplier=1, min=RETRY_WAIT_MIN, max=RETRY_WAIT_MAX),
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            reraise=True,
        ):
            with attempt:
                try:
                    logger.debug(f"Fetching: {url}")
                    response = await client.get(url, params=params)
                    response.raise_for_status()
                except httpx.HTTPStatusError as e:
                    if e.response.status_code == 404:
                        logger.debug(f"Feed not found: {url}")
                        return None
                    logger.warning(f"HTTP error fetching {url}: {e}")
                    raise
                except httpx.HTTPError as e:
                    logger.warning(f"Error fetching {url}: {e}")
                    raise

                try:
                    return response.json()
                except ValueError as e:
                    raise FeedError(f"Response from {url} is not valid JSON: {e}") from e

        return None

    @abstractmethod
    async def fetch_releases(self) -> List[ReleaseCandidate]:
        """Fetch the release feed, newest first as published."""
        pass

    async def close(self):
        """Clean up HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
