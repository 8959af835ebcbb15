"""Base feed fetcher with HTTP client and retry logic."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional
import logging

import httpx
from tenacity import Retrying, stop_after_attempt, wait_exponential, retry_if_exception_type

from ..config import CheckerConfig
from ..models import ReleaseCandidate

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS = (httpx.ConnectError, httpx.ReadTimeout)

# Bounds of the exponential pause between attempts, in seconds
RETRY_WAIT_MIN = 2
RETRY_WAIT_MAX = 10


class FeedError(Exception):
    """Raised when the release feed payload is structurally invalid."""


class BaseFetcher(ABC):
    """Abstract base class for release feed fetchers."""

    def __init__(self, config: Optional[CheckerConfig] = None, transport: Optional[httpx.BaseTransport] = None):
        self.config = config or CheckerConfig()
        self.client = httpx.Client(
            timeout=self.config.timeout,
            headers=self.config.headers,
            follow_redirects=True,
            transport=transport,
        )

    def _retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self.config.max_attempts),
            wait=wait_exponential(multiplier=1, min=RETRY_WAIT_MIN, max=RETRY_WAIT_MAX),
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            reraise=True,
        )

    def fetch_json(self, url: str, params: Optional[dict] = None) -> Optional[Any]:
        """Fetch and decode a JSON document with retry logic."""
        for attempt in self._retrying():
            with attempt:
                try:
                    logger.debug(f"Fetching: {url}")
                    response = self.client.get(url, params=params)
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
    def fetch_releases(self) -> List[ReleaseCandidate]:
        """Fetch the release feed, newest first as published."""
        pass

    def close(self):
        """Clean up HTTP client."""
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
