"""Fetchers for the GitHub releases API."""

from typing import Any, List
import logging

from .base import BaseFetcher, FeedError
from .async_base import AsyncBaseFetcher
from ..models import ReleaseCandidate

logger = logging.getLogger(__name__)


def parse_release_feed(payload: Any, source: str = "feed") -> List[ReleaseCandidate]:
    """Convert a decoded releases payload into candidates, keeping feed order.

    Drafts are dropped. Malformed entries are skipped with a warning so that
    one bad entry does not discard the rest of the feed.
    """
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise FeedError(f"Expected a list of releases from {source}, got {type(payload).__name__}")

    releases: List[ReleaseCandidate] = []
    for index, entry in enumerate(payload):
        if isinstance(entry, dict) and entry.get("draft"):
            logger.debug(f"Skipping draft release at position {index}")
            continue
        try:
            releases.append(ReleaseCandidate.from_github(entry))
        except ValueError as e:
            logger.warning(f"Skipping malformed release at position {index} in {source}: {e}")

    logger.info(f"Found {len(releases)} releases in {source}")
    return releases


class GitHubReleaseFetcher(BaseFetcher):
    """Fetcher for a repository's GitHub releases listing."""

    def fetch_releases(self) -> List[ReleaseCandidate]:
        url = self.config.releases_url
        payload = self.fetch_json(url, params={"per_page": self.config.per_page})
        if payload is None:
            logger.warning(f"No releases found at {url}")
        return parse_release_feed(payload, source=url)


class AsyncGitHubReleaseFetcher(AsyncBaseFetcher):
    """Async fetcher for a repository's GitHub releases listing."""

    async def fetch_releases(self) -> List[ReleaseCandidate]:
        url = self.config.releases_url
        payload = await self.fetch_json(url, params={"per_page": self.config.per_page})
        if payload is None:
            logger.warning(f"No releases found at {url}")
        return parse_release_feed(payload, source=url)
