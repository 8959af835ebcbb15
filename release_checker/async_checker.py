"""Async orchestration for fetching the release feed and deciding on an update."""

import asyncio
from typing import List, Optional, Union
import logging

import httpx

from .config import CheckerConfig
from .fetchers.async_base import AsyncBaseFetcher
from .fetchers.base import FeedError, RETRY_WAIT_MAX
from .fetchers.github import AsyncGitHubReleaseFetcher
from .models import Channel, ReleaseCandidate, UpdateDecision
from .selector import evaluate

logger = logging.getLogger(__name__)


def default_budget(config: CheckerConfig) -> float:
    """Overall fetch budget: every attempt plus the longest pause between them."""
    attempts = config.max_attempts
    return config.timeout * attempts + RETRY_WAIT_MAX * (attempts - 1)


class AsyncUpdateChecker:
    """Non-blocking update checker.

    The feed is awaited with an overall timeout; only the completed release
    list is passed to the synchronous decision logic. Cancelling the task
    running check() cancels the request and propagates CancelledError.
    """

    def __init__(
        self,
        config: Optional[CheckerConfig] = None,
        fetcher: Optional[AsyncBaseFetcher] = None,
        timeout: Optional[float] = None,
    ):
        self.config = config or CheckerConfig()
        self.fetcher = fetcher or AsyncGitHubReleaseFetcher(self.config)
        self.timeout = timeout if timeout is not None else default_budget(self.config)

    async def list_releases(self) -> List[ReleaseCandidate]:
        """Fetch the raw release feed. Transport errors and timeouts propagate."""
        return await asyncio.wait_for(self.fetcher.fetch_releases(), timeout=self.timeout)

    async def _fetch_or_empty(self) -> List[ReleaseCandidate]:
        try:
            return await self.list_releases()
        except asyncio.TimeoutError:
            logger.error(f"Timed out after {self.timeout}s fetching releases")
            return []
        except (httpx.HTTPError, FeedError) as e:
            logger.error(f"Release feed unavailable for {self.config.owner}/{self.config.repo}: {e}")
            return []

    async def check(
        self,
        local_version: str,
        channel: Union[Channel, int, str] = Channel.STABLE,
    ) -> UpdateDecision:
        """Check for a newer release on the given channel."""
        channel = Channel.coerce(channel)
        logger.info(
            f"Checking {self.config.owner}/{self.config.repo} for {channel.label} "
            f"updates (current version: {local_version})..."
        )

        releases = await self._fetch_or_empty()
        decision = evaluate(local_version, releases, channel)

        if decision.available:
            logger.info(f"New version found: {decision.chosen_tag}")
        else:
            logger.info(f"Current version {local_version} is up to date")
        return decision

    async def close(self):
        """Clean up resources."""
        await self.fetcher.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


class AsyncUpdateCheckerWithProgress(AsyncUpdateChecker):
    """Async update checker with rich spinner support."""

    async def list_releases(self) -> List[ReleaseCandidate]:
        from rich.progress import Progress, SpinnerColumn, TextColumn
        from rich.console import Console

        console = Console(stderr=True)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task(
                f"Fetching releases for {self.config.owner}/{self.config.repo} (async)...", total=None
            )
            releases = await super().list_releases()
            progress.update(task, completed=True)

        return releases
