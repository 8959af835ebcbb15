"""Orchestrates fetching the release feed and deciding on an update."""

from importlib import metadata
from typing import List, Optional, Union
import logging

import httpx

from .config import CheckerConfig
from .fetchers.base import BaseFetcher, FeedError
from .fetchers.github import GitHubReleaseFetcher
from .models import Channel, ReleaseCandidate, UpdateDecision
from .selector import evaluate

logger = logging.getLogger(__name__)


def read_installed_version(distribution: str) -> Optional[str]:
    """Return the installed version of a distribution, or None if absent."""
    try:
        return metadata.version(distribution)
    except metadata.PackageNotFoundError:
        logger.warning(f"Distribution not installed: {distribution}")
        return None


class UpdateChecker:
    """Fetches the release feed once per check and evaluates it."""

    def __init__(
        self,
        config: Optional[CheckerConfig] = None,
        fetcher: Optional[BaseFetcher] = None,
    ):
        self.config = config or CheckerConfig()
        self.fetcher = fetcher or GitHubReleaseFetcher(self.config)

    def list_releases(self) -> List[ReleaseCandidate]:
        """Fetch the raw release feed. Transport errors propagate."""
        return self.fetcher.fetch_releases()

    def _fetch_or_empty(self) -> List[ReleaseCandidate]:
        try:
            return self.list_releases()
        except (httpx.HTTPError, FeedError) as e:
            logger.error(f"Release feed unavailable for {self.config.owner}/{self.config.repo}: {e}")
            return []

    def check(
        self,
        local_version: str,
        channel: Union[Channel, int, str] = Channel.STABLE,
    ) -> UpdateDecision:
        """Check for a newer release on the given channel.

        An invalid channel raises InvalidChannelError before any request is
        made. A feed that cannot be fetched yields a no-update decision.
        """
        channel = Channel.coerce(channel)
        logger.info(
            f"Checking {self.config.owner}/{self.config.repo} for {channel.label} "
            f"updates (current version: {local_version})..."
        )

        releases = self._fetch_or_empty()
        decision = evaluate(local_version, releases, channel)

        if decision.available:
            logger.info(f"New version found: {decision.chosen_tag}")
        else:
            logger.info(f"Current version {local_version} is up to date")
        return decision

    def close(self):
        """Clean up resources."""
        self.fetcher.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class UpdateCheckerWithProgress(UpdateChecker):
    """Update checker with rich spinner while the feed is fetched."""

    def list_releases(self) -> List[ReleaseCandidate]:
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
                f"Fetching releases for {self.config.owner}/{self.config.repo}...", total=None
            )
            releases = super().list_releases()
            progress.update(task, completed=True)

        return releases
