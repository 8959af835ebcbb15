from .base import BaseFetcher, FeedError
from .async_base import AsyncBaseFetcher
from .github import AsyncGitHubReleaseFetcher, GitHubReleaseFetcher, parse_release_feed

__all__ = [
    "BaseFetcher",
    "FeedError",
    "AsyncBaseFetcher",
    "GitHubReleaseFetcher",
    "AsyncGitHubReleaseFetcher",
    "parse_release_feed",
]
