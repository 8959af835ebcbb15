"""Shared pytest fixtures for Release Checker tests."""

import sys
from pathlib import Path
from typing import List

import httpx
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from release_checker.config import CheckerConfig  # noqa: E402
from release_checker.models import ReleaseCandidate  # noqa: E402


def github_release(tag, prerelease=False, draft=False, **extra):
    """One entry shaped like the GitHub releases API."""
    entry = {
        "tag_name": tag,
        "prerelease": prerelease,
        "draft": draft,
        "html_url": f"https://github.com/VirtuaLabs-online/HNode/releases/tag/{tag}",
        "name": f"HNode {tag}",
        "published_at": "2025-01-01T00:00:00Z",
    }
    entry.update(extra)
    return entry


class StubFetcher:
    """In-memory stand-in for a feed fetcher."""

    def __init__(self, releases=None, error=None):
        self.releases: List[ReleaseCandidate] = list(releases or [])
        self.error = error
        self.calls = 0
        self.closed = False

    def fetch_releases(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.releases)

    def close(self):
        self.closed = True


class AsyncStubFetcher(StubFetcher):
    """Async twin of StubFetcher, optionally slow."""

    def __init__(self, releases=None, error=None, delay=0.0):
        super().__init__(releases, error)
        self.delay = delay

    async def fetch_releases(self):
        import asyncio

        if self.delay:
            await asyncio.sleep(self.delay)
        return StubFetcher.fetch_releases(self)

    async def close(self):
        self.closed = True


@pytest.fixture
def config():
    """Config that never waits between attempts."""
    return CheckerConfig(owner="VirtuaLabs-online", repo="HNode", timeout=5.0, max_attempts=1)


@pytest.fixture
def feed_payload():
    """A feed listing newest first, the way GitHub publishes it."""
    return [
        github_release("v2.1.0-beta", prerelease=True),
        github_release("v2.0.5"),
        github_release("v2.0.0"),
        github_release("v1.9.0-rc1", prerelease=True),
    ]


@pytest.fixture
def json_transport():
    """Factory for an httpx.MockTransport that serves a JSON body and records requests."""

    def factory(payload, status_code=200):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(status_code, json=payload)

        transport = httpx.MockTransport(handler)
        transport.requests = requests
        return transport

    return factory
