"""Configuration for the release feed and checker settings."""

from dataclasses import dataclass
from typing import Dict, Optional, Any
import os

from . import __version__

DEFAULT_OWNER = "VirtuaLabs-online"
DEFAULT_REPO = "HNode"
DEFAULT_API_BASE_URL = "https://api.github.com"
DEFAULT_USER_AGENT = f"Release-Checker/{__version__}"

# URL patterns for the GitHub REST API
URL_PATTERNS = {
    "releases": "{base}/repos/{owner}/{repo}/releases",
}

# Environment variables read by CheckerConfig.from_env
ENV_VARS = {
    "owner": "RELEASE_CHECKER_OWNER",
    "repo": "RELEASE_CHECKER_REPO",
    "api_base_url": "RELEASE_CHECKER_API_URL",
    "timeout": "RELEASE_CHECKER_TIMEOUT",
    "token": "GITHUB_TOKEN",
}


@dataclass
class CheckerConfig:
    """Where to look for releases and how to talk to the feed."""

    owner: str = DEFAULT_OWNER
    repo: str = DEFAULT_REPO
    api_base_url: str = DEFAULT_API_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = 30.0
    max_attempts: int = 3
    per_page: int = 30
    # Optional API token, raises the anonymous rate limit
    token: Optional[str] = None

    def __post_init__(self):
        if not self.owner or not self.repo:
            raise ValueError("Both owner and repo must be set")
        if self.timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {self.timeout}")
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.per_page < 1:
            raise ValueError(f"per_page must be at least 1, got {self.per_page}")

    @property
    def releases_url(self) -> str:
        return URL_PATTERNS["releases"].format(
            base=self.api_base_url.rstrip("/"),
            owner=self.owner,
            repo=self.repo,
        )

    @property
    def headers(self) -> Dict[str, str]:
        """HTTP headers sent with every feed request."""
        headers = {
            "User-Agent": self.user_agent,
            "Accept": "application/vnd.github+json",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None, **overrides: Any) -> 'CheckerConfig':
        """Build a config from environment variables.

        Keyword overrides that are not None take precedence over the
        environment.
        """
        environ = os.environ if environ is None else environ
        values: Dict[str, Any] = {}

        for field_name, env_name in ENV_VARS.items():
            raw = environ.get(env_name)
            if raw:
                values[field_name] = raw

        if "timeout" in values:
            try:
                values["timeout"] = float(values["timeout"])
            except ValueError:
                raise ValueError(
                    f"{ENV_VARS['timeout']} must be a number, got {values['timeout']!r}"
                ) from None

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
