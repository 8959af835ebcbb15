"""Data models for release feeds and update decisions."""

from dataclasses import dataclass, asdict
from enum import IntEnum
from typing import Any, Dict, Mapping, Optional, Union


class InvalidChannelError(ValueError):
    """Raised when a channel selector is neither stable nor beta."""


class Channel(IntEnum):
    """Update track selected by the user."""

    STABLE = 0
    BETA = 1

    @classmethod
    def coerce(cls, value: Union['Channel', int, str]) -> 'Channel':
        """Accept a Channel, its index (0/1) or its name; reject anything else."""
        if isinstance(value, cls):
            return value
        # bool is an int subclass; True/False are not channel indexes
        if isinstance(value, bool):
            raise InvalidChannelError(f"Invalid channel: {value!r}")
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise InvalidChannelError(f"Invalid channel index: {value}") from None
        if isinstance(value, str):
            key = value.strip().lower()
            if key in _CHANNEL_NAMES:
                return _CHANNEL_NAMES[key]
        raise InvalidChannelError(
            f"Invalid channel: {value!r}. Expected one of: stable, beta"
        )

    @property
    def label(self) -> str:
        return "stable" if self is Channel.STABLE else "pre-release"


_CHANNEL_NAMES: Dict[str, Channel] = {
    "stable": Channel.STABLE,
    "beta": Channel.BETA,
    "prerelease": Channel.BETA,
    "pre-release": Channel.BETA,
}


@dataclass(frozen=True)
class ReleaseCandidate:
    """A single entry of the remote release feed, prior to parsing."""

    tag: str
    is_prerelease: bool = False
    url: str = ""
    name: Optional[str] = None
    published_at: Optional[str] = None

    @classmethod
    def from_github(cls, data: Mapping[str, Any]) -> 'ReleaseCandidate':
        """Build a candidate from one object of the GitHub releases API."""
        if not isinstance(data, Mapping):
            raise ValueError(f"Release entry is not an object: {type(data).__name__}")

        tag = data.get("tag_name")
        if not isinstance(tag, str) or not tag.strip():
            raise ValueError("Release entry has no tag_name")

        return cls(
            tag=tag.strip(),
            is_prerelease=bool(data.get("prerelease", False)),
            url=data.get("html_url") or "",
            name=data.get("name") or None,
            published_at=data.get("published_at") or None,
        )


@dataclass(frozen=True)
class UpdateDecision:
    """Outcome of an update check. Tag and URL are set only when available."""

    available: bool
    chosen_tag: Optional[str] = None
    chosen_url: Optional[str] = None
    local_version: str = ""
    channel: Channel = Channel.STABLE

    @classmethod
    def none(cls, local_version: str = "", channel: Channel = Channel.STABLE) -> 'UpdateDecision':
        return cls(available=False, local_version=local_version, channel=channel)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["channel"] = self.channel.name.lower()
        return data
