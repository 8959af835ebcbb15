"""Release selection and update decision logic.

Pure functions only: the release feed is fetched elsewhere and handed in
as an already materialized list or iterable.
"""

from typing import Iterable, Optional, Union
import logging

from .models import Channel, ReleaseCandidate, UpdateDecision
from .version import SemanticVersion, compare, parse, Ordering

logger = logging.getLogger(__name__)


def select_release(
    releases: Iterable[ReleaseCandidate],
    channel: Union[Channel, int, str],
) -> Optional[ReleaseCandidate]:
    """Pick the release relevant to a channel.

    Stable takes the first entry not flagged as a pre-release, beta takes
    the first entry whatever its flag. This is a first-match scan in feed
    order, not a search for the highest version: it relies on the feed
    listing newest releases first, which GitHub does but nothing here checks.
    """
    channel = Channel.coerce(channel)

    for release in releases:
        if channel is Channel.BETA or not release.is_prerelease:
            return release
    return None


def _parse_logged(raw: str, what: str) -> SemanticVersion:
    version = parse(raw)
    if not version.is_valid:
        logger.warning(f"Invalid {what} version string: {raw!r}, treating it as 0.0.0")
    return version


def evaluate(
    local_version: str,
    releases: Iterable[ReleaseCandidate],
    channel: Union[Channel, int, str],
) -> UpdateDecision:
    """Decide whether the feed offers something newer than local_version."""
    channel = Channel.coerce(channel)

    chosen = select_release(releases, channel)
    if chosen is None:
        logger.debug(f"No {channel.label} release in feed")
        return UpdateDecision.none(local_version, channel)

    local = _parse_logged(local_version, "local")
    remote = _parse_logged(chosen.tag, "remote")
    logger.debug(f"Latest {channel.label} release: {chosen.tag} (local {local_version})")

    newer = compare(remote, local) is Ordering.GREATER
    # a stable track never offers a pre-release, whether the feed flags it
    # or only its tag carries a label
    if channel is Channel.STABLE and (chosen.is_prerelease or remote.is_prerelease):
        newer = False

    if not newer:
        return UpdateDecision.none(local_version, channel)

    return UpdateDecision(
        available=True,
        chosen_tag=chosen.tag,
        chosen_url=chosen.url,
        local_version=local_version,
        channel=channel,
    )
