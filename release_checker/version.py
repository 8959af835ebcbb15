"""Version parsing and comparison utilities."""

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Optional, Tuple
import re


class Ordering(Enum):
    """Result of comparing two versions."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


# Components longer than this are rejected rather than handed to int()
MAX_COMPONENT_DIGITS = 64

_NUMBER = rf'(\d{{1,{MAX_COMPONENT_DIGITS}}})'

VERSION_PATTERN = re.compile(
    rf'{_NUMBER}(?:\.{_NUMBER})?(?:\.{_NUMBER})?(?:-([0-9A-Za-z]+))?',
    re.ASCII,
)


@total_ordering
@dataclass(frozen=True, eq=False)
class SemanticVersion:
    """Semantic version representation with comparison support.

    Unparseable input becomes the zero version (0.0.0, stable) with
    ``is_valid`` set to False, so it still compares as the oldest release.
    """

    major: int = 0
    minor: int = 0
    patch: int = 0
    prerelease: Optional[str] = None
    is_valid: bool = True
    raw: str = ""

    @classmethod
    def parse(cls, raw: Optional[str]) -> 'SemanticVersion':
        """Parse version string like '1.2.3', 'v1.2' or '2.0.0-beta'."""
        return parse(raw)

    @property
    def numeric(self) -> Tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def compare(self, other: 'SemanticVersion') -> Ordering:
        return compare(self, other)

    def __lt__(self, other: 'SemanticVersion') -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return compare(self, other) is Ordering.LESS

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return compare(self, other) is Ordering.EQUAL

    def __hash__(self) -> int:
        label = self.prerelease.lower() if self.prerelease else None
        return hash((self.numeric, label))

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            return f"{base}-{self.prerelease}"
        return base


def parse(raw: Optional[str]) -> SemanticVersion:
    """Parse a free-form version string.

    One leading 'v' or 'V' is stripped. Omitted minor/patch components
    default to 0. An optional '-' suffix of letters and digits is kept as a
    single opaque label. Never raises: failures return an invalid zero version.
    """
    if raw is None:
        return SemanticVersion(is_valid=False, raw="")

    text = raw.strip()
    if text[:1] in ("v", "V"):
        text = text[1:]

    match = VERSION_PATTERN.fullmatch(text)
    if not match:
        return SemanticVersion(is_valid=False, raw=raw)

    major, minor, patch, label = match.groups()
    return SemanticVersion(
        major=int(major),
        minor=int(minor or 0),
        patch=int(patch or 0),
        prerelease=label or None,
        is_valid=True,
        raw=raw,
    )


def compare(a: SemanticVersion, b: SemanticVersion) -> Ordering:
    """Total order over versions.

    Numeric triples are compared first. At equal numeric versions a stable
    release outranks any pre-release. Two labels are compared as
    case-insensitive strings; this is plain lexical ordering, not
    dot-segment-aware semver precedence ('rc10' sorts before 'rc2').
    """
    if a.numeric != b.numeric:
        return Ordering.LESS if a.numeric < b.numeric else Ordering.GREATER

    if a.is_prerelease and not b.is_prerelease:
        return Ordering.LESS
    if not a.is_prerelease and b.is_prerelease:
        return Ordering.GREATER
    if not a.is_prerelease:
        return Ordering.EQUAL

    left = a.prerelease.lower()
    right = b.prerelease.lower()
    if left == right:
        return Ordering.EQUAL
    return Ordering.LESS if left < right else Ordering.GREATER


def is_greater(a: SemanticVersion, b: SemanticVersion) -> bool:
    return compare(a, b) is Ordering.GREATER


def is_less(a: SemanticVersion, b: SemanticVersion) -> bool:
    return compare(a, b) is Ordering.LESS


def is_greater_or_equal(a: SemanticVersion, b: SemanticVersion) -> bool:
    return compare(a, b) is not Ordering.LESS


def is_less_or_equal(a: SemanticVersion, b: SemanticVersion) -> bool:
    return compare(a, b) is not Ordering.GREATER
