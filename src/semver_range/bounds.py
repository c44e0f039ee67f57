# SPDX-License-Identifier: MIT
"""Left and right bounds of a version range.

A bound is a version plus an inclusive flag. A left bound without a version
places no lower limit on a range and a right bound without one places no
upper limit. Ranges replace an unbounded right edge with ``<=MAX_VERSION``
when they are created, so only range parsing sees the open form.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .compare import compare_optional_precedence
from .semver import MAX_VERSION, Version


def _sign_of_bool(a: bool, b: bool) -> int:
    return (a > b) - (a < b)


@dataclass(frozen=True, slots=True)
class LeftBound:
    """The lower edge of a range, ``>=version`` or ``>version``."""

    version: Optional[Version]
    inclusive: bool

    @property
    def includes_prerelease(self) -> bool:
        """Whether prereleases at this bound's major.minor.patch can be in range."""
        return self.version is not None and self.version.is_prerelease

    def contains(self, version: Version) -> bool:
        result = compare_optional_precedence(self.version, version)
        return result <= 0 if self.inclusive else result < 0

    def compare(self, other: "LeftBound") -> int:
        """Order left bounds from least to most restrictive."""
        result = compare_optional_precedence(self.version, other.version)
        if result:
            return result
        # An inclusive bound admits more, so it is the lesser one
        return -_sign_of_bool(self.inclusive, other.inclusive)

    def compare_right(self, other: "RightBound") -> int:
        """Compare against a right bound; a result <= 0 means they meet or cross."""
        if self.version is None or other.version is None:
            return -1
        result = compare_optional_precedence(self.version, other.version)
        if result:
            return result
        return 0 if self.inclusive and other.inclusive else 1

    def max(self, other: "LeftBound") -> "LeftBound":
        """The more restrictive of two left bounds."""
        return self if self.compare(other) >= 0 else other

    def min(self, other: "LeftBound") -> "LeftBound":
        """The less restrictive of two left bounds."""
        return self if self.compare(other) <= 0 else other

    def __str__(self) -> str:
        if self.version is None:
            return ""
        return (">=" if self.inclusive else ">") + str(self.version)


@dataclass(frozen=True, slots=True)
class RightBound:
    """The upper edge of a range, ``<=version`` or ``<version``."""

    version: Optional[Version]
    inclusive: bool

    @property
    def includes_prerelease(self) -> bool:
        """Whether prereleases at this bound's major.minor.patch can be in range.

        ``<X.Y.Z-0`` is the conventional way to stop just below ``X.Y.Z`` and
        admits none of its prereleases.
        """
        version = self.version
        if version is None or not version.is_prerelease:
            return False
        return self.inclusive or not version.prerelease_is_zero

    def contains(self, version: Version) -> bool:
        if self.version is None:
            return True
        result = compare_optional_precedence(version, self.version)
        return result <= 0 if self.inclusive else result < 0

    def compare(self, other: "RightBound") -> int:
        """Order right bounds from most to least restrictive."""
        if self.version is None or other.version is None:
            # No upper limit is the least restrictive
            return _sign_of_bool(self.version is None, other.version is None)
        result = compare_optional_precedence(self.version, other.version)
        if result:
            return result
        return _sign_of_bool(self.inclusive, other.inclusive)

    def min(self, other: "RightBound") -> "RightBound":
        """The more restrictive of two right bounds."""
        return self if self.compare(other) <= 0 else other

    def max(self, other: "RightBound") -> "RightBound":
        """The less restrictive of two right bounds."""
        return self if self.compare(other) >= 0 else other

    def __str__(self) -> str:
        if self.version is None:
            return ""
        return ("<=" if self.inclusive else "<") + str(self.version)


UNBOUNDED_LEFT = LeftBound(None, False)
# Open upper edge used while parsing
UNBOUNDED_RIGHT = RightBound(None, False)
# The same edge once a range has been created
MAX_RIGHT = RightBound(MAX_VERSION, True)
