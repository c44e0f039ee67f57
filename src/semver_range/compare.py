# SPDX-License-Identifier: MIT
"""Version comparison.

Two orderings are provided:

- Precedence, as defined by SemVer 2.0.0: build metadata is ignored, so
  ``1.0.0+a`` and ``1.0.0+b`` have equal precedence.
- Sort order: precedence first, then metadata identifiers as a tiebreak so
  that only identical versions compare equal.

Pre-release ordering: numeric identifiers compare numerically and sort
before alphanumeric ones; a longer identifier list sorts after any of its
prefixes; a release sorts after all of its pre-releases.
"""

from __future__ import annotations

from typing import Optional, Union

from .identifiers import compare_ordinal
from .parser import parse_version
from .semver import Version

# Release versions sort after any prerelease of the same major.minor.patch
_RELEASE_KEY: tuple = (1,)


def _coerce(version: Union[str, Version]) -> Version:
    return parse_version(version) if isinstance(version, str) else version


def _sign(a: int, b: int) -> int:
    return (a > b) - (a < b)


def _compare_precedence(v1: Version, v2: Version) -> int:
    if v1 is v2:
        return 0
    result = _sign(v1.major, v2.major) or _sign(v1.minor, v2.minor) or _sign(v1.patch, v2.patch)
    if result:
        return result

    pre1 = v1.prerelease_identifiers
    pre2 = v2.prerelease_identifiers
    # No pre-release > any pre-release
    if not pre1 or not pre2:
        return _sign(not pre1, not pre2)

    for p1, p2 in zip(pre1, pre2):
        result = p1.compare(p2)
        if result:
            return result

    # All compared parts equal - longer pre-release has higher precedence
    return _sign(len(pre1), len(pre2))


def _compare_sort_order(v1: Version, v2: Version) -> int:
    result = _compare_precedence(v1, v2)
    if result:
        return result

    meta1 = v1.metadata_identifiers
    meta2 = v2.metadata_identifiers
    for m1, m2 in zip(meta1, meta2):
        result = m1.compare(m2)
        if result:
            return result
    # No metadata sorts before any metadata
    result = _sign(len(meta1), len(meta2))
    if result:
        return result

    # Numerically equal identifiers written differently, like 01 and 1
    for p1, p2 in zip(v1.prerelease_identifiers, v2.prerelease_identifiers):
        if p1.is_numeric:
            result = compare_ordinal(p1.value, p2.value)
            if result:
                return result
    return 0


def compare_precedence(version1: Union[str, Version], version2: Union[str, Version]) -> int:
    """Compare two semantic versions by precedence.

    Args:
        version1: First version (string or Version object)
        version2: Second version (string or Version object)

    Returns:
        -1 if version1 < version2
        0 if version1 == version2
        1 if version1 > version2

    Raises:
        InvalidVersionError: If either version string is invalid

    Note:
        Build metadata is ignored in comparisons per SemVer specification.

    Examples:
        >>> compare_precedence("1.0.0", "2.0.0")
        -1
        >>> compare_precedence("1.0.0-rc.1", "1.0.0")
        -1
        >>> compare_precedence("1.0.0+build", "1.0.0")
        0
    """
    return _compare_precedence(_coerce(version1), _coerce(version2))


def compare_sort_order(version1: Union[str, Version], version2: Union[str, Version]) -> int:
    """Compare two semantic versions by sort order.

    Sort order agrees with precedence except that versions differing only in
    metadata are ordered by their metadata identifiers.

    Examples:
        >>> compare_sort_order("1.2.3", "1.2.3+b")
        -1
        >>> compare_sort_order("1.2.3+a", "1.2.3+b")
        -1
    """
    return _compare_sort_order(_coerce(version1), _coerce(version2))


def compare_optional_precedence(v1: Optional[Version], v2: Optional[Version]) -> int:
    """Precedence comparison where None sorts before every version."""
    if v1 is None:
        return 0 if v2 is None else -1
    if v2 is None:
        return 1
    return _compare_precedence(v1, v2)


def precedence_equals(version1: Union[str, Version], version2: Union[str, Version]) -> bool:
    """Return True if the versions differ at most in metadata."""
    v1 = _coerce(version1)
    v2 = _coerce(version2)
    return v1.major_minor_patch_equals(v2) and v1.prerelease_identifiers == v2.prerelease_identifiers


def precedence_key(version: Union[str, Version]) -> tuple:
    """Return a sort key ordering versions by precedence.

    Examples:
        >>> sorted(["1.0.0", "2.0.0", "1.0.0-alpha"], key=precedence_key)
        ['1.0.0-alpha', '1.0.0', '2.0.0']
    """
    v = _coerce(version)
    if not v.prerelease_identifiers:
        prerelease_key: tuple = _RELEASE_KEY
    else:
        # Numeric identifiers sort before alphanumeric ones
        parts = tuple(
            (0, i.numeric_value, "") if i.numeric_value is not None else (1, 0, i.value)
            for i in v.prerelease_identifiers
        )
        prerelease_key = (0, parts)
    return (v.major, v.minor, v.patch, prerelease_key)


def sort_order_key(version: Union[str, Version]) -> tuple:
    """Return a sort key that orders versions the same way as compare_sort_order.

    Examples:
        >>> sorted(["1.0.0+b", "1.0.0", "1.0.0+a"], key=sort_order_key)
        ['1.0.0', '1.0.0+a', '1.0.0+b']
    """
    v = _coerce(version)
    metadata = tuple(i.value for i in v.metadata_identifiers)
    raw_numbers = tuple(i.value for i in v.prerelease_identifiers if i.is_numeric)
    return precedence_key(v) + (metadata, raw_numbers)
