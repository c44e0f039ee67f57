# SPDX-License-Identifier: MIT
"""Unions of unbroken ranges.

A :class:`RangeSet` is what a range expression such as
``>=1.0.0 <2.0.0 || ^3.1`` parses to. Members are kept sorted, and any two
members that can be written as one range are merged when the set is
created, so equal sets of versions usually compare equal.
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING, ClassVar, Iterable, Iterator, Union

from .semver import Version
from .unbroken_range import ALL, ALL_RELEASE, EMPTY, UnbrokenRange, compare_ranges

if TYPE_CHECKING:
    from .styles import RangeOptions

logger = logging.getLogger(__name__)


def _merge(ranges: list[UnbrokenRange]) -> list[UnbrokenRange]:
    """Sort ranges and union every pair that can be joined, in place.

    A union can widen a member past ones already checked, so the list is
    sorted again and scanned from the start until a pass merges nothing.
    """
    merged = True
    while merged:
        merged = False
        ranges.sort(key=functools.cmp_to_key(compare_ranges))
        for i in range(len(ranges)):
            for j in range(i + 1, len(ranges)):
                union = ranges[i].try_union(ranges[j])
                if union is None:
                    continue
                logger.debug("Merged version ranges %s and %s into %s", ranges[i], ranges[j], union)
                ranges[i] = union
                del ranges[j]
                merged = True
                break
            if merged:
                break
    return ranges


class RangeSet:
    """A set of versions made up of one or more unbroken ranges.

    Examples:
        >>> from semver_range import parse_range
        >>> ranges = parse_range("1.* || 2.*")
        >>> str(ranges)
        '>=1.0.0 <3.0.0-0'
        >>> ranges.contains("2.4.0")
        True
    """

    __slots__ = ("_ranges", "_hash")

    EMPTY: ClassVar["RangeSet"]
    ALL_RELEASE: ClassVar["RangeSet"]
    ALL: ClassVar["RangeSet"]

    def __init__(self, ranges: Iterable[UnbrokenRange] = ()):
        members = []
        for member in ranges:
            if not isinstance(member, UnbrokenRange):
                raise TypeError(f"Range set members must be UnbrokenRange objects, got {type(member).__name__}")
            if member != EMPTY:
                members.append(member)
        self._ranges: tuple[UnbrokenRange, ...] = tuple(_merge(members))
        self._hash: int | None = None

    @classmethod
    def create(cls, *ranges: UnbrokenRange) -> "RangeSet":
        """Create a set from the given ranges, merging where possible."""
        return cls(ranges)

    @classmethod
    def parse(
        cls, range_string: str, options: "RangeOptions | int" = 0, max_length: int | None = None
    ) -> "RangeSet":
        """Parse a range in the standard syntax. See :func:`~semver_range.standard_range.parse_range`."""
        from .standard_range import DEFAULT_MAX_RANGE_LENGTH, parse_range

        return parse_range(range_string, options, DEFAULT_MAX_RANGE_LENGTH if max_length is None else max_length)

    @classmethod
    def parse_npm(
        cls, range_string: str, include_all_prerelease: bool = False, max_length: int | None = None
    ) -> "RangeSet":
        """Parse a range in the npm syntax. See :func:`~semver_range.npm_range.parse_npm_range`."""
        from .npm_range import DEFAULT_MAX_RANGE_LENGTH, parse_npm_range

        return parse_npm_range(
            range_string, include_all_prerelease, DEFAULT_MAX_RANGE_LENGTH if max_length is None else max_length
        )

    @property
    def ranges(self) -> tuple[UnbrokenRange, ...]:
        return self._ranges

    def contains(self, version: Union[str, Version]) -> bool:
        """Return True if any member range contains the version."""
        if isinstance(version, str):
            from .parser import parse_version

            version = parse_version(version)
        return any(r.contains(version) for r in self._ranges)

    def __contains__(self, version: Union[str, Version]) -> bool:
        return self.contains(version)

    def union(self, other: "RangeSet") -> "RangeSet":
        """Return a set holding the versions of both sets."""
        if not isinstance(other, RangeSet):
            return NotImplemented
        return RangeSet(self._ranges + other._ranges)

    __or__ = union

    def __iter__(self) -> Iterator[UnbrokenRange]:
        return iter(self._ranges)

    def __len__(self) -> int:
        return len(self._ranges)

    def __getitem__(self, index: int) -> UnbrokenRange:
        return self._ranges[index]

    def __bool__(self) -> bool:
        return bool(self._ranges)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RangeSet):
            return NotImplemented
        return self._ranges == other._ranges

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(self._ranges)
        return self._hash

    def __str__(self) -> str:
        if not self._ranges:
            return str(EMPTY)
        return " || ".join(str(r) for r in self._ranges)

    def __repr__(self) -> str:
        return f"RangeSet({str(self)!r})"


RangeSet.EMPTY = RangeSet()
RangeSet.ALL_RELEASE = RangeSet((ALL_RELEASE,))
RangeSet.ALL = RangeSet((ALL,))
