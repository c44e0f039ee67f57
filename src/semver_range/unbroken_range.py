# SPDX-License-Identifier: MIT
"""Contiguous version ranges.

An :class:`UnbrokenRange` is every version between a left and a right bound.
Unless the range includes all prereleases, a prerelease version is only in
range when one of the bounds is a prerelease with the same
major.minor.patch, so ``>=1.2.3-rc <2.0.0`` holds ``1.2.3-rc.1`` but not
``1.5.0-rc``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import ClassVar, Optional, Union

from .bounds import MAX_RIGHT, UNBOUNDED_LEFT, LeftBound, RightBound
from .compare import compare_optional_precedence
from .parser import parse_version
from .semver import MAX_VERSION, MIN_RELEASE, MIN_VERSION, Version

_METADATA_MESSAGE = "Cannot have metadata."


def _validate(version: Version) -> Version:
    if not isinstance(version, Version):
        raise TypeError(f"Range bounds must be Version objects, got {type(version).__name__}")
    if version.metadata_identifiers:
        raise ValueError(_METADATA_MESSAGE)
    return version


def _is_empty(start: LeftBound, end: RightBound, include_all_prerelease: bool) -> bool:
    comparison = compare_optional_precedence(start.version, end.version)
    if comparison > 0:
        return True
    if comparison == 0:
        return not (start.inclusive and end.inclusive)

    if start.version is None:
        if end.inclusive:
            return False
        # "<0.0.0-0" is always empty and "<0.0.0" is empty without prereleases
        return end.version == MIN_VERSION or (not include_all_prerelease and end.version == MIN_RELEASE)

    # With any prerelease allowed there are always versions in between,
    # e.g. 1.0.0-0.x lies between >1.0.0-0 and <1.0.1-0
    if (
        start.inclusive
        or end.inclusive
        or include_all_prerelease
        or start.version.is_prerelease
        or end.version.is_prerelease
    ):
        return False

    # Something like ">1.0.0 <1.0.1"
    s, e = start.version, end.version
    return s.major == e.major and s.minor == e.minor and s.patch == e.patch - 1


@dataclass(frozen=True)
class UnbrokenRange:
    """A range of versions with no gaps.

    Use the factory class methods or :meth:`create` rather than the
    constructor, which performs no normalization.

    Attributes:
        left: Lower bound; ``left.version`` is None when there is no lower limit
        right: Upper bound
        include_all_prerelease: Whether every prerelease between the bounds
            is in range, not only those next to a prerelease bound
        all_prerelease_covered_by_ends: Whether the bounds alone already admit
            every prerelease in range

    Examples:
        >>> r = UnbrokenRange.inclusive_of_start(Version(1, 2, 3), Version(2, 0, 0, ("0",)))
        >>> str(r)
        '^1.2.3'
        >>> r.contains(Version(1, 9, 0))
        True
    """

    left: LeftBound
    right: RightBound
    include_all_prerelease: bool
    all_prerelease_covered_by_ends: bool = field(default=False, compare=False)

    EMPTY: ClassVar["UnbrokenRange"]
    ALL_RELEASE: ClassVar["UnbrokenRange"]
    ALL: ClassVar["UnbrokenRange"]

    @classmethod
    def create(cls, left: LeftBound, right: RightBound, include_all_prerelease: bool = False) -> "UnbrokenRange":
        """Create a normalized range from two bounds.

        Every empty range becomes :data:`EMPTY`, and a right bound without a
        version becomes ``<=MAX_VERSION``.
        """
        if right.version is None:
            right = MAX_RIGHT
        if _is_empty(left, right, include_all_prerelease):
            return EMPTY

        covered = False
        if left.version == right.version:
            # A prerelease equals range holds every prerelease it can
            covered = include_all_prerelease = left.version.is_prerelease
        elif left.version is not None and (left.includes_prerelease or right.includes_prerelease):
            start, end = left.version, right.version
            if start.major_minor_patch_equals(end):
                covered = True
            elif (
                (right.includes_prerelease or end.prerelease_is_zero)
                and start.major == end.major
                and start.minor == end.minor
                and start.patch == end.patch - 1
            ):
                covered = True

        return cls(left, right, include_all_prerelease or covered, covered)

    @classmethod
    def equals(cls, version: Version) -> "UnbrokenRange":
        version = _validate(version)
        return cls.create(LeftBound(version, True), RightBound(version, True))

    @classmethod
    def greater_than(cls, version: Version, include_all_prerelease: bool = False) -> "UnbrokenRange":
        return cls.create(LeftBound(_validate(version), False), MAX_RIGHT, include_all_prerelease)

    @classmethod
    def at_least(cls, version: Version, include_all_prerelease: bool = False) -> "UnbrokenRange":
        return cls.create(LeftBound(_validate(version), True), MAX_RIGHT, include_all_prerelease)

    @classmethod
    def less_than(cls, version: Version, include_all_prerelease: bool = False) -> "UnbrokenRange":
        return cls.create(UNBOUNDED_LEFT, RightBound(_validate(version), False), include_all_prerelease)

    @classmethod
    def at_most(cls, version: Version, include_all_prerelease: bool = False) -> "UnbrokenRange":
        return cls.create(UNBOUNDED_LEFT, RightBound(_validate(version), True), include_all_prerelease)

    @classmethod
    def inclusive(cls, start: Version, end: Version, include_all_prerelease: bool = False) -> "UnbrokenRange":
        """The range ``>=start <=end``."""
        return cls.create(LeftBound(_validate(start), True), RightBound(_validate(end), True), include_all_prerelease)

    @classmethod
    def inclusive_of_start(
        cls, start: Version, end: Version, include_all_prerelease: bool = False
    ) -> "UnbrokenRange":
        """The range ``>=start <end``."""
        return cls.create(LeftBound(_validate(start), True), RightBound(_validate(end), False), include_all_prerelease)

    @classmethod
    def inclusive_of_end(cls, start: Version, end: Version, include_all_prerelease: bool = False) -> "UnbrokenRange":
        """The range ``>start <=end``."""
        return cls.create(LeftBound(_validate(start), False), RightBound(_validate(end), True), include_all_prerelease)

    @classmethod
    def exclusive(cls, start: Version, end: Version, include_all_prerelease: bool = False) -> "UnbrokenRange":
        """The range ``>start <end``."""
        return cls.create(LeftBound(_validate(start), False), RightBound(_validate(end), False), include_all_prerelease)

    @property
    def start(self) -> Optional[Version]:
        return self.left.version

    @property
    def start_inclusive(self) -> bool:
        return self.left.inclusive

    @property
    def end(self) -> Version:
        return self.right.version

    @property
    def end_inclusive(self) -> bool:
        return self.right.inclusive

    @property
    def is_empty(self) -> bool:
        return self == EMPTY

    def contains(self, version: Union[str, Version]) -> bool:
        """Return True if the version is in this range.

        Strings are parsed as strict versions. Metadata is ignored.
        """
        if isinstance(version, str):
            version = parse_version(version)
        if not self.left.contains(version) or not self.right.contains(version):
            return False
        if self.include_all_prerelease or version.is_release:
            return True

        start = self.start
        if start is not None and start.is_prerelease and version.major_minor_patch_equals(start):
            return True
        end = self.end
        return end.is_prerelease and version.major_minor_patch_equals(end)

    def __contains__(self, version: Union[str, Version]) -> bool:
        return self.contains(version)

    def overlaps(self, other: "UnbrokenRange") -> bool:
        """Return True if the bounds of the two ranges intersect."""
        return self.left.compare_right(other.right) <= 0 and other.left.compare_right(self.right) <= 0

    def overlaps_or_abuts(self, other: "UnbrokenRange") -> bool:
        """Return True if the ranges overlap or no version can fall between them."""
        if self.overlaps(other):
            return True
        # Even when its bounds touch, the empty range abuts nothing
        if self == EMPTY or other == EMPTY:
            return False

        lower, upper = (self, other) if compare_ranges(self, other) <= 0 else (other, self)
        lower_end = lower.right
        upper_start = upper.left

        if (lower_end.inclusive or upper_start.inclusive) and lower_end.version == upper_start.version:
            return True

        # Otherwise they abut only when the prereleases between them are excluded
        if (
            lower.include_all_prerelease
            or upper.include_all_prerelease
            or lower_end.includes_prerelease
            or upper_start.includes_prerelease
        ):
            return False

        return upper_start.inclusive and lower_end.version.major_minor_patch_equals(upper_start.version)

    def contains_range(self, other: "UnbrokenRange") -> bool:
        """Return True if every version in other is also in this range."""
        if other == EMPTY:
            return True
        if other.include_all_prerelease and not self.include_all_prerelease:
            return False
        if self.left.compare(other.left) > 0 or other.right.compare(self.right) > 0:
            return False
        if self.include_all_prerelease:
            return True

        # The bounds fit, but prereleases admitted at the other's ends must be admitted here too
        if other.left.includes_prerelease:
            start = self.start
            if start is None or not start.is_prerelease or not start.major_minor_patch_equals(other.start):
                return False
        if other.right.includes_prerelease:
            end = self.end
            if not end.is_prerelease or not end.major_minor_patch_equals(other.end):
                return False
        return True

    def try_union(self, other: "UnbrokenRange") -> Optional["UnbrokenRange"]:
        """Return a single range holding exactly the versions of both, or None."""
        # Containment also covers empty ranges
        if self.contains_range(other):
            return self
        if other.contains_range(self):
            return other

        if self.include_all_prerelease != other.include_all_prerelease:
            return None
        if not self.overlaps_or_abuts(other):
            return None

        include_all_prerelease = self.include_all_prerelease
        union = UnbrokenRange.create(
            self.left.min(other.left), self.right.max(other.right), include_all_prerelease
        )
        if not include_all_prerelease:
            # Prereleases admitted by a dropped inner bound must survive the union
            inner_left = self.left.max(other.left)
            if inner_left.includes_prerelease and not union.contains(inner_left.version):
                return None
            inner_right = self.right.min(other.right)
            if inner_right.includes_prerelease and not union.contains(inner_right.version):
                return None
        return union

    @cached_property
    def _text(self) -> str:
        if self == EMPTY:
            # Still empty when combined with "*-*"
            return "<0.0.0-0"

        if self.left.inclusive and self.right.inclusive and self.start == self.end:
            return str(self.start)

        prerelease_not_covered = self.include_all_prerelease and not self.all_prerelease_covered_by_ends

        left_unbounded = self.left == UNBOUNDED_LEFT
        right_unbounded = self.right == MAX_RIGHT
        if left_unbounded and right_unbounded:
            return "*-*" if prerelease_not_covered else "*"

        special = self._special_text(prerelease_not_covered)
        if special is not None:
            return special

        if left_unbounded:
            text = str(self.right)
        elif right_unbounded:
            text = str(self.left)
        else:
            text = f"{self.left} {self.right}"
        return "*-* " + text if prerelease_not_covered else text

    def _special_text(self, prerelease_not_covered: bool) -> Optional[str]:
        """Render as a wildcard, tilde, or caret range when the bounds allow it."""
        start, end = self.start, self.end
        if self.left.inclusive and not self.right.inclusive and end.prerelease_is_zero:
            # Most shorthand forms expand to ">=X.Y.Z <P.Q.R-0"
            text = self._wildcard_text(start, end, prerelease_not_covered)
            if text is not None:
                return text

            if start.major == end.major and start.minor == end.minor - 1 and end.patch == 0:
                return ("*-* ~" if prerelease_not_covered else "~") + str(start)

            # Caret ranges below 1.0.0 that only pin the minor print as tilde ranges above
            if start.major != 0:
                caret = start.major == end.major - 1 and end.minor == 0 and end.patch == 0
            else:
                caret = end.major == 0 and start.minor == 0 and end.minor == 0 and start.patch == end.patch - 1
            if caret:
                return ("*-* ^" if prerelease_not_covered else "^") + str(start)

        return self._prerelease_wildcard_text()

    @staticmethod
    def _wildcard_text(start: Version, end: Version, prerelease_not_covered: bool) -> Optional[str]:
        if start.patch == 0 and end.patch == 0 and (start.is_release or start.prerelease_is_zero):
            if start.major == end.major and start.minor == end.minor - 1:
                text = f"{start.major}.{start.minor}.*"
            elif start.major == end.major - 1 and start.minor == 0 and end.minor == 0:
                text = f"{start.major}.*"
            else:
                return None
            if not prerelease_not_covered:
                return text
            return text + "-*" if start.prerelease_is_zero else "*-* " + text

        # Ranges like 2.1.4-* are ">=X.Y.Z-0 <X.Y.(Z+1)-0"
        if (
            start.prerelease_is_zero
            and start.major == end.major
            and start.minor == end.minor
            and start.patch == end.patch - 1
        ):
            return f"{start.major}.{start.minor}.{start.patch}-*"
        return None

    def _prerelease_wildcard_text(self) -> Optional[str]:
        # Ranges like 1.2.3-rc.* are ">=X.Y.Z-rc.0 <X.Y.Z-rc-"
        start, end = self.start, self.end
        if not (self.left.inclusive and not self.right.inclusive):
            return None
        if start is None or not start.major_minor_patch_equals(end):
            return None
        if not start.is_prerelease or not end.is_prerelease:
            return None

        left = start.prerelease_identifiers
        right = end.prerelease_identifiers
        if len(left) < 2 or left[-1].value != "0" or len(left) - 1 != len(right):
            return None
        if left[:-2] != right[:-1]:
            return None
        if left[-2].next_identifier() != right[-1]:
            return None
        prefix = ".".join(i.value for i in left[:-1])
        return f"{start.major}.{start.minor}.{start.patch}-{prefix}.*"

    def __str__(self) -> str:
        """Render the range in the standard range syntax.

        Ranges that include every prerelease are prefixed with ``*-*``.
        Parsing the result with the same options gives back an equal range.
        """
        return self._text


def compare_ranges(a: UnbrokenRange, b: UnbrokenRange) -> int:
    """Order ranges by start, widest first, with all-prerelease ranges before others."""
    result = a.left.compare(b.left)
    if result:
        return result
    result = -a.right.compare(b.right)
    if result:
        return result
    return int(b.include_all_prerelease) - int(a.include_all_prerelease)


EMPTY = UnbrokenRange(LeftBound(MAX_VERSION, False), RightBound(MIN_VERSION, False), False, False)
ALL_RELEASE = UnbrokenRange.at_most(MAX_VERSION)
ALL = UnbrokenRange.at_most(MAX_VERSION, True)

UnbrokenRange.EMPTY = EMPTY
UnbrokenRange.ALL_RELEASE = ALL_RELEASE
UnbrokenRange.ALL = ALL
