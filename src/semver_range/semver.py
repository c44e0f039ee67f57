# SPDX-License-Identifier: MIT
"""The semantic version value type.

A :class:`Version` is ``MAJOR.MINOR.PATCH`` with optional prerelease
identifiers (after ``-``) and build metadata identifiers (after ``+``):
- Pre-release: -alpha, -alpha.1, -beta.11, -rc.1, -0.3.7
- Build metadata: +build, +build.123, +20240101

Versions are immutable. Equality is exact, including metadata; use the
functions in :mod:`semver_range.compare` for precedence.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Iterable, Union

from .identifiers import ZERO, MetadataIdentifier, PrereleaseIdentifier

if TYPE_CHECKING:
    from .range_set import RangeSet
    from .unbroken_range import UnbrokenRange

# Largest major, minor, or patch number accepted when parsing text
MAX_COMPONENT = 2**31 - 1

PrereleaseInput = Union[str, int, PrereleaseIdentifier]
MetadataInput = Union[str, MetadataIdentifier]


def _prerelease_tuple(identifiers: Iterable[PrereleaseInput]) -> tuple[PrereleaseIdentifier, ...]:
    if isinstance(identifiers, str):
        identifiers = identifiers.split(".") if identifiers else ()
    result = []
    for identifier in identifiers:
        if isinstance(identifier, PrereleaseIdentifier):
            result.append(identifier)
        elif isinstance(identifier, int) and not isinstance(identifier, bool):
            result.append(PrereleaseIdentifier.from_int(identifier))
        else:
            result.append(PrereleaseIdentifier(identifier))
    return tuple(result)


def _metadata_tuple(identifiers: Iterable[MetadataInput]) -> tuple[MetadataIdentifier, ...]:
    if isinstance(identifiers, str):
        identifiers = identifiers.split(".") if identifiers else ()
    return tuple(i if isinstance(i, MetadataIdentifier) else MetadataIdentifier(i) for i in identifiers)


@dataclass(frozen=True, slots=True)
class Version:
    """Represents a semantic version.

    Attributes:
        major: Major version number (breaking changes)
        minor: Minor version number (new features, backward compatible)
        patch: Patch version number (bug fixes, backward compatible)
        prerelease_identifiers: Pre-release identifiers, empty for a release
        metadata_identifiers: Build metadata identifiers

    Raises:
        TypeError: If a version number is not an int
        ValueError: If a version number is negative

    Examples:
        >>> str(Version(1, 2, 3, ("rc", 1)))
        '1.2.3-rc.1'
        >>> Version(1, 0, 0).is_release
        True
    """

    major: int
    minor: int = 0
    patch: int = 0
    prerelease_identifiers: tuple[PrereleaseIdentifier, ...] = ()
    metadata_identifiers: tuple[MetadataIdentifier, ...] = ()

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{name.capitalize()} version must be an int, got {type(value).__name__}")
            if value < 0:
                raise ValueError(f"{name.capitalize()} version must not be negative: {value}.")
        prerelease = self.prerelease_identifiers
        if not (isinstance(prerelease, tuple) and all(isinstance(i, PrereleaseIdentifier) for i in prerelease)):
            object.__setattr__(self, "prerelease_identifiers", _prerelease_tuple(prerelease))
        metadata = self.metadata_identifiers
        if not (isinstance(metadata, tuple) and all(isinstance(i, MetadataIdentifier) for i in metadata)):
            object.__setattr__(self, "metadata_identifiers", _metadata_tuple(metadata))

    @classmethod
    def from_parts(
        cls,
        major: int,
        minor: int = 0,
        patch: int = 0,
        prerelease: Union[str, Iterable[PrereleaseInput]] = "",
        metadata: Union[str, Iterable[MetadataInput]] = "",
        allow_leading_zeros: bool = False,
    ) -> "Version":
        """Create a version from its parts, validating every identifier.

        Args:
            major: Major version number
            minor: Minor version number
            patch: Patch version number
            prerelease: Dot-separated prerelease text or a sequence of identifiers
            metadata: Dot-separated metadata text or a sequence of identifiers
            allow_leading_zeros: Strip leading zeros from numeric prerelease
                identifiers instead of rejecting them

        Returns:
            A validated Version

        Raises:
            InvalidIdentifierError: If an identifier is malformed

        Examples:
            >>> str(Version.from_parts(1, 2, 3, "rc.01", "build", allow_leading_zeros=True))
            '1.2.3-rc.1+build'
        """
        if isinstance(prerelease, str):
            prerelease = prerelease.split(".") if prerelease else ()
        if allow_leading_zeros:
            prerelease = [
                PrereleaseIdentifier.parse(i, allow_leading_zeros=True) if isinstance(i, str) else i
                for i in prerelease
            ]
        return cls(major, minor, patch, _prerelease_tuple(prerelease), _metadata_tuple(metadata))

    def __str__(self) -> str:
        """Return the canonical string representation of the version."""
        version = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease_identifiers:
            version += f"-{self.prerelease}"
        if self.metadata_identifiers:
            version += f"+{self.metadata}"
        return version

    def __repr__(self) -> str:
        return (
            f"Version(major={self.major}, minor={self.minor}, patch={self.patch}, "
            f"prerelease={self.prerelease!r}, metadata={self.metadata!r})"
        )

    @property
    def prerelease(self) -> str:
        """The prerelease identifiers joined with dots, empty for a release."""
        return ".".join(i.value for i in self.prerelease_identifiers)

    @property
    def metadata(self) -> str:
        """The metadata identifiers joined with dots."""
        return ".".join(i.value for i in self.metadata_identifiers)

    @property
    def is_prerelease(self) -> bool:
        """Return True if this is a pre-release version."""
        return bool(self.prerelease_identifiers)

    @property
    def is_release(self) -> bool:
        return not self.prerelease_identifiers

    @property
    def prerelease_is_zero(self) -> bool:
        """True for the lowest possible prerelease, as in ``1.2.3-0``."""
        return self.prerelease_identifiers == (ZERO,)

    @property
    def base_version(self) -> str:
        """Return the base version without pre-release or build metadata."""
        return f"{self.major}.{self.minor}.{self.patch}"

    def major_minor_patch_equals(self, other: "Version") -> bool:
        return self.major == other.major and self.minor == other.minor and self.patch == other.patch

    def with_major(self, major: int) -> "Version":
        return self if major == self.major else replace(self, major=major)

    def with_minor(self, minor: int) -> "Version":
        return self if minor == self.minor else replace(self, minor=minor)

    def with_patch(self, patch: int) -> "Version":
        return self if patch == self.patch else replace(self, patch=patch)

    def with_prerelease(self, prerelease: Union[str, Iterable[PrereleaseInput]]) -> "Version":
        return replace(self, prerelease_identifiers=_prerelease_tuple(prerelease))

    def with_metadata(self, metadata: Union[str, Iterable[MetadataInput]]) -> "Version":
        return replace(self, metadata_identifiers=_metadata_tuple(metadata))

    def without_prerelease(self) -> "Version":
        if not self.prerelease_identifiers:
            return self
        return replace(self, prerelease_identifiers=())

    def without_metadata(self) -> "Version":
        if not self.metadata_identifiers:
            return self
        return replace(self, metadata_identifiers=())

    def without_prerelease_or_metadata(self) -> "Version":
        if not self.prerelease_identifiers and not self.metadata_identifiers:
            return self
        return Version(self.major, self.minor, self.patch)

    def satisfies(self, version_range: Union[str, "RangeSet", "UnbrokenRange"]) -> bool:
        """Return True if this version is contained in the range.

        Strings are parsed with the standard range syntax.

        Examples:
            >>> Version(1, 4, 0).satisfies("^1.2.3")
            True
        """
        if isinstance(version_range, str):
            from .standard_range import parse_range

            version_range = parse_range(version_range)
        return version_range.contains(self)


# Smallest version, including prereleases
MIN_VERSION = Version(0, 0, 0, (ZERO,))
# Smallest release version
MIN_RELEASE = Version(0, 0, 0)
# Largest version that can be parsed from text
MAX_VERSION = Version(MAX_COMPONENT, MAX_COMPONENT, MAX_COMPONENT)
