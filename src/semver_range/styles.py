# SPDX-License-Identifier: MIT
"""Dialect flags for version and range parsing.

:class:`VersionStyles` loosens what the version parser accepts.
:class:`RangeOptions` does the same for range parsing and shares bit values
with :class:`VersionStyles` wherever the meaning is the same, so a range
option set can be projected onto the styles used for the versions embedded
in it.
"""

from __future__ import annotations

import enum

from .errors import InvalidOptionsError

_OPTIONAL_PATCH_BIT = 32
_OPTIONAL_MINOR_BIT = 64


def _is_valid_flags(value: int, known: int) -> bool:
    if value & ~known:
        return False
    # Optional minor makes no sense while the patch is still required
    return not value & _OPTIONAL_MINOR_BIT or bool(value & _OPTIONAL_PATCH_BIT)


class VersionStyles(enum.IntFlag):
    """Accepted variations on strict SemVer 2.0 syntax."""

    STRICT = 0
    ALLOW_LEADING_ZEROS = 1
    ALLOW_LEADING_WHITESPACE = 2
    ALLOW_TRAILING_WHITESPACE = 4
    ALLOW_WHITESPACE = ALLOW_LEADING_WHITESPACE | ALLOW_TRAILING_WHITESPACE
    ALLOW_LOWER_V = 8
    ALLOW_UPPER_V = 16
    ALLOW_V = ALLOW_LOWER_V | ALLOW_UPPER_V
    OPTIONAL_PATCH = _OPTIONAL_PATCH_BIT
    OPTIONAL_MINOR_PATCH = _OPTIONAL_MINOR_BIT | OPTIONAL_PATCH
    ANY = ALLOW_LEADING_ZEROS | ALLOW_WHITESPACE | ALLOW_V | OPTIONAL_MINOR_PATCH

    def is_valid(self) -> bool:
        """Return True if this combination of flags may be used for parsing."""
        return _is_valid_flags(int(self), int(VersionStyles.ANY))


class RangeOptions(enum.IntFlag):
    """Accepted variations on the standard range syntax."""

    STRICT = 0
    ALLOW_LEADING_ZEROS = 1
    INCLUDE_ALL_PRERELEASE = 2
    ALLOW_METADATA = 4
    ALLOW_LOWER_V = 8
    ALLOW_UPPER_V = 16
    ALLOW_V = ALLOW_LOWER_V | ALLOW_UPPER_V
    OPTIONAL_PATCH = _OPTIONAL_PATCH_BIT
    OPTIONAL_MINOR_PATCH = _OPTIONAL_MINOR_BIT | OPTIONAL_PATCH
    LOOSE = ALLOW_LEADING_ZEROS | ALLOW_V | OPTIONAL_MINOR_PATCH | ALLOW_METADATA
    ALL = LOOSE | INCLUDE_ALL_PRERELEASE

    def is_valid(self) -> bool:
        """Return True if this combination of flags may be used for parsing."""
        return _is_valid_flags(int(self), int(RangeOptions.ALL))

    def to_styles(self) -> VersionStyles:
        """Project onto the version styles used for versions inside a range.

        Whitespace is handled by the range grammar, so neither whitespace
        style is ever set.
        """
        shared = RangeOptions.ALLOW_LEADING_ZEROS | RangeOptions.ALLOW_V | RangeOptions.OPTIONAL_MINOR_PATCH
        return VersionStyles(int(self & shared))


def check_styles(styles: VersionStyles) -> VersionStyles:
    """Validate version styles, raising InvalidOptionsError when unusable."""
    styles = VersionStyles(styles)
    if not styles.is_valid():
        raise InvalidOptionsError(f"An invalid VersionStyles value was used. ({int(styles)})")
    return styles


def check_range_options(options: RangeOptions) -> RangeOptions:
    """Validate range options, raising InvalidOptionsError when unusable."""
    options = RangeOptions(options)
    if not options.is_valid():
        raise InvalidOptionsError(f"An invalid RangeOptions value was used. ({int(options)})")
    return options


def check_max_length(max_length: int) -> int:
    """Reject negative input length limits."""
    if max_length < 0:
        raise ValueError("Must not be negative.")
    return max_length
