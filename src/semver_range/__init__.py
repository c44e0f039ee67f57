# SPDX-License-Identifier: MIT
"""Semantic version parsing, comparison, and version ranges.

This package parses versions following the SemVer 2.0.0 specification,
compares them by precedence or sort order, and parses version ranges in a
standard syntax or the syntax used by npm.

Example:
    >>> from semver_range import parse_version, parse_range, parse_npm_range

    >>> version = parse_version("1.2.3-alpha.1+build.456")
    >>> version.major
    1
    >>> version.prerelease
    'alpha.1'

    >>> parse_range("^1.2.0").contains(version)
    False
    >>> parse_npm_range("1.x || >=2.5.0").contains("1.9.0")
    True
"""

__version__ = "0.1.0"

from .errors import (
    InvalidIdentifierError,
    InvalidOptionsError,
    InvalidRangeError,
    InvalidVersionError,
    ParseErrorKind,
)
from .styles import RangeOptions, VersionStyles
from .identifiers import MetadataIdentifier, PrereleaseIdentifier
from .semver import (
    MAX_VERSION,
    MIN_RELEASE,
    MIN_VERSION,
    Version,
)
from .parser import (
    DEFAULT_MAX_VERSION_LENGTH,
    is_valid_semver,
    parse_version,
    try_parse_version,
)
from .compare import (
    compare_precedence,
    compare_sort_order,
    precedence_equals,
    precedence_key,
    sort_order_key,
)
from .unbroken_range import UnbrokenRange
from .range_set import RangeSet
from .range_parser import DEFAULT_MAX_RANGE_LENGTH
from .standard_range import parse_range, try_parse_range
from .npm_range import parse_npm_range, try_parse_npm_range
from .config import ConfigError, ParseConfig

__all__ = [
    # Errors
    "InvalidIdentifierError",
    "InvalidOptionsError",
    "InvalidRangeError",
    "InvalidVersionError",
    "ParseErrorKind",
    # Dialects
    "RangeOptions",
    "VersionStyles",
    # Versions
    "MetadataIdentifier",
    "PrereleaseIdentifier",
    "Version",
    "MAX_VERSION",
    "MIN_RELEASE",
    "MIN_VERSION",
    "DEFAULT_MAX_VERSION_LENGTH",
    "parse_version",
    "try_parse_version",
    "is_valid_semver",
    # Version comparison
    "compare_precedence",
    "compare_sort_order",
    "precedence_equals",
    "precedence_key",
    "sort_order_key",
    # Ranges
    "UnbrokenRange",
    "RangeSet",
    "DEFAULT_MAX_RANGE_LENGTH",
    "parse_range",
    "try_parse_range",
    "parse_npm_range",
    "try_parse_npm_range",
    # Configuration
    "ConfigError",
    "ParseConfig",
]
