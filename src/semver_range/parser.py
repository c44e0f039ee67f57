# SPDX-License-Identifier: MIT
"""Semantic version parsing.

The scanner walks the text once, left to right, and stops at the first rule
the text breaks. It returns a :class:`~semver_range.errors.ParseFailure`
rather than raising, so :func:`parse_version` and :func:`try_parse_version`
share one code path; the try variant passes ``detailed=False`` and never
formats a message.

Range parsing reuses the scanner with :class:`WildcardOptions`, which let a
major, minor, or patch number (and in the standard range dialect the last
prerelease identifier) be a wildcard character.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Union

from .errors import (
    PARSE_FAILED,
    InvalidVersionError,
    ParseErrorKind,
    ParseFailure,
    failure,
)
from .identifiers import DIGITS, IDENTIFIER_CHARS, MetadataIdentifier, PrereleaseIdentifier
from .semver import MAX_COMPONENT, Version
from .span import Span
from .styles import VersionStyles, check_max_length, check_styles

DEFAULT_MAX_VERSION_LENGTH = 1024

# Largest numeric prerelease identifier accepted when parsing text
MAX_PRERELEASE_NUMBER = 2**64 - 1

_OPTIONAL_MINOR = int(VersionStyles.OPTIONAL_MINOR_PATCH) & ~int(VersionStyles.OPTIONAL_PATCH)
_COMPONENT_END = frozenset(".-+")


class WildcardVersion(enum.IntFlag):
    """Which parts of a version were written as wildcards."""

    NONE = 0
    PRERELEASE = 1
    PATCH = 2
    MINOR = 4
    MAJOR = 8
    MINOR_PATCH = MINOR | PATCH
    MAJOR_MINOR_PATCH = MAJOR | MINOR_PATCH


@dataclass(frozen=True, slots=True)
class WildcardOptions:
    """Wildcard handling used when parsing versions inside ranges.

    Attributes:
        chars: Characters that stand for a wildcard
        allow_prerelease: Whether the final prerelease identifier may be a wildcard
        missing_are_wildcards: Whether omitted minor and patch numbers count as
            wildcards rather than zero
    """

    chars: frozenset[str] = frozenset()
    allow_prerelease: bool = False
    missing_are_wildcards: bool = False


NO_WILDCARDS = WildcardOptions()

ScanResult = Union[ParseFailure, tuple[Version, WildcardVersion]]


def scan_version(
    span: Span,
    styles: VersionStyles,
    max_length: int,
    detailed: bool = True,
    wildcards: WildcardOptions = NO_WILDCARDS,
) -> ScanResult:
    """Scan the whole span as a version.

    Styles and max_length are assumed to be validated by the caller.

    Returns:
        The version and its wildcard flags, or the failure that stopped the scan
    """
    version = str(span)
    if span.is_empty:
        return failure(detailed, ParseErrorKind.EMPTY_INPUT, "Empty string is not a valid version.")
    if len(span) > max_length:
        return failure(
            detailed,
            ParseErrorKind.TOO_LONG,
            "Exceeded maximum length of {max_length} for '{version}'.",
            max_length=max_length,
            version=version,
        )

    rest = span.skip_while(str.isspace)
    if rest.is_empty:
        return failure(detailed, ParseErrorKind.ALL_WHITESPACE_INPUT, "Whitespace is not a valid version.")
    if rest.start > span.start and not styles & VersionStyles.ALLOW_LEADING_WHITESPACE:
        return failure(
            detailed,
            ParseErrorKind.LEADING_WHITESPACE_NOT_ALLOWED,
            "Version '{version}' has leading whitespace.",
            version=version,
        )
    body = rest.trim_end(str.isspace)

    lead = body.peek()
    if lead == "v":
        if not styles & VersionStyles.ALLOW_LOWER_V:
            return failure(detailed, ParseErrorKind.LEADING_V_NOT_ALLOWED, "Leading 'v' in '{version}'.", version=version)
        body = body.advance()
    elif lead == "V":
        if not styles & VersionStyles.ALLOW_UPPER_V:
            return failure(detailed, ParseErrorKind.LEADING_V_NOT_ALLOWED, "Leading 'V' in '{version}'.", version=version)
        body = body.advance()

    scanner = _Scanner(version, styles, detailed, wildcards)

    result = scanner.component(body, "Major", after_wildcard=False)
    if isinstance(result, ParseFailure):
        return result
    major, body = result

    if body.peek() == ".":
        result = scanner.component(body.advance(), "Minor", after_wildcard=major is None)
        if isinstance(result, ParseFailure):
            return result
        minor, body = result
    else:
        result = scanner.missing(major is None, "Minor", bool(styles & _OPTIONAL_MINOR))
        if isinstance(result, ParseFailure):
            return result
        minor = result

    if body.peek() == ".":
        result = scanner.component(body.advance(), "Patch", after_wildcard=minor is None)
        if isinstance(result, ParseFailure):
            return result
        patch, body = result
    else:
        result = scanner.missing(minor is None, "Patch", bool(styles & VersionStyles.OPTIONAL_PATCH))
        if isinstance(result, ParseFailure):
            return result
        patch = result

    if body.peek() == ".":
        after = body.advance()
        if after.is_empty:
            return scanner.invalid_character("Patch", ".")
        if after.peek() in DIGITS:
            return failure(
                detailed, ParseErrorKind.FOURTH_VERSION_NUMBER, "Fourth version number in '{version}'.", version=version
            )
        return failure(
            detailed,
            ParseErrorKind.PRERELEASE_PREFIXED_BY_DOT,
            "The prerelease identifiers should be prefixed by '-' instead of '.' in '{version}'.",
            version=version,
        )

    prerelease: tuple[PrereleaseIdentifier, ...] = ()
    prerelease_wildcard = False
    if body.peek() == "-":
        body = body.advance()
        plus = body.find("+")
        prerelease_span, body = body.split_at(len(body) if plus < 0 else plus)
        result = scanner.prerelease(prerelease_span)
        if isinstance(result, ParseFailure):
            return result
        prerelease, prerelease_wildcard = result

    metadata: tuple[MetadataIdentifier, ...] = ()
    if body.peek() == "+":
        result = scanner.metadata(body.advance())
        if isinstance(result, ParseFailure):
            return result
        metadata = result

    if body.end < span.end and not styles & VersionStyles.ALLOW_TRAILING_WHITESPACE:
        return failure(
            detailed,
            ParseErrorKind.TRAILING_WHITESPACE_NOT_ALLOWED,
            "Version '{version}' has trailing whitespace.",
            version=version,
        )

    flags = WildcardVersion.NONE
    if major is None:
        flags |= WildcardVersion.MAJOR
    if minor is None:
        flags |= WildcardVersion.MINOR
    if patch is None:
        flags |= WildcardVersion.PATCH
    if prerelease_wildcard:
        flags |= WildcardVersion.PRERELEASE
    return Version(major or 0, minor or 0, patch or 0, prerelease, metadata), flags


class _Scanner:
    """Grammar rules shared by one scan; each returns a result or a failure."""

    def __init__(self, version: str, styles: VersionStyles, detailed: bool, wildcards: WildcardOptions):
        self.version = version
        self.allow_leading_zeros = bool(styles & VersionStyles.ALLOW_LEADING_ZEROS)
        self.detailed = detailed
        self.wildcards = wildcards

    def invalid_character(self, name: str, char: str) -> ParseFailure:
        return failure(
            self.detailed,
            ParseErrorKind.INVALID_CHARACTER,
            "{component} version contains invalid character '{char}' in '{version}'.",
            component=name,
            char=char,
            version=self.version,
        )

    def component(
        self, span: Span, name: str, after_wildcard: bool
    ) -> Union[ParseFailure, tuple[Optional[int], Span]]:
        """Scan a major, minor, or patch number; None stands for a wildcard."""
        number, rest = span.take_while(lambda c: c not in _COMPONENT_END)
        text = str(number)
        if not text:
            return failure(
                self.detailed,
                ParseErrorKind.MISSING_COMPONENT,
                "{component} version missing in '{version}'.",
                component=name,
                version=self.version,
            )

        wildcard_chars = self.wildcards.chars
        if wildcard_chars and any(c in wildcard_chars for c in text):
            if len(text) == 1:
                return None, rest
            return failure(
                self.detailed,
                ParseErrorKind.INVALID_WILDCARD_POSITION,
                "{component} version contains a wildcard mixed with other characters in '{version}'.",
                component=name,
                version=self.version,
            )

        digits = number.count_while(lambda c: c in DIGITS)
        if digits < len(text):
            return self.invalid_character(name, text[digits])
        if after_wildcard:
            return failure(
                self.detailed,
                ParseErrorKind.MINOR_OR_PATCH_MUST_BE_WILDCARD,
                "{component} version must be a wildcard because a preceding version number "
                "is a wildcard in '{version}'.",
                component=name,
                version=self.version,
            )
        if len(text) > 1 and text[0] == "0" and not self.allow_leading_zeros:
            return failure(
                self.detailed,
                ParseErrorKind.LEADING_ZERO,
                "{component} version has leading zero in '{version}'.",
                component=name,
                version=self.version,
            )
        value = int(text)
        if value > MAX_COMPONENT:
            return failure(
                self.detailed,
                ParseErrorKind.NUMERIC_OVERFLOW,
                "{component} version '{number}' was too large in '{version}'.",
                component=name,
                number=text,
                version=self.version,
            )
        return value, rest

    def missing(self, after_wildcard: bool, name: str, optional: bool) -> Union[ParseFailure, Optional[int]]:
        """Value for an omitted minor or patch number."""
        if after_wildcard:
            return None
        if not optional:
            return failure(
                self.detailed,
                ParseErrorKind.MISSING_COMPONENT,
                "{component} version missing in '{version}'.",
                component=name,
                version=self.version,
            )
        return None if self.wildcards.missing_are_wildcards else 0

    def prerelease(self, span: Span) -> Union[ParseFailure, tuple[tuple[PrereleaseIdentifier, ...], bool]]:
        pieces = span.split(".")
        wildcard_chars = self.wildcards.chars if self.wildcards.allow_prerelease else frozenset()
        identifiers = []
        for index, piece in enumerate(pieces):
            text = str(piece)
            if not text:
                return failure(
                    self.detailed,
                    ParseErrorKind.MISSING_PRERELEASE_IDENTIFIER,
                    "Missing prerelease identifier in '{version}'.",
                    version=self.version,
                )
            if wildcard_chars and any(c in wildcard_chars for c in text):
                if len(text) > 1:
                    return failure(
                        self.detailed,
                        ParseErrorKind.INVALID_WILDCARD_IN_PRERELEASE,
                        "Prerelease version is a wildcard and should contain only 1 character in '{version}'.",
                        version=self.version,
                    )
                if index != len(pieces) - 1:
                    return failure(
                        self.detailed,
                        ParseErrorKind.PRERELEASE_WILDCARD_NOT_LAST,
                        "Prerelease identifier follows wildcard prerelease identifier in '{version}'.",
                        version=self.version,
                    )
                return tuple(identifiers), True

            for char in text:
                if char not in IDENTIFIER_CHARS:
                    return failure(
                        self.detailed,
                        ParseErrorKind.INVALID_CHARACTER,
                        "Invalid character '{char}' in prerelease identifier in '{version}'.",
                        char=char,
                        version=self.version,
                    )

            if all(c in DIGITS for c in text):
                if len(text) > 1 and text[0] == "0":
                    if not self.allow_leading_zeros:
                        return failure(
                            self.detailed,
                            ParseErrorKind.LEADING_ZERO_IN_PRERELEASE,
                            "Leading zero in prerelease identifier in version '{version}'.",
                            version=self.version,
                        )
                    text = text.lstrip("0") or "0"
                value = int(text)
                if value > MAX_PRERELEASE_NUMBER:
                    return failure(
                        self.detailed,
                        ParseErrorKind.PRERELEASE_OVERFLOW,
                        "Prerelease identifier '{number}' was too large in version '{version}'.",
                        number=text,
                        version=self.version,
                    )
                identifiers.append(PrereleaseIdentifier._trusted(text, value))
            else:
                identifiers.append(PrereleaseIdentifier._trusted(text, None))
        return tuple(identifiers), False

    def metadata(self, span: Span) -> Union[ParseFailure, tuple[MetadataIdentifier, ...]]:
        identifiers = []
        for piece in span.split("."):
            text = str(piece)
            if not text:
                return failure(
                    self.detailed,
                    ParseErrorKind.MISSING_METADATA_IDENTIFIER,
                    "Missing metadata identifier in '{version}'.",
                    version=self.version,
                )
            for char in text:
                if char not in IDENTIFIER_CHARS:
                    return failure(
                        self.detailed,
                        ParseErrorKind.INVALID_CHARACTER,
                        "Invalid character '{char}' in metadata identifier in '{version}'.",
                        char=char,
                        version=self.version,
                    )
            identifiers.append(MetadataIdentifier._trusted(text))
        return tuple(identifiers)


def _check_input(version: str) -> None:
    if not isinstance(version, str):
        raise TypeError(f"Version must be a string, got {type(version).__name__}")


def parse_version(
    version_string: str,
    styles: VersionStyles = VersionStyles.STRICT,
    max_length: int = DEFAULT_MAX_VERSION_LENGTH,
) -> Version:
    """Parse a semantic version string into a Version object.

    Args:
        version_string: A string following semantic versioning format
            (MAJOR.MINOR.PATCH[-prerelease][+build])
        styles: Accepted variations on strict syntax
        max_length: Longest input that will be scanned

    Returns:
        A Version object with parsed components

    Raises:
        InvalidVersionError: If the string does not follow semantic versioning
        InvalidOptionsError: If styles is not a valid combination
        TypeError: If version_string is not a string

    Examples:
        >>> str(parse_version("1.0.0-alpha.1"))
        '1.0.0-alpha.1'

        >>> parse_version("v1.2", VersionStyles.ALLOW_V | VersionStyles.OPTIONAL_PATCH).patch
        0
    """
    _check_input(version_string)
    styles = check_styles(styles)
    check_max_length(max_length)
    result = scan_version(Span.of(version_string), styles, max_length)
    if isinstance(result, ParseFailure):
        raise InvalidVersionError(version_string, result.message, result.kind)
    return result[0]


def try_parse_version(
    version_string: str,
    styles: VersionStyles = VersionStyles.STRICT,
    max_length: int = DEFAULT_MAX_VERSION_LENGTH,
) -> Optional[Version]:
    """Parse a version, returning None instead of raising on bad input.

    Invalid styles and a negative max_length are still errors.

    Examples:
        >>> try_parse_version("1.0") is None
        True
    """
    styles = check_styles(styles)
    check_max_length(max_length)
    if not isinstance(version_string, str):
        return None
    result = scan_version(Span.of(version_string), styles, max_length, detailed=False)
    if result is PARSE_FAILED:
        return None
    assert not isinstance(result, ParseFailure)
    return result[0]


def is_valid_semver(version_string: str, styles: VersionStyles = VersionStyles.STRICT) -> bool:
    """Check if a string is a valid semantic version.

    Args:
        version_string: The string to validate
        styles: Accepted variations on strict syntax

    Returns:
        True if the string is a valid semantic version, False otherwise

    Examples:
        >>> is_valid_semver("1.0.0")
        True
        >>> is_valid_semver("1.0")
        False
        >>> is_valid_semver("1.0.0-alpha")
        True
    """
    return try_parse_version(version_string, styles) is not None
