# SPDX-License-Identifier: MIT
"""Parsing of ranges in the syntax used by npm (node-semver).

Differences from the standard syntax:

- ``x``, ``X`` and ``*`` are all wildcards and may follow any operator
- Missing minor and patch numbers are wildcards, so ``1`` means ``1.x.x``
- Hyphen ranges such as ``1.2 - 2.3.4`` are supported
- ``~>`` is accepted as tilde, a leading ``v`` and build metadata are ignored
- Any whitespace separates comparisons, and an empty clause matches every release
"""

from __future__ import annotations

from functools import partial
from typing import Optional, Union

from .errors import PARSE_FAILED, InvalidRangeError, ParseErrorKind, ParseFailure, failure
from .identifiers import ZERO
from .parser import WildcardOptions, WildcardVersion
from .range_parser import (
    DEFAULT_MAX_RANGE_LENGTH,
    ClauseBounds,
    Operator,
    check_input,
    is_version_char,
    lowest_prerelease,
    scan_operator,
    scan_range,
    scan_range_version,
    skip_whitespace,
)
from .range_set import RangeSet
from .semver import MAX_VERSION, Version
from .span import Span
from .styles import RangeOptions, check_max_length
from .unbroken_range import ALL, ALL_RELEASE, UnbrokenRange

__all__ = ["DEFAULT_MAX_RANGE_LENGTH", "NPM_OPTIONS", "parse_npm_range", "try_parse_npm_range"]

NPM_OPTIONS = RangeOptions.ALLOW_LOWER_V | RangeOptions.ALLOW_METADATA | RangeOptions.OPTIONAL_MINOR_PATCH

_WILDCARDS = WildcardOptions(chars=frozenset("xX*"), missing_are_wildcards=True)


def _parse_clause(
    segment: Span, options: RangeOptions, max_length: int, detailed: bool
) -> Union[ParseFailure, UnbrokenRange]:
    include_all_prerelease = bool(options & RangeOptions.INCLUDE_ALL_PRERELEASE)
    bounds = ClauseBounds(include_all_prerelease)

    # Split before trimming so that " - 2.0.0" is seen as a broken hyphen range
    hyphen = _split_hyphen_range(segment)
    if hyphen is not None:
        failed = _hyphen_range(*hyphen, options, max_length, detailed, bounds)
        if failed is not None:
            return failed
        return bounds.to_range()

    rest = skip_whitespace(segment)
    if rest.is_empty:
        return ALL if include_all_prerelease else ALL_RELEASE
    while not rest.is_empty:
        result = _parse_comparison(rest, options, max_length, detailed, bounds)
        if isinstance(result, ParseFailure):
            return result
        rest = result
    return bounds.to_range()


def _split_hyphen_range(segment: Span) -> Optional[tuple[Span, Span]]:
    """Split on the first hyphen with whitespace on both sides."""
    index = segment.find("-", 1)
    while 0 < index < len(segment) - 1:
        if segment[index - 1].isspace() and segment[index + 1].isspace():
            before = segment.take(index - 1)
            after = segment.advance(index + 2)
            return before, after
        index = segment.find("-", index + 1)
    return None


def _hyphen_range(
    before: Span, after: Span, options: RangeOptions, max_length: int, detailed: bool, bounds: ClauseBounds
) -> Optional[ParseFailure]:
    result = _hyphen_version(before, options, max_length, detailed)
    if isinstance(result, ParseFailure):
        return result
    start, start_wildcard = result
    result = _hyphen_version(after, options, max_length, detailed)
    if isinstance(result, ParseFailure):
        return result
    end, end_wildcard = result

    _lower_bound(start, start_wildcard, bounds)
    _upper_bound(end, end_wildcard, bounds)
    return None


def _hyphen_version(
    span: Span, options: RangeOptions, max_length: int, detailed: bool
) -> Union[ParseFailure, tuple[Version, WildcardVersion]]:
    """Parse one side of a hyphen range, which must be a lone version."""
    span = skip_whitespace(span)
    if span.is_empty:
        return failure(
            detailed,
            ParseErrorKind.MISSING_VERSION_IN_HYPHEN_RANGE,
            "Missing a version number in hyphen range in '{range}'.",
            range=span.source,
        )
    if not is_version_char(span.peek(), allow_metadata=True):
        return _unexpected_in_hyphen_range(span.peek(), detailed)

    result = _scan_npm_version(span, options, max_length, detailed)
    if isinstance(result, ParseFailure):
        return result
    version, wildcard, rest = result

    rest = skip_whitespace(rest)
    if not rest.is_empty:
        return _unexpected_in_hyphen_range(str(rest), detailed)
    return version, wildcard


def _unexpected_in_hyphen_range(text: str, detailed: bool) -> ParseFailure:
    return failure(
        detailed,
        ParseErrorKind.UNEXPECTED_TOKEN_IN_HYPHEN_RANGE,
        "Unexpected characters in hyphen range '{text}'.",
        text=text,
    )


def _scan_npm_version(
    span: Span, options: RangeOptions, max_length: int, detailed: bool
) -> Union[ParseFailure, tuple[Version, WildcardVersion, Span]]:
    result = scan_range_version(span, options, max_length, detailed, _WILDCARDS)
    if isinstance(result, ParseFailure):
        return result
    version, wildcard, _ = result
    if wildcard and version.is_prerelease:
        return failure(
            detailed,
            ParseErrorKind.WILDCARD_COMBINED_WITH_PRERELEASE,
            "A wildcard major, minor, or patch is combined with a prerelease version in '{range}'.",
            range=span.source,
        )
    return result


def _parse_comparison(
    span: Span, options: RangeOptions, max_length: int, detailed: bool, bounds: ClauseBounds
) -> Union[ParseFailure, Span]:
    result = scan_operator(span, detailed, allow_metadata=True, npm=True)
    if isinstance(result, ParseFailure):
        return result
    operator, rest = result

    result = _scan_npm_version(skip_whitespace(rest), options, max_length, detailed)
    if isinstance(result, ParseFailure):
        return result
    version, wildcard, rest = result
    rest = skip_whitespace(rest)

    if operator is Operator.GREATER_THAN:
        _greater_than(version, wildcard, bounds)
    elif operator is Operator.GREATER_THAN_OR_EQUAL:
        _lower_bound(version, wildcard, bounds)
    elif operator is Operator.LESS_THAN:
        # Wildcard places are already filled with zeros
        bounds.limit_right(version.with_prerelease((ZERO,)) if wildcard else version)
    elif operator is Operator.LESS_THAN_OR_EQUAL:
        _upper_bound(version, wildcard, bounds)
    elif operator is Operator.CARET:
        if wildcard != WildcardVersion.MAJOR_MINOR_PATCH:
            _lower_bound(version, wildcard, bounds)
            if version.major or wildcard == WildcardVersion.MINOR_PATCH:
                bounds.limit_right(lowest_prerelease(version.major + 1))
            elif version.minor or wildcard == WildcardVersion.PATCH:
                bounds.limit_right(lowest_prerelease(0, version.minor + 1))
            else:
                bounds.limit_right(lowest_prerelease(0, 0, version.patch + 1))
    elif operator is Operator.TILDE:
        if wildcard != WildcardVersion.MAJOR_MINOR_PATCH:
            _lower_bound(version, wildcard, bounds)
            if wildcard == WildcardVersion.MINOR_PATCH:
                bounds.limit_right(lowest_prerelease(version.major + 1))
            else:
                bounds.limit_right(lowest_prerelease(version.major, version.minor + 1))
    else:
        # Bare versions and "=" behave the same
        _lower_bound(version, wildcard, bounds)
        _upper_bound(version, wildcard, bounds)
    return rest


def _greater_than(version: Version, wildcard: WildcardVersion, bounds: ClauseBounds) -> None:
    if wildcard == WildcardVersion.MAJOR_MINOR_PATCH:
        # Nothing is greater than every version
        bounds.limit_left(MAX_VERSION, inclusive=False)
        return
    prerelease = (ZERO,) if bounds.include_all_prerelease else ()
    if wildcard == WildcardVersion.MINOR_PATCH:
        bounds.limit_left(Version(version.major + 1, 0, 0, prerelease))
    elif wildcard == WildcardVersion.PATCH:
        bounds.limit_left(Version(version.major, version.minor + 1, 0, prerelease))
    else:
        bounds.limit_left(version, inclusive=False)


def _lower_bound(version: Version, wildcard: WildcardVersion, bounds: ClauseBounds) -> None:
    if wildcard == WildcardVersion.MAJOR_MINOR_PATCH:
        return
    if wildcard and bounds.include_all_prerelease:
        version = version.with_prerelease((ZERO,))
    bounds.limit_left(version)


def _upper_bound(version: Version, wildcard: WildcardVersion, bounds: ClauseBounds) -> None:
    if wildcard == WildcardVersion.MAJOR_MINOR_PATCH:
        return
    if wildcard == WildcardVersion.MINOR_PATCH:
        bounds.limit_right(lowest_prerelease(version.major + 1))
    elif wildcard == WildcardVersion.PATCH:
        bounds.limit_right(lowest_prerelease(version.major, version.minor + 1))
    else:
        bounds.limit_right(version, inclusive=True)


def _options(include_all_prerelease: bool) -> RangeOptions:
    if include_all_prerelease:
        return NPM_OPTIONS | RangeOptions.INCLUDE_ALL_PRERELEASE
    return NPM_OPTIONS


def _scan(range_string: str, options: RangeOptions, max_length: int, detailed: bool) -> Union[ParseFailure, RangeSet]:
    clause = partial(_parse_clause, options=options, max_length=max_length, detailed=detailed)
    return scan_range(range_string, max_length, detailed, clause)


def parse_npm_range(
    range_string: str,
    include_all_prerelease: bool = False,
    max_length: int = DEFAULT_MAX_RANGE_LENGTH,
) -> RangeSet:
    """Parse a version range the way npm does.

    Args:
        range_string: The range, e.g. ``"1.x || >=2.5.0 || 5.0.0 - 7.2.3"``
        include_all_prerelease: Match prereleases anywhere in range instead of
            only next to a prerelease bound
        max_length: Longest input that will be parsed

    Returns:
        The set of versions the range matches

    Raises:
        InvalidRangeError: If the range cannot be parsed
        ValueError: If max_length is negative
        TypeError: If range_string is not a string

    Examples:
        >>> str(parse_npm_range("1.x"))
        '1.*'
        >>> str(parse_npm_range("1.2.3 - 2.3"))
        '>=1.2.3 <2.4.0-0'
        >>> str(parse_npm_range(""))
        '*'
    """
    check_input(range_string)
    check_max_length(max_length)
    result = _scan(range_string, _options(include_all_prerelease), max_length, detailed=True)
    if isinstance(result, ParseFailure):
        raise InvalidRangeError(range_string, result.message, result.kind)
    return result


def try_parse_npm_range(
    range_string: str,
    include_all_prerelease: bool = False,
    max_length: int = DEFAULT_MAX_RANGE_LENGTH,
) -> Optional[RangeSet]:
    """Parse a range the way npm does, returning None if it is invalid."""
    check_max_length(max_length)
    if not isinstance(range_string, str):
        return None
    result = _scan(range_string, _options(include_all_prerelease), max_length, detailed=False)
    if result is PARSE_FAILED:
        return None
    assert isinstance(result, RangeSet)
    return result
