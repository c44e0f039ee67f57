# SPDX-License-Identifier: MIT
"""Parsing of ranges in the standard syntax.

The standard syntax is a stricter relative of the npm syntax:

- Operators: ``=``, ``<``, ``<=``, ``>``, ``>=``, ``~`` and ``^``
- Only ``*`` is a wildcard, and only on a bare version (``1.2.*``)
- A trailing ``-*`` on a bare version includes all of its prereleases
- Only the ASCII space separates comparisons
- ``*-*`` as a comparison includes all prereleases in the whole clause
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
    lowest_prerelease,
    scan_operator,
    scan_range,
    scan_range_version,
    skip_spaces,
)
from .range_set import RangeSet
from .semver import Version
from .span import Span
from .styles import RangeOptions, check_max_length, check_range_options
from .unbroken_range import UnbrokenRange

__all__ = ["DEFAULT_MAX_RANGE_LENGTH", "parse_range", "try_parse_range"]

_WILDCARDS = WildcardOptions(chars=frozenset("*"), allow_prerelease=True)


def _parse_clause(
    segment: Span, options: RangeOptions, max_length: int, detailed: bool
) -> Union[ParseFailure, UnbrokenRange]:
    rest = skip_spaces(segment, detailed)
    if isinstance(rest, ParseFailure):
        return rest
    if rest.is_empty:
        return failure(
            detailed,
            ParseErrorKind.MISSING_COMPARISON,
            "Range is missing a comparison or limit at {position} in '{range}'.",
            position=rest.start,
            range=segment.source,
        )

    bounds = ClauseBounds(bool(options & RangeOptions.INCLUDE_ALL_PRERELEASE))
    while not rest.is_empty:
        result = _parse_comparison(rest, options, max_length, detailed, bounds)
        if isinstance(result, ParseFailure):
            return result
        rest = result
    return bounds.to_range()


def _parse_comparison(
    span: Span, options: RangeOptions, max_length: int, detailed: bool, bounds: ClauseBounds
) -> Union[ParseFailure, Span]:
    """Parse one comparison into bounds, returning the rest of the clause."""
    result = scan_operator(span, detailed)
    if isinstance(result, ParseFailure):
        return result
    operator, rest = result

    rest = skip_spaces(rest, detailed)
    if isinstance(rest, ParseFailure):
        return rest

    result = scan_range_version(rest, options, max_length, detailed, _WILDCARDS)
    if isinstance(result, ParseFailure):
        return result
    version, wildcard, rest = result

    if operator is not Operator.NONE and wildcard:
        return failure(
            detailed,
            ParseErrorKind.WILDCARD_COMBINED_WITH_OPERATOR,
            "Operator is combined with wildcards in '{range}'.",
            range=span.source,
        )

    rest = skip_spaces(rest, detailed)
    if isinstance(rest, ParseFailure):
        return rest

    if operator is Operator.EQUALS:
        bounds.limit_left(version)
        bounds.limit_right(version, inclusive=True)
    elif operator is Operator.GREATER_THAN:
        bounds.limit_left(version, inclusive=False)
    elif operator is Operator.GREATER_THAN_OR_EQUAL:
        bounds.limit_left(version)
    elif operator is Operator.LESS_THAN:
        bounds.limit_right(version)
    elif operator is Operator.LESS_THAN_OR_EQUAL:
        bounds.limit_right(version, inclusive=True)
    elif operator is Operator.CARET:
        bounds.limit_left(version)
        if version.major:
            bounds.limit_right(lowest_prerelease(version.major + 1))
        elif version.minor:
            bounds.limit_right(lowest_prerelease(0, version.minor + 1))
        else:
            bounds.limit_right(lowest_prerelease(0, 0, version.patch + 1))
    elif operator is Operator.TILDE:
        bounds.limit_left(version)
        bounds.limit_right(lowest_prerelease(version.major, version.minor + 1))
    else:
        failed = _bare_version(version, wildcard, bounds, span.source, detailed)
        if failed is not None:
            return failed
    return rest


def _bare_version(
    version: Version, wildcard: WildcardVersion, bounds: ClauseBounds, text: str, detailed: bool
) -> Optional[ParseFailure]:
    """Apply a version without an operator, which may contain wildcards."""
    prerelease_wildcard = bool(wildcard & WildcardVersion.PRERELEASE)
    bounds.include_all_prerelease |= prerelease_wildcard
    wildcard &= ~WildcardVersion.PRERELEASE
    if wildcard and version.is_prerelease:
        return failure(
            detailed,
            ParseErrorKind.WILDCARD_COMBINED_WITH_PRERELEASE,
            "A wildcard major, minor, or patch is combined with a prerelease version in '{range}'.",
            range=text,
        )

    if wildcard == WildcardVersion.MAJOR_MINOR_PATCH:
        return None

    lower = version
    if prerelease_wildcard:
        lower = version.with_prerelease(version.prerelease_identifiers + (ZERO,))
    bounds.limit_left(lower)

    if wildcard == WildcardVersion.MINOR_PATCH:
        bounds.limit_right(lowest_prerelease(version.major + 1))
    elif wildcard == WildcardVersion.PATCH:
        bounds.limit_right(lowest_prerelease(version.major, version.minor + 1))
    elif not prerelease_wildcard:
        bounds.limit_right(version, inclusive=True)
    elif version.is_prerelease:
        # 1.2.3-rc.* stops just before 1.2.3-rc-
        identifiers = version.prerelease_identifiers
        bounds.limit_right(version.with_prerelease(identifiers[:-1] + (identifiers[-1].next_identifier(),)))
    else:
        bounds.limit_right(lowest_prerelease(version.major, version.minor, version.patch + 1))
    return None


def _scan(range_string: str, options: RangeOptions, max_length: int, detailed: bool) -> Union[ParseFailure, RangeSet]:
    clause = partial(_parse_clause, options=options, max_length=max_length, detailed=detailed)
    return scan_range(range_string, max_length, detailed, clause)


def parse_range(
    range_string: str,
    options: RangeOptions = RangeOptions.STRICT,
    max_length: int = DEFAULT_MAX_RANGE_LENGTH,
) -> RangeSet:
    """Parse a version range in the standard syntax.

    Args:
        range_string: The range, e.g. ``">=1.2.3 <2.0.0 || ^3.0.0"``
        options: Accepted variations on strict syntax
        max_length: Longest input that will be parsed

    Returns:
        The set of versions the range matches

    Raises:
        InvalidRangeError: If the range cannot be parsed
        InvalidOptionsError: If options is not a valid combination
        ValueError: If max_length is negative
        TypeError: If range_string is not a string

    Examples:
        >>> str(parse_range("^1.2.3"))
        '^1.2.3'
        >>> str(parse_range("<6.0.0 >=1.0.0"))
        '>=1.0.0 <6.0.0'
        >>> parse_range("1.2.*").contains("1.2.9")
        True
    """
    check_input(range_string)
    options = check_range_options(options)
    check_max_length(max_length)
    result = _scan(range_string, options, max_length, detailed=True)
    if isinstance(result, ParseFailure):
        raise InvalidRangeError(range_string, result.message, result.kind)
    return result


def try_parse_range(
    range_string: str,
    options: RangeOptions = RangeOptions.STRICT,
    max_length: int = DEFAULT_MAX_RANGE_LENGTH,
) -> Optional[RangeSet]:
    """Parse a range in the standard syntax, returning None if it is invalid.

    Invalid options and a negative max_length are still errors.
    """
    options = check_range_options(options)
    check_max_length(max_length)
    if not isinstance(range_string, str):
        return None
    result = _scan(range_string, options, max_length, detailed=False)
    if result is PARSE_FAILED:
        return None
    assert isinstance(result, RangeSet)
    return result
