# SPDX-License-Identifier: MIT
"""Grammar shared by the standard and npm range parsers.

A range is one or more clauses separated by ``||``. Each clause is a list of
comparisons, an optional operator followed by a version, and is folded into
a single :class:`~semver_range.unbroken_range.UnbrokenRange` by tightening a
running pair of bounds. The clauses are then merged into a
:class:`~semver_range.range_set.RangeSet`.
"""

from __future__ import annotations

import enum
import unicodedata
from dataclasses import dataclass
from typing import Callable, Optional, Union

from .bounds import UNBOUNDED_LEFT, UNBOUNDED_RIGHT, LeftBound, RightBound
from .errors import ParseErrorKind, ParseFailure, failure, limit_length
from .identifiers import ZERO
from .parser import WildcardOptions, WildcardVersion, scan_version
from .range_set import RangeSet
from .semver import Version
from .span import Span
from .styles import RangeOptions
from .unbroken_range import UnbrokenRange

DEFAULT_MAX_RANGE_LENGTH = 2048

OR_SEPARATOR = "||"


class Operator(enum.Enum):
    """Comparison operators. NONE is a bare version."""

    NONE = ""
    EQUALS = "="
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL = "<="
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="
    TILDE = "~"
    CARET = "^"


_OPERATORS = {op.value: op for op in Operator if op is not Operator.NONE}
# npm also accepts the Ruby style "~>" for tilde ranges
_NPM_OPERATORS = {**_OPERATORS, "~>": Operator.TILDE}


def is_operator_char(char: str, allow_metadata: bool) -> bool:
    """Return True for characters that may be part of an operator.

    Any punctuation (except ``*``) or symbol is treated as a possible operator
    so that an unknown operator is reported as one rather than as a bad
    version.
    """
    if char in "=<>~^":
        return True
    category = unicodedata.category(char)
    if category.startswith("P"):
        return not char.isspace() and char != "*"
    if category.startswith("S"):
        return char != "+" or not allow_metadata
    return False


def is_version_char(char: str, allow_metadata: bool) -> bool:
    """Return True for characters that may be part of a version in a range."""
    if char.isspace():
        return False
    if not is_operator_char(char, allow_metadata):
        return True
    return char in "-." or (char == "+" and allow_metadata)


def lowest_prerelease(major: int, minor: int = 0, patch: int = 0) -> Version:
    """``major.minor.patch-0``, the first version at or above major.minor.patch."""
    return Version(major, minor, patch, (ZERO,))


@dataclass
class ClauseBounds:
    """Running bounds of the clause being parsed."""

    include_all_prerelease: bool
    left: LeftBound = UNBOUNDED_LEFT
    right: RightBound = UNBOUNDED_RIGHT

    def limit_left(self, version: Version, inclusive: bool = True) -> None:
        self.left = self.left.max(LeftBound(version, inclusive))

    def limit_right(self, version: Version, inclusive: bool = False) -> None:
        self.right = self.right.min(RightBound(version, inclusive))

    def to_range(self) -> UnbrokenRange:
        return UnbrokenRange.create(self.left, self.right, self.include_all_prerelease)


def skip_spaces(span: Span, detailed: bool) -> Union[ParseFailure, Span]:
    """Skip ASCII spaces; any other whitespace is an error."""
    rest = span.skip_while(lambda c: c == " ")
    if rest.peek() is not None and rest.peek().isspace():
        return failure(
            detailed,
            ParseErrorKind.INVALID_WHITESPACE_IN_RANGE,
            "Invalid whitespace character at {position} in '{range}'. Only the ASCII space character is allowed.",
            position=rest.start,
            range=span.source,
        )
    return rest


def skip_whitespace(span: Span) -> Span:
    return span.skip_while(str.isspace)


def scan_operator(
    span: Span, detailed: bool, allow_metadata: bool = False, npm: bool = False
) -> Union[ParseFailure, tuple[Operator, Span]]:
    op_span, rest = span.take_while(lambda c: is_operator_char(c, allow_metadata))
    text = str(op_span)
    if not text:
        return Operator.NONE, rest
    operator = (_NPM_OPERATORS if npm else _OPERATORS).get(text)
    if operator is None:
        return failure(
            detailed, ParseErrorKind.INVALID_OPERATOR, "Invalid operator '{operator}'.", operator=limit_length(text)
        )
    return operator, rest


def scan_range_version(
    span: Span,
    options: RangeOptions,
    max_length: int,
    detailed: bool,
    wildcards: WildcardOptions,
) -> Union[ParseFailure, tuple[Version, WildcardVersion, Span]]:
    """Scan the version at the start of span, dropping any metadata.

    The version ends at the first character that cannot be part of one.
    """
    allow_metadata = bool(options & RangeOptions.ALLOW_METADATA)
    version_span, rest = span.take_while(lambda c: is_version_char(c, allow_metadata))
    result = scan_version(version_span, options.to_styles(), max_length, detailed, wildcards)
    if isinstance(result, ParseFailure):
        return result
    version, wildcard = result
    return version.without_metadata(), wildcard, rest


ClauseParser = Callable[[Span], Union[ParseFailure, UnbrokenRange]]


def scan_range(text: str, max_length: int, detailed: bool, parse_clause: ClauseParser) -> Union[ParseFailure, RangeSet]:
    """Split text on ``||`` and merge the clause ranges into a set."""
    if len(text) > max_length:
        return failure(
            detailed,
            ParseErrorKind.TOO_LONG,
            "Exceeded maximum length of {max_length} for '{range}'.",
            max_length=max_length,
            range=text,
        )
    ranges = []
    for segment in Span.of(text).split(OR_SEPARATOR):
        result = parse_clause(segment)
        if isinstance(result, ParseFailure):
            return result
        ranges.append(result)
    return RangeSet(ranges)


def check_input(range_string: Optional[str]) -> None:
    if not isinstance(range_string, str):
        raise TypeError(f"Range must be a string, got {type(range_string).__name__}")
