# SPDX-License-Identifier: MIT
"""Parse failures and the exceptions raised for them.

Scanners in this package never raise for bad user input. They return a
:class:`ParseFailure` describing the first rule that was violated, and the
public ``parse_*`` functions convert that into an exception. The ``try_*``
functions scan with ``detailed=False`` so that every failure collapses to the
shared :data:`PARSE_FAILED` sentinel and no message is ever formatted.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

# Echoed input longer than this is cut down for display
DISPLAY_LIMIT = 100


def limit_length(text: str) -> str:
    """Shorten text for inclusion in an error message.

    Examples:
        >>> limit_length("1.2.3")
        '1.2.3'
        >>> len(limit_length("1" * 500))
        100
    """
    if len(text) > DISPLAY_LIMIT:
        return text[: DISPLAY_LIMIT - 3] + "..."
    return text


class ParseErrorKind(enum.Enum):
    """The rule a version or range failed to satisfy."""

    NULL_INPUT = "null-input"
    EMPTY_INPUT = "empty-input"
    ALL_WHITESPACE_INPUT = "all-whitespace-input"
    TOO_LONG = "too-long"
    LEADING_WHITESPACE_NOT_ALLOWED = "leading-whitespace-not-allowed"
    TRAILING_WHITESPACE_NOT_ALLOWED = "trailing-whitespace-not-allowed"
    LEADING_V_NOT_ALLOWED = "leading-v-not-allowed"
    MISSING_COMPONENT = "missing-component"
    LEADING_ZERO = "leading-zero"
    INVALID_CHARACTER = "invalid-character"
    NUMERIC_OVERFLOW = "numeric-overflow"
    FOURTH_VERSION_NUMBER = "fourth-version-number"
    PRERELEASE_PREFIXED_BY_DOT = "prerelease-prefixed-by-dot"
    MISSING_PRERELEASE_IDENTIFIER = "missing-prerelease-identifier"
    LEADING_ZERO_IN_PRERELEASE = "leading-zero-in-prerelease"
    PRERELEASE_OVERFLOW = "prerelease-overflow"
    MISSING_METADATA_IDENTIFIER = "missing-metadata-identifier"
    INVALID_DIALECT = "invalid-dialect"
    # Range specific
    INVALID_OPERATOR = "invalid-operator"
    INVALID_WHITESPACE_IN_RANGE = "invalid-whitespace-in-range"
    MISSING_COMPARISON = "missing-comparison"
    WILDCARD_COMBINED_WITH_OPERATOR = "wildcard-combined-with-operator"
    WILDCARD_COMBINED_WITH_PRERELEASE = "wildcard-combined-with-prerelease"
    INVALID_WILDCARD_IN_PRERELEASE = "invalid-wildcard-in-prerelease"
    PRERELEASE_WILDCARD_NOT_LAST = "prerelease-wildcard-not-last"
    INVALID_WILDCARD_POSITION = "invalid-wildcard-position"
    MINOR_OR_PATCH_MUST_BE_WILDCARD = "minor-or-patch-must-be-wildcard"
    MISSING_VERSION_IN_HYPHEN_RANGE = "missing-version-in-hyphen-range"
    UNEXPECTED_TOKEN_IN_HYPHEN_RANGE = "unexpected-token-in-hyphen-range"


@dataclass(frozen=True, slots=True)
class ParseFailure:
    """Why a scan failed.

    The message is only rendered when :attr:`message` is read, so a failure
    that is discarded costs no string formatting.

    Attributes:
        kind: The violated rule, or None for the generic sentinel
        template: ``str.format`` template for the message
        values: Values substituted into the template
    """

    kind: ParseErrorKind | None
    template: str = "Parse failed."
    values: dict[str, Any] = field(default_factory=dict)

    @property
    def message(self) -> str:
        return self.template.format(**self.values)


# Returned instead of a detailed failure when the caller only needs a yes/no
PARSE_FAILED = ParseFailure(None)


def failure(detailed: bool, kind: ParseErrorKind, template: str, **values: Any) -> ParseFailure:
    """Build a failure, or hand back the sentinel when details are not wanted.

    Values named ``version`` or ``range`` are shortened with
    :func:`limit_length` before they are stored.
    """
    if not detailed:
        return PARSE_FAILED
    for name in ("version", "range"):
        if name in values:
            values[name] = limit_length(values[name])
    return ParseFailure(kind, template, values)


class InvalidVersionError(ValueError):
    """Raised when a version string does not follow semantic versioning."""

    def __init__(self, version: str, message: str = "", kind: ParseErrorKind | None = None):
        self.version = version
        self.message = message or f"Invalid semantic version: {limit_length(version)}"
        self.kind = kind
        super().__init__(self.message)


class InvalidRangeError(ValueError):
    """Raised when a version range expression cannot be parsed."""

    def __init__(self, range: str, message: str = "", kind: ParseErrorKind | None = None):
        self.range = range
        self.message = message or f"Invalid version range: {limit_length(range)}"
        self.kind = kind
        super().__init__(self.message)


class InvalidIdentifierError(ValueError):
    """Raised when a prerelease or metadata identifier is malformed."""

    def __init__(self, identifier: str, message: str):
        self.identifier = identifier
        self.message = message
        super().__init__(message)


class InvalidOptionsError(ValueError):
    """Raised for an unsupported combination of style or option flags."""

    pass
