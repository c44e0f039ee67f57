# SPDX-License-Identifier: MIT
"""Prerelease and metadata identifiers.

A prerelease identifier such as ``rc`` or ``11`` is one dot-separated part of
the text after ``-`` in a version; metadata identifiers are the parts after
``+``. Numeric prerelease identifiers order by value and always sort before
alphanumeric ones. Equality is always by the stored string.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .errors import InvalidIdentifierError

DIGITS = frozenset("0123456789")
IDENTIFIER_CHARS = DIGITS | frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ-")


def is_digits(value: str) -> bool:
    """Return True if value is non-empty and only ASCII digits."""
    return bool(value) and all(c in DIGITS for c in value)


def is_identifier_text(value: str) -> bool:
    """Return True if value only holds ASCII alphanumerics and hyphens."""
    return all(c in IDENTIFIER_CHARS for c in value)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def compare_ordinal(a: str, b: str) -> int:
    """Compare two strings by code point, returning -1, 0, or 1."""
    return (a > b) - (a < b)


@dataclass(frozen=True, slots=True)
class PrereleaseIdentifier:
    """A single prerelease identifier.

    Attributes:
        value: The identifier text
        numeric_value: The integer value when ``value`` is all digits

    Raises:
        InvalidIdentifierError: If the value is empty, contains characters
            other than ASCII alphanumerics and hyphens, or is numeric with a
            leading zero

    Examples:
        >>> PrereleaseIdentifier("rc").is_numeric
        False
        >>> PrereleaseIdentifier("11").numeric_value
        11
        >>> PrereleaseIdentifier.parse("007", allow_leading_zeros=True).value
        '7'
    """

    value: str
    numeric_value: Optional[int] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        value = self.value
        if not isinstance(value, str):
            raise TypeError(f"Prerelease identifier must be a string, got {type(value).__name__}")
        if not value:
            raise InvalidIdentifierError(value, "Prerelease identifier cannot be empty.")
        if not is_identifier_text(value):
            raise InvalidIdentifierError(
                value,
                "A prerelease identifier can contain only ASCII alphanumeric characters "
                f"and hyphens '{value}'.",
            )
        if is_digits(value):
            if len(value) > 1 and value[0] == "0":
                raise InvalidIdentifierError(
                    value, f"Leading zeros are not allowed on numeric prerelease identifiers '{value}'."
                )
            if self.numeric_value is None:
                object.__setattr__(self, "numeric_value", int(value))
            elif self.numeric_value != int(value):
                raise InvalidIdentifierError(
                    value, f"Numeric value {self.numeric_value} does not match prerelease identifier '{value}'."
                )
        elif self.numeric_value is not None:
            raise InvalidIdentifierError(value, f"Alphanumeric identifier '{value}' cannot have a numeric value.")

    @classmethod
    def parse(cls, value: str, allow_leading_zeros: bool = False) -> "PrereleaseIdentifier":
        """Create an identifier, optionally normalizing leading zeros away."""
        if allow_leading_zeros and isinstance(value, str) and is_digits(value):
            value = value.lstrip("0") or "0"
        return cls(value)

    @classmethod
    def from_int(cls, value: int) -> "PrereleaseIdentifier":
        """Create a numeric identifier.

        Raises:
            ValueError: If value is negative
        """
        if value < 0:
            raise ValueError(f"Numeric prerelease identifiers can't be negative: {value}.")
        return cls(str(value), value)

    @classmethod
    def _trusted(cls, value: str, numeric_value: Optional[int]) -> "PrereleaseIdentifier":
        # Skips validation for text the version scanner already checked
        identifier = object.__new__(cls)
        object.__setattr__(identifier, "value", value)
        object.__setattr__(identifier, "numeric_value", numeric_value)
        return identifier

    @property
    def is_numeric(self) -> bool:
        return self.numeric_value is not None

    def __str__(self) -> str:
        return self.value

    def compare(self, other: "PrereleaseIdentifier") -> int:
        """Compare by SemVer precedence, returning -1, 0, or 1.

        Numeric identifiers compare numerically and sort before alphanumeric
        identifiers, which compare by code point.
        """
        if self.value == other.value:
            return 0
        if self.numeric_value is not None:
            if other.numeric_value is not None:
                return _sign(self.numeric_value - other.numeric_value)
            return -1
        if other.numeric_value is not None:
            return 1
        return compare_ordinal(self.value, other.value)

    def next_identifier(self) -> "PrereleaseIdentifier":
        """Return the smallest identifier that sorts after this one.

        Examples:
            >>> PrereleaseIdentifier("rc").next_identifier().value
            'rc-'
            >>> PrereleaseIdentifier("5").next_identifier().value
            '6'
        """
        if self.numeric_value is not None:
            return PrereleaseIdentifier.from_int(self.numeric_value + 1)
        return PrereleaseIdentifier._trusted(self.value + "-", None)


@dataclass(frozen=True, slots=True)
class MetadataIdentifier:
    """A single build metadata identifier.

    Metadata has no numeric meaning: ``01`` and ``1`` are different
    identifiers and comparison is by code point.
    """

    value: str

    def __post_init__(self) -> None:
        value = self.value
        if not isinstance(value, str):
            raise TypeError(f"Metadata identifier must be a string, got {type(value).__name__}")
        if not value:
            raise InvalidIdentifierError(value, "Metadata identifier cannot be empty.")
        if not is_identifier_text(value):
            raise InvalidIdentifierError(
                value,
                "A metadata identifier can contain only ASCII alphanumeric characters "
                f"and hyphens '{value}'.",
            )

    @classmethod
    def _trusted(cls, value: str) -> "MetadataIdentifier":
        identifier = object.__new__(cls)
        object.__setattr__(identifier, "value", value)
        return identifier

    def __str__(self) -> str:
        return self.value

    def compare(self, other: "MetadataIdentifier") -> int:
        return compare_ordinal(self.value, other.value)


ZERO = PrereleaseIdentifier("0")
