# SPDX-License-Identifier: MIT
"""Unit tests for the npm range syntax."""

import pytest

from semver_range import (
    InvalidRangeError,
    ParseErrorKind,
    RangeSet,
    parse_npm_range,
    parse_range,
    try_parse_npm_range,
)


class TestParseNpmRange:
    """Tests for parse_npm_range function."""

    @pytest.mark.parametrize(
        "range_string, expected",
        [
            ("1.x", "1.*"),
            ("1.X.x", "1.*"),
            ("1", "1.*"),
            ("1.2", "1.2.*"),
            ("1.2.x", "1.2.*"),
            ("*", "*"),
            ("x", "*"),
            ("", "*"),
            ("   ", "*"),
            ("1.2.3", "1.2.3"),
            ("=1.2.3", "1.2.3"),
            ("v1.2.3", "1.2.3"),
            ("1.2.3+build.5", "1.2.3"),
            ("~>1.2.3", "~1.2.3"),
            ("~1", "1.*"),
            ("~1.2", "1.2.*"),
            ("^1.x", "1.*"),
            ("^0.0", "0.0.*"),
            ("^0.0.x", "0.0.*"),
            (">1.2", ">=1.3.0"),
            (">1", ">=2.0.0"),
            ("<1.2", "<1.2.0-0"),
            ("<=1.2", "<1.3.0-0"),
            (">=1.2", ">=1.2.0"),
            (">= 1.2.3", ">=1.2.3"),
            (">=1.0.0\t<2.0.0", ">=1.0.0 <2.0.0"),
            (">*", "<0.0.0-0"),
            ("1.2.3 - 2.3", ">=1.2.3 <2.4.0-0"),
            ("1.2 - 2.3.4", ">=1.2.0 <=2.3.4"),
            ("1.2.3 - 2", ">=1.2.3 <3.0.0-0"),
            ("* - 2.0.0", "<=2.0.0"),
            ("1.2.0 - 1.0.0", "<0.0.0-0"),
            ("1.x || >=2.5.0", "1.* || >=2.5.0"),
        ],
    )
    def test_prints_as(self, range_string, expected):
        """Test how npm ranges print in the standard syntax."""
        assert str(parse_npm_range(range_string)) == expected

    def test_empty_is_every_release(self):
        """Test that an empty clause matches every release."""
        assert parse_npm_range("") == RangeSet.ALL_RELEASE
        assert parse_npm_range("", include_all_prerelease=True) == RangeSet.ALL

    def test_same_as_standard(self):
        """Test that ranges valid in both syntaxes agree."""
        for range_string in ("^1.2.3", "~1.2.3", ">=1.0.0 <2.0.0", "1.2.3 || 2.0.0"):
            assert parse_npm_range(range_string) == parse_range(range_string)

    def test_include_all_prerelease(self):
        """Test including every prerelease in range."""
        ranges = parse_npm_range("1.x", include_all_prerelease=True)
        assert str(ranges) == "1.*-*"
        assert ranges.contains("1.5.0-beta")
        assert ranges.contains("1.0.0-0")
        assert not ranges.contains("2.0.0-0")

    def test_greater_than_wildcard_with_prereleases(self):
        """Test that >X.Y starts at the prereleases of the next minor when included."""
        ranges = parse_npm_range(">1.2", include_all_prerelease=True)
        assert ranges.contains("1.3.0-alpha")
        assert not ranges.contains("1.2.9")

    def test_prereleases_excluded_by_default(self):
        """Test that prereleases away from a prerelease bound are excluded."""
        ranges = parse_npm_range("1.x")
        assert not ranges.contains("1.5.0-beta")
        assert ranges.contains("1.5.0")

    def test_classmethod(self):
        """Test RangeSet.parse_npm."""
        assert RangeSet.parse_npm("~>1.2.3") == parse_npm_range("~1.2.3")


class TestParseNpmRangeErrors:
    """Tests for the failure kinds and messages of parse_npm_range."""

    @pytest.mark.parametrize(
        "range_string, kind, message",
        [
            (
                "1.x.3",
                ParseErrorKind.MINOR_OR_PATCH_MUST_BE_WILDCARD,
                "Patch version must be a wildcard because a preceding version number is a wildcard in '1.x.3'.",
            ),
            (
                "1.2.3-*",
                ParseErrorKind.INVALID_CHARACTER,
                "Invalid character '*' in prerelease identifier in '1.2.3-*'.",
            ),
            (
                "1.x-rc",
                ParseErrorKind.WILDCARD_COMBINED_WITH_PRERELEASE,
                "A wildcard major, minor, or patch is combined with a prerelease version in '1.x-rc'.",
            ),
            (
                "1.2.3 - ",
                ParseErrorKind.MISSING_VERSION_IN_HYPHEN_RANGE,
                "Missing a version number in hyphen range in '1.2.3 - '.",
            ),
            (
                " - 2.0.0",
                ParseErrorKind.MISSING_VERSION_IN_HYPHEN_RANGE,
                "Missing a version number in hyphen range in ' - 2.0.0'.",
            ),
            (
                "1.2.3 - 2.0.0 3.0.0",
                ParseErrorKind.UNEXPECTED_TOKEN_IN_HYPHEN_RANGE,
                "Unexpected characters in hyphen range '3.0.0'.",
            ),
            (
                "1.2.3 - >2.0.0",
                ParseErrorKind.UNEXPECTED_TOKEN_IN_HYPHEN_RANGE,
                "Unexpected characters in hyphen range '>'.",
            ),
            ("=>1.2.3", ParseErrorKind.INVALID_OPERATOR, "Invalid operator '=>'."),
            (
                "1.2*",
                ParseErrorKind.INVALID_WILDCARD_POSITION,
                "Minor version contains a wildcard mixed with other characters in '1.2*'.",
            ),
        ],
    )
    def test_failure(self, range_string, kind, message):
        """Test each invalid range reports the first rule it breaks."""
        with pytest.raises(InvalidRangeError) as exc_info:
            parse_npm_range(range_string)
        assert exc_info.value.kind is kind
        assert exc_info.value.message == message

    def test_too_long(self):
        """Test that input longer than max_length is rejected."""
        with pytest.raises(InvalidRangeError) as exc_info:
            parse_npm_range("1.x", max_length=2)
        assert exc_info.value.kind is ParseErrorKind.TOO_LONG

    def test_not_a_string(self):
        """Test that non-string input raises TypeError."""
        with pytest.raises(TypeError):
            parse_npm_range(42)


class TestTryParseNpmRange:
    """Tests for try_parse_npm_range function."""

    def test_valid(self):
        """Test that a valid range is returned."""
        assert try_parse_npm_range("1.x") == parse_npm_range("1.x")

    @pytest.mark.parametrize("range_string", ["1.x.3", "1.2.3 - ", "=>1", "1.2.3-*"])
    def test_invalid(self, range_string):
        """Test that invalid ranges give None."""
        assert try_parse_npm_range(range_string) is None

    def test_not_a_string(self):
        """Test that non-string input gives None."""
        assert try_parse_npm_range(None) is None
