# SPDX-License-Identifier: MIT
"""Unit tests for the standard range syntax."""

import pytest

from semver_range import (
    InvalidOptionsError,
    InvalidRangeError,
    ParseErrorKind,
    RangeOptions,
    RangeSet,
    Version,
    parse_range,
    try_parse_range,
)


class TestParseRange:
    """Tests for parse_range function."""

    @pytest.mark.parametrize(
        "range_string, expected",
        [
            ("1.2.3", "1.2.3"),
            ("=1.2.3", "1.2.3"),
            (">=1.2.3", ">=1.2.3"),
            (">1.2.3", ">1.2.3"),
            ("<1.2.3", "<1.2.3"),
            ("<=1.2.3", "<=1.2.3"),
            ("^1.2.3", "^1.2.3"),
            ("~1.2.3", "~1.2.3"),
            ("1.2.*", "1.2.*"),
            ("1.*", "1.*"),
            ("*", "*"),
            ("*-*", "*-*"),
            ("1.2.3-*", "1.2.3-*"),
            ("1.2.3-rc.*", "1.2.3-rc.*"),
            ("1.2.*-*", "1.2.*-*"),
            ("*-* 1.2.*", "*-* 1.2.*"),
            ("*-* ^1.2.3", "*-* ^1.2.3"),
            ("<6.0.0 >=1.0.0", ">=1.0.0 <6.0.0"),
            (">1.0.0 <=2.0.0", ">1.0.0 <=2.0.0"),
            (">= 1.0.0  < 2.0.0", ">=1.0.0 <2.0.0"),
            ("1.* || 2.*", ">=1.0.0 <3.0.0-0"),
        ],
    )
    def test_prints_back(self, range_string, expected):
        """Test that ranges print in their shortest standard form."""
        assert str(parse_range(range_string)) == expected

    @pytest.mark.parametrize("range_string", ["^1.2.3", "1.2.*-*", "*-* ^1.2.3", "1.2.3-rc.*", "1.* || 1.2.*-*"])
    def test_round_trip(self, range_string):
        """Test that parsing the printed range gives an equal range."""
        ranges = parse_range(range_string)
        assert parse_range(str(ranges)) == ranges

    def test_caret_zero_major(self):
        """Test caret ranges below 1.0.0."""
        assert parse_range("^0.2.3") == parse_range(">=0.2.3 <0.3.0-0")
        assert parse_range("^0.0.3") == parse_range(">=0.0.3 <0.0.4-0")

    def test_tilde(self):
        """Test that tilde allows patch changes only."""
        ranges = parse_range("~1.2.3")
        assert ranges.contains("1.2.9")
        assert not ranges.contains("1.3.0")

    def test_empty_range(self):
        """Test that contradictory comparisons match nothing."""
        ranges = parse_range("<1.0.0 >2.0.0")
        assert ranges == RangeSet.EMPTY
        assert str(ranges) == "<0.0.0-0"

    def test_prerelease_wildcard(self):
        """Test that a trailing -* includes all prereleases of the version."""
        ranges = parse_range("1.2.3-*")
        assert ranges.contains("1.2.3-alpha")
        assert ranges.contains("1.2.3")
        assert not ranges.contains("1.2.4-alpha")

    def test_prerelease_identifier_wildcard(self):
        """Test a wildcard final prerelease identifier."""
        ranges = parse_range("1.2.3-rc.*")
        assert ranges.contains("1.2.3-rc.1")
        assert ranges.contains("1.2.3-rc.beta")
        assert not ranges.contains("1.2.3-rc")
        assert not ranges.contains("1.2.3")

    def test_prerelease_next_to_bound(self):
        """Test that prereleases are only included next to a prerelease bound."""
        ranges = parse_range(">=1.2.3-rc <2.0.0")
        assert ranges.contains("1.2.3-rc.1")
        assert not ranges.contains("1.5.0-rc")

    def test_include_all_prerelease_option(self):
        """Test including every prerelease in range."""
        ranges = parse_range(">=1.0.0", RangeOptions.INCLUDE_ALL_PRERELEASE)
        assert ranges.contains("1.5.0-rc")
        assert str(ranges) == "*-* >=1.0.0"

    def test_caret_beyond_largest_version(self):
        """Test that upper bounds may go past the largest parseable version."""
        ranges = parse_range("^2147483647.2.3")
        assert ranges[0].end == Version(2147483648, 0, 0, ("0",))
        assert str(ranges) == "^2147483647.2.3"

    def test_prerelease_wildcard_beyond_largest_number(self):
        """Test that the next prerelease number is not limited."""
        ranges = parse_range("3.1.4-2147483647.*")
        assert ranges[0].end == Version(3, 1, 4, (2147483648,))
        assert ranges.contains("3.1.4-2147483647.5")

    def test_loose(self):
        """Test the loose options."""
        ranges = parse_range("v01+build", RangeOptions.LOOSE)
        assert ranges == parse_range("1.0.0")
        assert str(parse_range("^V1.2", RangeOptions.LOOSE)) == "^1.2.0"

    def test_metadata_needs_option(self):
        """Test that metadata is only accepted with ALLOW_METADATA."""
        assert str(parse_range("1.2.3+build", RangeOptions.ALLOW_METADATA)) == "1.2.3"
        with pytest.raises(InvalidRangeError) as exc_info:
            parse_range("1.2.3+build")
        assert exc_info.value.kind is ParseErrorKind.INVALID_OPERATOR

    def test_classmethod(self):
        """Test RangeSet.parse."""
        assert RangeSet.parse("~1.2.3") == parse_range("~1.2.3")


class TestParseRangeErrors:
    """Tests for the failure kinds and messages of parse_range."""

    @pytest.mark.parametrize(
        "range_string, kind, message",
        [
            ("", ParseErrorKind.MISSING_COMPARISON, "Range is missing a comparison or limit at 0 in ''."),
            ("1.* ||", ParseErrorKind.MISSING_COMPARISON, "Range is missing a comparison or limit at 6 in '1.* ||'."),
            (
                "  \t",
                ParseErrorKind.INVALID_WHITESPACE_IN_RANGE,
                "Invalid whitespace character at 2 in '  \t'. Only the ASCII space character is allowed.",
            ),
            (
                "1.2.3\t2.0.0",
                ParseErrorKind.INVALID_WHITESPACE_IN_RANGE,
                "Invalid whitespace character at 5 in '1.2.3\t2.0.0'. Only the ASCII space character is allowed.",
            ),
            ("=>1.2.3", ParseErrorKind.INVALID_OPERATOR, "Invalid operator '=>'."),
            ("1.2.3 - 2.0.0", ParseErrorKind.INVALID_OPERATOR, "Invalid operator '-'."),
            (">=1.*", ParseErrorKind.WILDCARD_COMBINED_WITH_OPERATOR, "Operator is combined with wildcards in '>=1.*'."),
            (
                "1.*-rc",
                ParseErrorKind.WILDCARD_COMBINED_WITH_PRERELEASE,
                "A wildcard major, minor, or patch is combined with a prerelease version in '1.*-rc'.",
            ),
            (
                "1.2.3-*.rc",
                ParseErrorKind.PRERELEASE_WILDCARD_NOT_LAST,
                "Prerelease identifier follows wildcard prerelease identifier in '1.2.3-*.rc'.",
            ),
            (
                "1.2.3-rc*",
                ParseErrorKind.INVALID_WILDCARD_IN_PRERELEASE,
                "Prerelease version is a wildcard and should contain only 1 character in '1.2.3-rc*'.",
            ),
            (
                ">=1.0.0 1.2.3-rc*",
                ParseErrorKind.INVALID_WILDCARD_IN_PRERELEASE,
                "Prerelease version is a wildcard and should contain only 1 character in '1.2.3-rc*'.",
            ),
            (
                "1.0.0 || 1.2.3-*.rc",
                ParseErrorKind.PRERELEASE_WILDCARD_NOT_LAST,
                "Prerelease identifier follows wildcard prerelease identifier in '1.2.3-*.rc'.",
            ),
            (
                "1.*.3",
                ParseErrorKind.MINOR_OR_PATCH_MUST_BE_WILDCARD,
                "Patch version must be a wildcard because a preceding version number is a wildcard in '1.*.3'.",
            ),
            (
                "1.2*.3",
                ParseErrorKind.INVALID_WILDCARD_POSITION,
                "Minor version contains a wildcard mixed with other characters in '1.2*.3'.",
            ),
            ("1.x", ParseErrorKind.INVALID_CHARACTER, "Minor version contains invalid character 'x' in '1.x'."),
            ("v1.2.3", ParseErrorKind.LEADING_V_NOT_ALLOWED, "Leading 'v' in 'v1.2.3'."),
            ("1.2", ParseErrorKind.MISSING_COMPONENT, "Patch version missing in '1.2'."),
        ],
    )
    def test_failure(self, range_string, kind, message):
        """Test each invalid range reports the first rule it breaks."""
        with pytest.raises(InvalidRangeError) as exc_info:
            parse_range(range_string)
        assert exc_info.value.kind is kind
        assert exc_info.value.message == message
        assert exc_info.value.range == range_string

    def test_too_long(self):
        """Test that input longer than max_length is rejected."""
        with pytest.raises(InvalidRangeError) as exc_info:
            parse_range("1.2.3", max_length=2)
        assert exc_info.value.kind is ParseErrorKind.TOO_LONG
        assert exc_info.value.message == "Exceeded maximum length of 2 for '1.2.3'."

    def test_invalid_options(self):
        """Test that optional minor without optional patch is rejected."""
        with pytest.raises(InvalidOptionsError, match=r"An invalid RangeOptions value was used\. \(64\)"):
            parse_range("1.2.3", RangeOptions(64))

    def test_negative_max_length(self):
        """Test that a negative max_length is a ValueError."""
        with pytest.raises(ValueError):
            parse_range("1.2.3", max_length=-1)

    def test_not_a_string(self):
        """Test that non-string input raises TypeError."""
        with pytest.raises(TypeError):
            parse_range(None)


class TestTryParseRange:
    """Tests for try_parse_range function."""

    def test_valid(self):
        """Test that a valid range is returned."""
        assert try_parse_range("^1.2.3") == parse_range("^1.2.3")

    @pytest.mark.parametrize("range_string", ["", "=>1.0.0", "1.x", ">=1.*", "  \t"])
    def test_invalid(self, range_string):
        """Test that invalid ranges give None."""
        assert try_parse_range(range_string) is None

    def test_not_a_string(self):
        """Test that non-string input gives None."""
        assert try_parse_range(None) is None

    def test_caller_errors_still_raise(self):
        """Test that bad options and lengths are still errors."""
        with pytest.raises(ValueError):
            try_parse_range("1.2.3", max_length=-1)
        with pytest.raises(InvalidOptionsError):
            try_parse_range("1.2.3", RangeOptions(64))
