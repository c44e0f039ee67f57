# SPDX-License-Identifier: MIT
"""Unit tests for range sets."""

import logging

import pytest

from semver_range import RangeSet, UnbrokenRange, parse_range, parse_version


def v(text):
    return parse_version(text)


class TestRangeSetCreate:
    """Tests for building and merging range sets."""

    def test_empty(self):
        """Test the empty set."""
        ranges = RangeSet()
        assert ranges == RangeSet.EMPTY
        assert not ranges
        assert len(ranges) == 0
        assert str(ranges) == "<0.0.0-0"
        assert not ranges.contains("0.0.0")

    def test_empty_members_dropped(self):
        """Test that empty ranges do not become members."""
        ranges = RangeSet.create(UnbrokenRange.EMPTY, UnbrokenRange.equals(v("1.0.0")))
        assert len(ranges) == 1

    def test_non_range_rejected(self):
        """Test that members must be unbroken ranges."""
        with pytest.raises(TypeError):
            RangeSet(["1.0.0"])

    def test_members_sorted(self):
        """Test that members are ordered by their start."""
        ranges = parse_range("3.0.0 || 1.0.0 || 2.0.0")
        assert [str(r) for r in ranges] == ["1.0.0", "2.0.0", "3.0.0"]
        assert str(ranges) == "1.0.0 || 2.0.0 || 3.0.0"

    def test_merge_chain(self):
        """Test that members joined out of order merge into one."""
        ranges = parse_range("^3.0.0 || ^1.0.0 || ^2.0.0")
        assert len(ranges) == 1
        assert str(ranges) == ">=1.0.0 <4.0.0-0"

    def test_contained_member_absorbed(self):
        """Test that a member inside another disappears."""
        assert parse_range("^1.2.3 || ^1.5.0") == parse_range("^1.2.3")

    def test_halves_make_everything(self):
        """Test that two halves meeting at a version cover every release."""
        assert parse_range("<2.0.0 || >=2.0.0") == RangeSet.ALL_RELEASE

    def test_different_prerelease_rules_not_merged(self):
        """Test that a range with all prereleases stays apart from one without."""
        ranges = parse_range("1.* || 1.2.*-*")
        assert len(ranges) == 2
        assert str(ranges) == "1.* || 1.2.*-*"

    def test_widened_member_absorbs_earlier_member(self):
        """Test that a member widened by a later union still absorbs members before it."""
        ranges = RangeSet.create(
            UnbrokenRange.less_than(v("3.3.2")),
            UnbrokenRange.less_than(v("1.0.0"), include_all_prerelease=True),
            UnbrokenRange.at_least(v("0.5.0"), include_all_prerelease=True),
        )
        assert ranges == RangeSet.ALL
        assert str(ranges) == "*-*"
        assert ranges.union(ranges) == ranges

    def test_widened_member_parsed(self):
        """Test the same merge from a parsed range."""
        assert parse_range("<3.3.2 || *-* <1.0.0 || *-* >=0.5.0") == RangeSet.ALL

    def test_merge_logged(self, caplog):
        """Test that merging members is logged at debug level."""
        with caplog.at_level(logging.DEBUG, logger="semver_range.range_set"):
            parse_range("^1.0.0 || ^2.0.0")
        assert "Merged version ranges" in caplog.text


class TestRangeSetOperations:
    """Tests for membership, union and the container protocol."""

    def test_contains(self):
        """Test membership in any member."""
        ranges = parse_range("1.0.0 || >=3.0.0")
        assert ranges.contains("1.0.0")
        assert "3.5.0" in ranges
        assert v("2.0.0") not in ranges

    def test_union(self):
        """Test joining two sets."""
        union = parse_range("^1.0.0") | parse_range("^2.0.0")
        assert union == parse_range(">=1.0.0 <3.0.0-0")
        assert parse_range("^1.0.0").union(RangeSet.EMPTY) == parse_range("^1.0.0")

    def test_union_with_all(self):
        """Test that the union with every version is every version."""
        assert parse_range("^1.0.0").union(RangeSet.ALL) == RangeSet.ALL

    def test_iteration(self):
        """Test iterating and indexing members."""
        ranges = parse_range("1.0.0 || 2.0.0")
        assert list(ranges) == list(ranges.ranges)
        assert ranges[1] == UnbrokenRange.equals(v("2.0.0"))

    def test_hash(self):
        """Test that equal sets hash alike."""
        assert len({parse_range("1.*"), parse_range(">=1.0.0 <2.0.0-0")}) == 1

    def test_repr(self):
        """Test the repr shows the printed range."""
        assert repr(parse_range(">=1.0.0 <2.0.0")) == "RangeSet('>=1.0.0 <2.0.0')"

    def test_parse_helpers(self):
        """Test the parsing class methods."""
        assert RangeSet.parse("^1.0.0") == parse_range("^1.0.0")
        assert str(RangeSet.parse_npm("1.x")) == "1.*"
        assert str(RangeSet.ALL) == "*-*"
