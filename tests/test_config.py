# SPDX-License-Identifier: MIT
"""Unit tests for parsing configuration."""

import logging

import pytest

from semver_range import ConfigError, InvalidVersionError, ParseConfig, RangeOptions, VersionStyles


class TestParseConfigDefaults:
    """Tests for the default configuration."""

    def test_defaults(self):
        """Test that defaults match the parse functions."""
        config = ParseConfig()
        assert config.version_styles == VersionStyles.STRICT
        assert config.range_options == RangeOptions.STRICT
        assert config.max_version_length == 1024
        assert config.max_range_length == 2048
        assert config.npm_include_all_prerelease is False

    def test_invalid_styles(self):
        """Test that unusable flag combinations are rejected."""
        with pytest.raises(ConfigError):
            ParseConfig(version_styles=VersionStyles(64))
        with pytest.raises(ConfigError):
            ParseConfig(range_options=RangeOptions(64))


class TestFromPyproject:
    """Tests for loading configuration from pyproject.toml."""

    def test_full_table(self, tmp_path):
        """Test loading every key."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(
            "[project]\n"
            'name = "demo"\n'
            "\n"
            "[tool.semver-range]\n"
            'version-styles = ["allow-v", "optional-patch"]\n'
            'range-options = ["loose"]\n'
            "max-version-length = 256\n"
            "max-range-length = 512\n"
            "npm-include-all-prerelease = true\n"
        )

        config = ParseConfig.from_pyproject(pyproject)

        assert config.version_styles == VersionStyles.ALLOW_V | VersionStyles.OPTIONAL_PATCH
        assert config.range_options == RangeOptions.LOOSE
        assert config.max_version_length == 256
        assert config.max_range_length == 512
        assert config.npm_include_all_prerelease is True

    def test_missing_table(self, tmp_path):
        """Test that a pyproject.toml without the table gives defaults."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[project]\nname = "demo"\n')
        assert ParseConfig.from_pyproject(pyproject) == ParseConfig()

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            ParseConfig.from_pyproject(tmp_path / "pyproject.toml")

    def test_invalid_toml(self, tmp_path):
        """Test that invalid TOML raises ConfigError."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.semver-range\n")
        with pytest.raises(ConfigError, match="Invalid TOML syntax"):
            ParseConfig.from_pyproject(pyproject)

    def test_logs_loaded_config(self, tmp_path, caplog):
        """Test that loading is logged at debug level."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.semver-range]\nmax-range-length = 100\n")
        with caplog.at_level(logging.DEBUG, logger="semver_range.config"):
            ParseConfig.from_pyproject(pyproject)
        assert "Loaded parse configuration" in caplog.text

    def test_unknown_flag(self):
        """Test that unknown flag names are rejected."""
        with pytest.raises(ConfigError, match="unknown VersionStyles flag 'bogus'"):
            ParseConfig.from_pyproject_dict({"tool": {"semver-range": {"version-styles": ["bogus"]}}})

    def test_flag_names_are_forgiving(self):
        """Test that underscores and upper case are accepted in flag names."""
        config = ParseConfig.from_pyproject_dict({"tool": {"semver-range": {"range-options": ["Include_All_Prerelease"]}}})
        assert config.range_options == RangeOptions.INCLUDE_ALL_PRERELEASE

    def test_negative_length(self):
        """Test that negative lengths are rejected."""
        with pytest.raises(ConfigError, match="must not be negative"):
            ParseConfig.from_pyproject_dict({"tool": {"semver-range": {"max-version-length": -1}}})

    def test_non_integer_length(self):
        """Test that lengths must be integers."""
        with pytest.raises(ConfigError, match="expected an integer"):
            ParseConfig.from_pyproject_dict({"tool": {"semver-range": {"max-range-length": True}}})

    def test_table_must_be_table(self):
        """Test that the tool entry must be a table."""
        with pytest.raises(ConfigError):
            ParseConfig.from_pyproject_dict({"tool": {"semver-range": "loose"}})


class TestFromEnv:
    """Tests for loading configuration from environment variables."""

    def test_all_variables(self):
        """Test reading every variable."""
        config = ParseConfig.from_env(
            {
                "SEMVER_RANGE_VERSION_STYLES": "allow-v, optional-minor-patch",
                "SEMVER_RANGE_RANGE_OPTIONS": "allow-metadata",
                "SEMVER_RANGE_MAX_VERSION_LENGTH": "64",
                "SEMVER_RANGE_MAX_RANGE_LENGTH": "128",
                "SEMVER_RANGE_NPM_INCLUDE_ALL_PRERELEASE": "yes",
            }
        )
        assert config.version_styles == VersionStyles.ALLOW_V | VersionStyles.OPTIONAL_MINOR_PATCH
        assert config.range_options == RangeOptions.ALLOW_METADATA
        assert config.max_version_length == 64
        assert config.max_range_length == 128
        assert config.npm_include_all_prerelease is True

    def test_empty_environment(self):
        """Test that no variables gives defaults."""
        assert ParseConfig.from_env({}) == ParseConfig()

    def test_reads_os_environ(self, monkeypatch):
        """Test that os.environ is used by default."""
        monkeypatch.setenv("SEMVER_RANGE_MAX_RANGE_LENGTH", "99")
        assert ParseConfig.from_env().max_range_length == 99

    def test_bad_boolean(self):
        """Test that unrecognised booleans are rejected."""
        with pytest.raises(ConfigError, match="expected a boolean"):
            ParseConfig.from_env({"SEMVER_RANGE_NPM_INCLUDE_ALL_PRERELEASE": "maybe"})

    def test_bad_integer(self):
        """Test that non-numeric lengths are rejected."""
        with pytest.raises(ConfigError, match="expected an integer"):
            ParseConfig.from_env({"SEMVER_RANGE_MAX_VERSION_LENGTH": "many"})


class TestParseWithConfig:
    """Tests for the parse helpers on ParseConfig."""

    def test_parse_version(self):
        """Test parsing a version with configured styles."""
        config = ParseConfig(version_styles=VersionStyles.ALLOW_V | VersionStyles.OPTIONAL_PATCH)
        assert str(config.parse_version("v1.2")) == "1.2.0"

    def test_max_version_length(self):
        """Test that the configured length limit applies."""
        config = ParseConfig(max_version_length=4)
        with pytest.raises(InvalidVersionError):
            config.parse_version("1.2.3")

    def test_parse_range(self):
        """Test parsing a range with configured options."""
        config = ParseConfig(range_options=RangeOptions.LOOSE)
        assert str(config.parse_range("v1")) == "1.0.0"

    def test_parse_npm_range(self):
        """Test the configured npm prerelease default."""
        config = ParseConfig(npm_include_all_prerelease=True)
        assert str(config.parse_npm_range("1.x")) == "1.*-*"
