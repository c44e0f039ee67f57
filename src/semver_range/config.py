# SPDX-License-Identifier: MIT
"""Project level parsing defaults.

A project can pin the dialect it parses versions and ranges with in its
pyproject.toml::

    [tool.semver-range]
    version-styles = ["allow-v", "optional-patch"]
    range-options = ["loose"]
    max-version-length = 256
    npm-include-all-prerelease = false

or with ``SEMVER_RANGE_*`` environment variables.
"""

from __future__ import annotations

import enum
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, TypeVar, Union

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .errors import InvalidOptionsError
from .npm_range import parse_npm_range
from .parser import DEFAULT_MAX_VERSION_LENGTH, parse_version
from .range_parser import DEFAULT_MAX_RANGE_LENGTH
from .range_set import RangeSet
from .semver import Version
from .standard_range import parse_range
from .styles import RangeOptions, VersionStyles, check_range_options, check_styles

logger = logging.getLogger(__name__)

TOOL_TABLE = "semver-range"
ENV_PREFIX = "SEMVER_RANGE_"

_Flags = TypeVar("_Flags", VersionStyles, RangeOptions)


class ConfigError(Exception):
    """Raised when parsing configuration is invalid."""

    pass


def flag_name(member: enum.Flag) -> str:
    """Kebab-case name of a flag member, e.g. ``allow-lower-v``."""
    return member.name.lower().replace("_", "-")


def _parse_flags(flag_type: type[_Flags], names: Union[str, Iterable[str]], source: str) -> _Flags:
    if isinstance(names, str):
        names = [n for n in names.split(",") if n.strip()]
    value = flag_type(0)
    for raw in names:
        if not isinstance(raw, str):
            raise ConfigError(f"{source}: flag names must be strings, got {type(raw).__name__}")
        key = raw.strip().lower().replace("_", "-")
        member = next((m for m in flag_type.__members__.values() if flag_name(m) == key), None)
        if member is None:
            raise ConfigError(f"{source}: unknown {flag_type.__name__} flag '{raw.strip()}'")
        value |= member
    return value


def _parse_length(value: Any, source: str) -> int:
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError as e:
            raise ConfigError(f"{source}: expected an integer, got '{value}'") from e
    if not isinstance(value, int) or isinstance(value, bool):
        raise ConfigError(f"{source}: expected an integer, got {type(value).__name__}")
    if value < 0:
        raise ConfigError(f"{source}: must not be negative")
    return value


def _parse_bool(value: Any, source: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "1", "yes", "on"):
        return True
    if isinstance(value, str) and value.strip().lower() in ("false", "0", "no", "off", ""):
        return False
    raise ConfigError(f"{source}: expected a boolean, got '{value}'")


@dataclass
class ParseConfig:
    """Defaults used when parsing versions and ranges.

    Attributes:
        version_styles: Styles for :meth:`parse_version`
        range_options: Options for :meth:`parse_range`
        max_version_length: Longest accepted version string
        max_range_length: Longest accepted range string
        npm_include_all_prerelease: Default for :meth:`parse_npm_range`
    """

    version_styles: VersionStyles = VersionStyles.STRICT
    range_options: RangeOptions = RangeOptions.STRICT
    max_version_length: int = DEFAULT_MAX_VERSION_LENGTH
    max_range_length: int = DEFAULT_MAX_RANGE_LENGTH
    npm_include_all_prerelease: bool = False

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Check the flag combinations, raising ConfigError if they are unusable."""
        try:
            self.version_styles = check_styles(self.version_styles)
            self.range_options = check_range_options(self.range_options)
        except InvalidOptionsError as e:
            raise ConfigError(str(e)) from e

    @classmethod
    def from_pyproject(cls, pyproject_path: str | Path) -> "ParseConfig":
        """Create a ParseConfig from the ``[tool.semver-range]`` table of a pyproject.toml.

        Raises:
            ConfigError: If the file is not valid TOML or a value is invalid
            FileNotFoundError: If the file doesn't exist
        """
        path = Path(pyproject_path)
        if not path.exists():
            raise FileNotFoundError(f"pyproject.toml not found: {path}")

        try:
            with open(path, "rb") as f:
                pyproject = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML syntax: {e}") from e

        config = cls.from_pyproject_dict(pyproject)
        logger.debug("Loaded parse configuration from %s: %s", path, config)
        return config

    @classmethod
    def from_pyproject_dict(cls, pyproject: dict[str, Any]) -> "ParseConfig":
        """Create a ParseConfig from a parsed pyproject.toml dictionary.

        Missing keys keep their defaults.

        Examples:
            >>> config = ParseConfig.from_pyproject_dict(
            ...     {"tool": {"semver-range": {"version-styles": ["allow-v"]}}}
            ... )
            >>> str(config.parse_version("v1.2.3"))
            '1.2.3'
        """
        table = pyproject.get("tool", {}).get(TOOL_TABLE, {})
        if not isinstance(table, dict):
            raise ConfigError(f"[tool.{TOOL_TABLE}] must be a table")

        source = f"[tool.{TOOL_TABLE}]"
        config = cls()
        if "version-styles" in table:
            config.version_styles = _parse_flags(VersionStyles, table["version-styles"], f"{source} version-styles")
        if "range-options" in table:
            config.range_options = _parse_flags(RangeOptions, table["range-options"], f"{source} range-options")
        if "max-version-length" in table:
            config.max_version_length = _parse_length(table["max-version-length"], f"{source} max-version-length")
        if "max-range-length" in table:
            config.max_range_length = _parse_length(table["max-range-length"], f"{source} max-range-length")
        if "npm-include-all-prerelease" in table:
            config.npm_include_all_prerelease = _parse_bool(
                table["npm-include-all-prerelease"], f"{source} npm-include-all-prerelease"
            )
        config.validate()
        return config

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ParseConfig":
        """Create configuration from environment variables.

        Flag lists are comma separated, e.g.
        ``SEMVER_RANGE_VERSION_STYLES=allow-v,optional-patch``.
        """
        env = os.environ if environ is None else environ
        config = cls()

        if styles := env.get(ENV_PREFIX + "VERSION_STYLES"):
            config.version_styles = _parse_flags(VersionStyles, styles, ENV_PREFIX + "VERSION_STYLES")
        if options := env.get(ENV_PREFIX + "RANGE_OPTIONS"):
            config.range_options = _parse_flags(RangeOptions, options, ENV_PREFIX + "RANGE_OPTIONS")
        if length := env.get(ENV_PREFIX + "MAX_VERSION_LENGTH"):
            config.max_version_length = _parse_length(length, ENV_PREFIX + "MAX_VERSION_LENGTH")
        if length := env.get(ENV_PREFIX + "MAX_RANGE_LENGTH"):
            config.max_range_length = _parse_length(length, ENV_PREFIX + "MAX_RANGE_LENGTH")
        config.npm_include_all_prerelease = _parse_bool(
            env.get(ENV_PREFIX + "NPM_INCLUDE_ALL_PRERELEASE", ""), ENV_PREFIX + "NPM_INCLUDE_ALL_PRERELEASE"
        )

        config.validate()
        logger.debug("Loaded parse configuration from environment: %s", config)
        return config

    def parse_version(self, version_string: str) -> Version:
        return parse_version(version_string, self.version_styles, self.max_version_length)

    def parse_range(self, range_string: str) -> RangeSet:
        return parse_range(range_string, self.range_options, self.max_range_length)

    def parse_npm_range(self, range_string: str) -> RangeSet:
        return parse_npm_range(range_string, self.npm_include_all_prerelease, self.max_range_length)
