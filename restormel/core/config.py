"""
Restormel Configuration Management

Loads and manages configuration from .restormel.yaml files.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from restormel.core.errors import ConfigError
from restormel.core.patterns import PatternCatalog
from restormel.core.walker import DEFAULT_EXTENSIONS, DEFAULT_IGNORED_NAMES, WalkConfig


CONFIG_FILENAME = ".restormel.yaml"

FAIL_ON_CHOICES = ("never", "dangerous", "any")
FORMAT_CHOICES = ("console", "json")


@dataclass
class OutputConfig:
    format: str = "console"
    file: Optional[str] = None


@dataclass
class PatternConfig:
    secret: list[str] = field(default_factory=list)
    dangerous: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class RestormelConfig:
    """Root configuration object for Restormel."""

    extensions: list[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    ignore: list[str] = field(default_factory=lambda: sorted(DEFAULT_IGNORED_NAMES))
    fail_on: str = "never"
    output: OutputConfig = field(default_factory=OutputConfig)
    patterns: PatternConfig = field(default_factory=PatternConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None, required: bool = False) -> "RestormelConfig":
        """
        Load configuration from a YAML file, falling back to defaults.

        Args:
            config_path: File to read. Defaults to .restormel.yaml in the cwd.
            required: Treat a missing file as an error instead of using defaults.

        Raises:
            ConfigError: If the file is not a valid configuration, or is
                missing while ``required`` is set.
        """
        if config_path is None:
            config_path = Path.cwd() / CONFIG_FILENAME

        if not config_path.exists():
            if required:
                raise ConfigError(config_path, "file not found")
            return cls()

        try:
            with open(config_path, encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(config_path, str(exc)) from exc

        if not isinstance(raw, dict):
            raise ConfigError(config_path, "top level must be a mapping")

        try:
            return cls._from_dict(raw)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise ConfigError(config_path, str(exc)) from exc

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "RestormelConfig":
        """Build config from a parsed YAML dictionary."""
        output_data = data.get("output") or {}
        output = OutputConfig(
            format=output_data.get("format", "console"),
            file=output_data.get("file"),
        )
        if output.format not in FORMAT_CHOICES:
            raise ValueError(f"output.format must be one of {', '.join(FORMAT_CHOICES)}")

        fail_on = str(data.get("fail_on", "never")).lower()
        if fail_on not in FAIL_ON_CHOICES:
            raise ValueError(f"fail_on must be one of {', '.join(FAIL_ON_CHOICES)}")

        patterns_data = data.get("patterns") or {}
        patterns = PatternConfig(
            secret=_string_list(patterns_data, "secret", [], "patterns.secret"),
            dangerous=[
                (str(item["name"]), str(item["pattern"]))
                for item in _list(patterns_data, "dangerous", [], "patterns.dangerous")
            ],
        )

        return cls(
            extensions=_string_list(data, "extensions", list(DEFAULT_EXTENSIONS)),
            ignore=_string_list(data, "ignore", sorted(DEFAULT_IGNORED_NAMES)),
            fail_on=fail_on,
            output=output,
            patterns=patterns,
        )

    def walk_config(self, root_dir: Path) -> WalkConfig:
        return WalkConfig(
            root_dir=root_dir,
            allowed_extensions=tuple(self.extensions),
            ignored_names=frozenset(self.ignore),
        )

    def catalog(self) -> PatternCatalog:
        """Build the pattern catalog, compiling any user patterns."""
        catalog = PatternCatalog.default()
        if self.patterns.secret or self.patterns.dangerous:
            catalog = catalog.with_extra(
                secret=self.patterns.secret,
                dangerous=self.patterns.dangerous,
            )
        return catalog


def _list(data: dict[str, Any], key: str, default: list, label: Optional[str] = None) -> list:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, list):
        raise ValueError(f"{label or key} must be a list")
    return value


def _string_list(
    data: dict[str, Any], key: str, default: list[str], label: Optional[str] = None
) -> list[str]:
    return [str(item) for item in _list(data, key, default, label)]


def generate_default_config() -> str:
    """Generate a default .restormel.yaml configuration file content."""
    return """\
# Restormel Audit Configuration

# File suffixes to scan
extensions:
  - .ts
  - .tsx
  - .js
  - .jsx

# Directory or file names skipped at any depth
ignore:
  - node_modules
  - .next
  - .git
  - dist
  - build

# Exit non-zero on findings: never, dangerous, any
fail_on: never

# Output settings
output:
  format: console  # console, json
  # file: restormel-report.json

# Extra detection patterns, appended to the built-in ones
patterns:
  secret: []
  dangerous: []
"""
