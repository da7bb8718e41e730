"""
Tests for Configuration Loading
"""

from pathlib import Path

import pytest
import yaml

from restormel.core.config import (
    CONFIG_FILENAME,
    RestormelConfig,
    generate_default_config,
)
from restormel.core.errors import ConfigError, PatternError
from restormel.core.walker import DEFAULT_EXTENSIONS, DEFAULT_IGNORED_NAMES


class TestRestormelConfig:
    """Tests for RestormelConfig."""

    def test_defaults(self, config: RestormelConfig):
        """Test defaults mirror the walker constants."""
        assert tuple(config.extensions) == DEFAULT_EXTENSIONS
        assert set(config.ignore) == DEFAULT_IGNORED_NAMES
        assert config.fail_on == "never"
        assert config.output.format == "console"

    def test_missing_file_uses_defaults(self, temp_dir: Path):
        """Test loading a missing file falls back to defaults."""
        loaded = RestormelConfig.load(temp_dir / CONFIG_FILENAME)
        assert loaded == RestormelConfig()

    def test_load_from_yaml(self, temp_dir: Path):
        """Test values are read from the file."""
        path = temp_dir / CONFIG_FILENAME
        path.write_text(
            """
extensions: [.ts, .vue]
ignore: [node_modules, vendor]
fail_on: Dangerous
output:
  format: json
  file: out.json
patterns:
  secret: ["ghp_[A-Za-z0-9]{36}"]
  dangerous:
    - name: "setTimeout(string)"
      pattern: "setTimeout\\\\s*\\\\(\\\\s*['\\"]"
"""
        )
        loaded = RestormelConfig.load(path)

        assert loaded.extensions == [".ts", ".vue"]
        assert loaded.ignore == ["node_modules", "vendor"]
        assert loaded.fail_on == "dangerous"
        assert loaded.output.format == "json"
        assert loaded.output.file == "out.json"
        assert loaded.patterns.secret == ["ghp_[A-Za-z0-9]{36}"]
        assert loaded.patterns.dangerous[0][0] == "setTimeout(string)"

        catalog = loaded.catalog()
        assert len(catalog.secret) == 5
        assert catalog.dangerous[-1].regex.search("setTimeout('x()', 1)")

    def test_empty_file_uses_defaults(self, temp_dir: Path):
        """Test an empty file is the same as no file."""
        path = temp_dir / CONFIG_FILENAME
        path.write_text("")
        assert RestormelConfig.load(path) == RestormelConfig()

    def test_invalid_yaml(self, temp_dir: Path):
        """Test malformed YAML raises ConfigError."""
        path = temp_dir / CONFIG_FILENAME
        path.write_text("extensions: [.ts\n")
        with pytest.raises(ConfigError):
            RestormelConfig.load(path)

    def test_non_mapping(self, temp_dir: Path):
        """Test a top-level list is rejected."""
        path = temp_dir / CONFIG_FILENAME
        path.write_text("- .ts\n")
        with pytest.raises(ConfigError):
            RestormelConfig.load(path)

    @pytest.mark.parametrize("content", [
        "fail_on: sometimes\n",
        "output:\n  format: sarif\n",
        "patterns:\n  dangerous:\n    - pattern: eval\n",
    ])
    def test_invalid_values(self, temp_dir: Path, content: str):
        """Test unknown choices and incomplete entries raise ConfigError."""
        path = temp_dir / CONFIG_FILENAME
        path.write_text(content)
        with pytest.raises(ConfigError):
            RestormelConfig.load(path)

    @pytest.mark.parametrize("content", [
        "extensions: .ts\n",
        "ignore: vendor\n",
        "patterns:\n  secret: \"ghp_[A-Za-z0-9]{36}\"\n",
        "patterns:\n  dangerous: eval\n",
    ])
    def test_scalar_instead_of_list(self, temp_dir: Path, content: str):
        """Test a bare string is rejected instead of being split into characters."""
        path = temp_dir / CONFIG_FILENAME
        path.write_text(content)
        with pytest.raises(ConfigError) as exc_info:
            RestormelConfig.load(path)
        assert "must be a list" in str(exc_info.value)

    def test_missing_required_file(self, temp_dir: Path):
        """Test an explicitly requested file must exist."""
        with pytest.raises(ConfigError):
            RestormelConfig.load(temp_dir / "custom.yaml", required=True)

    def test_invalid_pattern_fails_when_building_catalog(self, temp_dir: Path):
        """Test a broken user regex surfaces before any file is scanned."""
        path = temp_dir / CONFIG_FILENAME
        path.write_text('patterns:\n  secret: ["[unclosed"]\n')
        loaded = RestormelConfig.load(path)
        with pytest.raises(PatternError):
            loaded.catalog()

    def test_walk_config(self, config: RestormelConfig, temp_dir: Path):
        """Test conversion to a WalkConfig."""
        walk_config = config.walk_config(temp_dir)
        assert walk_config.root_dir == temp_dir
        assert walk_config.allowed_extensions == DEFAULT_EXTENSIONS
        assert walk_config.ignored_names == DEFAULT_IGNORED_NAMES

    def test_generated_config_matches_defaults(self):
        """Test the init template parses back to the defaults."""
        raw = yaml.safe_load(generate_default_config())
        loaded = RestormelConfig._from_dict(raw)
        default = RestormelConfig()

        assert loaded.extensions == default.extensions
        assert set(loaded.ignore) == set(default.ignore)
        assert loaded.fail_on == default.fail_on
        assert loaded.output == default.output
        assert loaded.patterns == default.patterns
