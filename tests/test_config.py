"""Tests for the config module."""

import pytest

from promptline.config.defaults import DEFAULT_TEMPLATE
from promptline.config.loader import (
    deep_merge,
    load_config,
    load_config_from_string,
)
from promptline.config.schema import Config
from promptline.core.errors import ConfigError


class TestDeepMerge:
    """Tests for deep_merge function."""

    def test_merge_simple_dicts(self):
        """Test merging simple dictionaries."""
        base = {"a": 1, "b": 2}
        override = {"b": 3, "c": 4}

        result = deep_merge(base, override)

        assert result == {"a": 1, "b": 3, "c": 4}

    def test_merge_nested_dicts(self):
        """Test merging nested dictionaries."""
        base = {"styles": {"warn": "yellow", "ok": "green"}}
        override = {"styles": {"ok": "bold green"}}

        result = deep_merge(base, override)

        assert result == {"styles": {"warn": "yellow", "ok": "bold green"}}

    def test_merge_lists(self):
        """Test merging lists (extend behavior)."""
        base = {"items": [1, 2]}
        override = {"items": [3, 4]}

        result = deep_merge(base, override)

        assert result == {"items": [1, 2, 3, 4]}


class TestLoadConfigFromString:
    """Tests for load_config_from_string function."""

    def test_empty_config_uses_defaults(self):
        """Test an empty document yields the defaults."""
        config = load_config_from_string("")

        assert config.template == DEFAULT_TEMPLATE
        assert config.color is True
        assert config.styles == {}

    def test_template_and_color(self):
        config = load_config_from_string(
            """
template: "{user}@{hostname} {cwd style=short} > "
color: false
"""
        )

        assert config.template == "{user}@{hostname} {cwd style=short} > "
        assert config.color is False

    def test_custom_styles(self):
        config = load_config_from_string(
            """
styles:
  warn: bold yellow on red
  path: bright_blue
"""
        )

        table = config.style_table()

        assert "warn" in table
        assert table.sequence("warn") == "\033[1;33;41m"
        assert table.sequence("path") == "\033[94m"

    @pytest.mark.parametrize("name", ["reset", "end", "cwd", "if_ok", "env_x", "bad-name", "x1"])
    def test_reserved_style_names(self, name):
        """Test style names that would clash with the grammar are rejected."""
        with pytest.raises(ConfigError, match="styles"):
            load_config_from_string(f"styles:\n  {name}: red\n")

    def test_invalid_color_spec(self):
        with pytest.raises(ConfigError, match="invalid color"):
            load_config_from_string("styles:\n  warn: chartreuse\n")

    def test_palette_color_style(self):
        """Test a 256-color index is accepted and renders."""
        config = load_config_from_string('styles:\n  warn: "208"\n')

        assert config.style_table().sequence("warn") == "\033[38;5;208m"

    def test_color_number_outside_palette(self):
        with pytest.raises(ConfigError, match="invalid color '300'"):
            load_config_from_string('styles:\n  warn: "300"\n')

    def test_invalid_timeout(self):
        with pytest.raises(ConfigError, match="git_timeout"):
            load_config_from_string("git_timeout: 0\n")

    def test_not_a_mapping(self):
        with pytest.raises(ConfigError):
            load_config_from_string("- just\n- a list\n")

    def test_malformed_yaml(self):
        with pytest.raises(ConfigError):
            load_config_from_string("template: [unclosed\n")


class TestLoadConfig:
    """Tests for loading configuration files."""

    def test_missing_files(self, tmp_path):
        config = load_config(tmp_path / "missing.yaml", tmp_path / "conf.d")

        assert config == Config()

    def test_main_file(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text('template: "{cwd} % "\n')

        config = load_config(config_file, tmp_path / "conf.d")

        assert config.template == "{cwd} % "

    def test_dropin_files_override_in_order(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("styles:\n  warn: yellow\n")
        dropin = tmp_path / "conf.d"
        dropin.mkdir()
        (dropin / "10-colors.yaml").write_text("styles:\n  ok: green\n  warn: red\n")
        (dropin / "20-template.yml").write_text('template: "{jobs} $ "\n')

        config = load_config(str(config_file), str(dropin))

        assert config.styles == {"warn": "red", "ok": "green"}
        assert config.template == "{jobs} $ "
