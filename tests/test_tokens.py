"""Tests for the token model."""

import pytest

from promptline.core.tokens import (
    ComponentName,
    ComponentRef,
    Conditional,
    EnvironmentVariablePresent,
    LastCommandStatusZero,
    Static,
    StyleMarker,
    parse_condition,
    serialize,
)


class TestParseCondition:
    """Tests for condition identifiers."""

    def test_last_command_status(self):
        assert parse_condition("last_command_status") == LastCommandStatusZero()

    def test_environment_variable(self):
        assert parse_condition("env_HOME") == EnvironmentVariablePresent("HOME")

    @pytest.mark.parametrize("identifier", ["env_", "status", "last_command"])
    def test_unknown(self, identifier):
        with pytest.raises(ValueError):
            parse_condition(identifier)


class TestComponentName:
    """Tests for component names."""

    def test_unknown_name(self):
        with pytest.raises(ValueError):
            ComponentName.from_identifier("git_tag")


class TestSerialize:
    """Tests for serializing tokens back to template syntax."""

    def test_static_and_component(self):
        tokens = [ComponentRef(ComponentName.CWD, {"style": "short"}), Static(" $ ")]

        assert serialize(tokens) == "{cwd style=short} $ "

    def test_style_markers(self):
        tokens = [StyleMarker("red"), ComponentRef(ComponentName.GIT_BRANCH), StyleMarker("reset")]

        assert serialize(tokens) == "{red}{git_branch}{reset}"

    def test_conditional(self):
        tokens = [
            Conditional(
                condition=EnvironmentVariablePresent("SSH_TTY"),
                left=[ComponentRef(ComponentName.HOSTNAME)],
                right=[Static("local")],
            )
        ]

        assert serialize(tokens) == "{if env_SSH_TTY}{hostname}{else}local{end}"

    def test_escaped_brace_is_kept(self):
        assert serialize([Static("{{"), Static("x")]) == "{{x"
