"""Error types raised while parsing and rendering a prompt."""

from __future__ import annotations


class PromptError(Exception):
    """Base class for every error that aborts a render."""


class ParseError(PromptError):
    """The template does not match the grammar.

    Attributes:
        position: Offset of the first character the parser could not consume
        remainder: The unconsumed suffix of the template
    """

    def __init__(self, template: str, position: int) -> None:
        self.template = template
        self.position = position
        self.remainder = template[position:]
        super().__init__(f"parse error: {self.remainder}")


class EvaluationError(PromptError):
    """A token could not be evaluated against the context."""


class InvalidOptionsError(EvaluationError):
    """A component was given options it does not understand."""

    def __init__(self, component: str, options: dict[str, str]) -> None:
        self.component = component
        self.options = dict(options)
        pairs = ", ".join(f"{key}={value}" for key, value in self.options.items())
        super().__init__(f"invalid options for {component}: {pairs}")


class CollaboratorError(EvaluationError):
    """A dynamic data source failed and its handler chose to propagate it."""


class GitError(CollaboratorError):
    """A git command failed."""


class ConfigError(PromptError):
    """The configuration file could not be loaded or validated."""
