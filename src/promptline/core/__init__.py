"""Core functionality: template parser, fragments, and segment squashing."""

from promptline.core.color import ColorParser, StyleTable, parse_color
from promptline.core.errors import (
    CollaboratorError,
    ConfigError,
    EvaluationError,
    GitError,
    InvalidOptionsError,
    ParseError,
    PromptError,
)
from promptline.core.fragments import ColorReset, ColorStart, Fragment, Text, Value
from promptline.core.parser import TemplateParser, parse
from promptline.core.squash import group_segments, keep_segment, squash
from promptline.core.tokens import (
    ComponentName,
    ComponentRef,
    Condition,
    Conditional,
    EnvironmentVariablePresent,
    LastCommandStatusZero,
    Static,
    StyleMarker,
    Token,
    serialize,
)

__all__ = [
    "CollaboratorError",
    "ColorParser",
    "ColorReset",
    "ColorStart",
    "ComponentName",
    "ComponentRef",
    "Condition",
    "Conditional",
    "ConfigError",
    "EnvironmentVariablePresent",
    "EvaluationError",
    "Fragment",
    "GitError",
    "InvalidOptionsError",
    "LastCommandStatusZero",
    "ParseError",
    "PromptError",
    "Static",
    "StyleMarker",
    "StyleTable",
    "TemplateParser",
    "Text",
    "Token",
    "Value",
    "group_segments",
    "keep_segment",
    "parse",
    "parse_color",
    "serialize",
    "squash",
]
