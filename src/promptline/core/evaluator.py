"""Evaluate a token tree against a context."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from promptline.components import HANDLERS
from promptline.core.context import EvaluationContext
from promptline.core.errors import InvalidOptionsError
from promptline.core.fragments import ColorReset, ColorStart, Fragment, Text, Value
from promptline.core.squash import Slot, squash
from promptline.core.tokens import (
    ComponentRef,
    Condition,
    Conditional,
    EnvironmentVariablePresent,
    LastCommandStatusZero,
    Static,
    StyleMarker,
    Token,
)

logger = logging.getLogger(__name__)


def check_condition(condition: Condition, context: EvaluationContext) -> bool:
    """Evaluate a conditional's condition."""
    match condition:
        case LastCommandStatusZero():
            return context.last_status == 0
        case EnvironmentVariablePresent(name=name):
            return context.env_present(name)
    raise TypeError(f"unknown condition: {condition!r}")


def run_component(token: ComponentRef, context: EvaluationContext) -> Fragment | None:
    """Dispatch a component to its handler.

    Values are escaped for the target shell so prompt expansion shows
    them literally; template text is left as written.

    Raises:
        InvalidOptionsError: If the handler left options unconsumed
    """
    options = dict(token.options)
    fragment = HANDLERS[token.name](context, options)
    if options:
        raise InvalidOptionsError(token.name.value, options)
    if isinstance(fragment, Value):
        return Value(context.shell.escape_value(fragment.text))
    if fragment is None:
        logger.debug("%s produced no output", token.name.value)
    return fragment


def evaluate(tokens: Iterable[Token], context: EvaluationContext) -> list[Slot]:
    """Evaluate tokens into fragment slots.

    Conditionals are replaced by the fragments of the branch that fired.
    Components with nothing to show contribute ``None``.

    Raises:
        EvaluationError: If a component fails in a way that aborts the render
    """
    slots: list[Slot] = []

    for token in tokens:
        match token:
            case Static(text=text):
                slots.append(Text(text))
            case StyleMarker(name=name) if token.is_reset:
                slots.append(ColorReset(context.style_sequence(name)))
            case StyleMarker(name=name):
                slots.append(ColorStart(context.style_sequence(name)))
            case ComponentRef():
                slots.append(run_component(token, context))
            case Conditional(condition=condition, left=left, right=right):
                if check_condition(condition, context):
                    slots.extend(evaluate(left, context))
                elif right is not None:
                    slots.extend(evaluate(right, context))

    return slots


def render(fragments: Iterable[Fragment]) -> str:
    """Concatenate printable fragments."""
    return "".join(str(fragment) for fragment in fragments)


def render_prompt(tokens: Iterable[Token], context: EvaluationContext) -> str:
    """Evaluate, squash and render a parsed template."""
    return render(squash(evaluate(tokens, context)))
