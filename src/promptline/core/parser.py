"""Template parser built from small composable parsing functions.

Every parser is a callable taking a :class:`Cursor` and returning either
``(value, advanced_cursor)`` or ``None`` on failure. Failure never consumes
input, so alternatives can be tried in order from the same position.

Grammar, alternatives tried in order at each position::

    tokens      := (static | escaped | style | conditional | component)+
    static      := [^{]+
    escaped     := "{{"
    style       := "{" ws identifier ws "}"            identifier is a style
    conditional := "{" ws "if" ws identifier "}" tokens ["{else}" tokens] "{end}"
    component   := "{" ws identifier (ws1 key "=" value)* ws "}"
    identifier  := [A-Za-z_]+                          except "end" and "else"
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional, TypeVar

from promptline.core.color import StyleTable
from promptline.core.errors import ParseError
from promptline.core.tokens import (
    RESERVED_KEYWORDS,
    ComponentName,
    ComponentRef,
    Conditional,
    Static,
    StyleMarker,
    Token,
    parse_condition,
)

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Cursor:
    """Immutable position in the input string."""

    text: str
    pos: int = 0

    @property
    def rest(self) -> str:
        return self.text[self.pos :]

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def startswith(self, prefix: str) -> bool:
        return self.text.startswith(prefix, self.pos)

    def advance(self, count: int) -> Cursor:
        return Cursor(self.text, self.pos + count)


ParseResult = Optional[tuple[T, Cursor]]
Parser = Callable[[Cursor], ParseResult[T]]


# Primitive parsers


def tag(literal: str) -> Parser[str]:
    """Match an exact string."""

    def parse(cursor: Cursor) -> ParseResult[str]:
        if cursor.startswith(literal):
            return literal, cursor.advance(len(literal))
        return None

    return parse


def take_while(predicate: Callable[[str], bool]) -> Parser[str]:
    """Consume zero or more characters satisfying ``predicate``."""

    def parse(cursor: Cursor) -> ParseResult[str]:
        end = cursor.pos
        text = cursor.text
        while end < len(text) and predicate(text[end]):
            end += 1
        return text[cursor.pos : end], Cursor(text, end)

    return parse


def take_while1(predicate: Callable[[str], bool]) -> Parser[str]:
    """Consume one or more characters satisfying ``predicate``."""
    return verify(take_while(predicate), bool)


def none_of(chars: str) -> Parser[str]:
    """Consume one or more characters not in ``chars``."""
    return take_while1(lambda c: c not in chars)


# Combinators


def alt(*parsers: Parser[Any]) -> Parser[Any]:
    """First parser that succeeds wins."""

    def parse(cursor: Cursor) -> ParseResult[Any]:
        for parser in parsers:
            result = parser(cursor)
            if result is not None:
                return result
        return None

    return parse


def seq(*parsers: Parser[Any]) -> Parser[tuple[Any, ...]]:
    """Run parsers one after another, collecting their values."""

    def parse(cursor: Cursor) -> ParseResult[tuple[Any, ...]]:
        values: list[Any] = []
        for parser in parsers:
            result = parser(cursor)
            if result is None:
                return None
            value, cursor = result
            values.append(value)
        return tuple(values), cursor

    return parse


def many0(parser: Parser[T]) -> Parser[list[T]]:
    """Apply ``parser`` until it fails or stops consuming input."""

    def parse(cursor: Cursor) -> ParseResult[list[T]]:
        values: list[T] = []
        while True:
            result = parser(cursor)
            if result is None or result[1].pos == cursor.pos:
                return values, cursor
            value, cursor = result
            values.append(value)

    return parse


def many1(parser: Parser[T]) -> Parser[list[T]]:
    """Like :func:`many0` but requires at least one match."""
    return verify(many0(parser), bool)


def opt(parser: Parser[T]) -> Parser[T | None]:
    """Optional parser; yields ``None`` without consuming on failure."""

    def parse(cursor: Cursor) -> ParseResult[T | None]:
        result = parser(cursor)
        if result is None:
            return None, cursor
        return result

    return parse


def map_(parser: Parser[T], fn: Callable[[T], U]) -> Parser[U]:
    """Transform the value of a successful parse."""

    def parse(cursor: Cursor) -> ParseResult[U]:
        result = parser(cursor)
        if result is None:
            return None
        value, cursor = result
        return fn(value), cursor

    return parse


def map_res(parser: Parser[T], fn: Callable[[T], U]) -> Parser[U]:
    """Transform the value, failing the parse if ``fn`` raises ValueError."""

    def parse(cursor: Cursor) -> ParseResult[U]:
        result = parser(cursor)
        if result is None:
            return None
        value, cursor = result
        try:
            return fn(value), cursor
        except ValueError:
            return None

    return parse


def verify(parser: Parser[T], predicate: Callable[[T], bool]) -> Parser[T]:
    """Fail the parse unless ``predicate`` accepts its value."""

    def parse(cursor: Cursor) -> ParseResult[T]:
        result = parser(cursor)
        if result is None or not predicate(result[0]):
            return None
        return result

    return parse


def preceded(first: Parser[Any], second: Parser[T]) -> Parser[T]:
    """Run both, keep the value of the second."""
    return map_(seq(first, second), lambda values: values[1])


def terminated(first: Parser[T], second: Parser[Any]) -> Parser[T]:
    """Run both, keep the value of the first."""
    return map_(seq(first, second), lambda values: values[0])


# Template grammar

multispace0 = take_while(str.isspace)
multispace1 = take_while1(str.isspace)


def _is_identifier_char(char: str) -> bool:
    return char == "_" or ("a" <= char <= "z") or ("A" <= char <= "Z")


def is_identifier(name: str) -> bool:
    """Whether a whole string is a valid identifier (reserved words aside)."""
    return bool(name) and all(_is_identifier_char(c) for c in name)


identifier: Parser[str] = verify(
    take_while1(_is_identifier_char),
    lambda name: name not in RESERVED_KEYWORDS,
)

static = map_(none_of("{"), Static)

escaped_opening_brace = map_(tag("{{"), Static)

option_key = take_while1(lambda c: c not in "=}" and not c.isspace())
option_value = none_of("} ")
key_value = preceded(multispace1, seq(terminated(option_key, tag("=")), option_value))

if_start = seq(tag("{"), multispace0, tag("if"))
if_condition = terminated(preceded(multispace0, map_res(identifier, parse_condition)), tag("}"))
else_tag = tag("{else}")
end_tag = tag("{end}")

component_name = preceded(seq(tag("{"), multispace0), map_res(identifier, ComponentName.from_identifier))
component_options = terminated(many0(key_value), seq(multispace0, tag("}")))


def _component(values: tuple[ComponentName, list[tuple[str, str]]]) -> ComponentRef:
    name, pairs = values
    return ComponentRef(name=name, options=dict(pairs))


component = map_(seq(component_name, component_options), _component)


class TemplateParser:
    """Parser for prompt templates.

    Style keywords are resolved against a :class:`StyleTable`, so styles
    defined in the configuration are recognized as markers rather than
    rejected as unknown components.
    """

    def __init__(self, styles: StyleTable | None = None) -> None:
        self.styles = styles if styles is not None else StyleTable()

        style_name = verify(identifier, lambda name: name in self.styles)
        self.style = map_(
            terminated(preceded(seq(tag("{"), multispace0), style_name), seq(multispace0, tag("}"))),
            StyleMarker,
        )
        self.else_branch = preceded(else_tag, self.tokens)
        self.conditional = map_(
            seq(preceded(if_start, if_condition), self.tokens, terminated(opt(self.else_branch), end_tag)),
            lambda values: Conditional(condition=values[0], left=values[1], right=values[2]),
        )
        self.token = alt(static, escaped_opening_brace, self.style, self.conditional, component)

    def tokens(self, cursor: Cursor) -> ParseResult[list[Token]]:
        """One or more tokens; nested branches recurse through here."""
        return many1(self.token)(cursor)

    def parse(self, template: str) -> list[Token]:
        """Parse a whole template.

        Raises:
            ParseError: If no alternative matches at some position or
                input remains after the last token
        """
        cursor = Cursor(template)
        result = self.tokens(cursor)
        if result is not None:
            tokens, cursor = result
            if cursor.at_end():
                return tokens
        raise ParseError(template, cursor.pos)


def parse(template: str, styles: StyleTable | None = None) -> list[Token]:
    """Parse a template string into a token tree.

    Args:
        template: The template, e.g. ``"{cwd} {git_branch} $ "``
        styles: Style keywords to recognize (built-ins when omitted)

    Returns:
        List of Token objects

    Examples:
        >>> parse("{cwd} $ ")
        [ComponentRef(name=<ComponentName.CWD: 'cwd'>, options={}), Static(text=' $ ')]
    """
    return TemplateParser(styles).parse(template)
