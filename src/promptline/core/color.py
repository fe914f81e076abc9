"""ANSI color parsing and the style keyword table."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from promptline.core.errors import EvaluationError

# Standard ANSI color names
COLORS = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
}

# Bright color variants
BRIGHT_COLORS = {
    "bright black": 8,
    "bright red": 9,
    "bright green": 10,
    "bright yellow": 11,
    "bright blue": 12,
    "bright magenta": 13,
    "bright cyan": 14,
    "bright white": 15,
    # Aliases
    "gray": 8,
    "grey": 8,
}

# Text attributes
ATTRIBUTES = {
    "bold": 1,
    "dim": 2,
    "italic": 3,
    "underline": 4,
    "blink": 5,
    "reverse": 7,
    "inverse": 7,
    "hidden": 8,
    "strikethrough": 9,
}

RESET_STYLE = "reset"
RESET_SEQUENCE = "\033[0m"

# Largest index of the 256-color palette
PALETTE_MAX = 255


@dataclass
class ParsedColor:
    """Parsed color specification.

    Attributes:
        fg: Foreground color (color name, number, or None)
        bg: Background color (color name, number, or None)
        bold: Bold attribute
        dim: Dim attribute
        italic: Italic attribute
        underline: Underline attribute
        blink: Blink attribute
        reverse: Reverse/inverse attribute
        hidden: Hidden attribute
        strikethrough: Strikethrough attribute
    """

    fg: str | int | None = None
    bg: str | int | None = None
    bold: bool | None = None
    dim: bool | None = None
    italic: bool | None = None
    underline: bool | None = None
    blink: bool | None = None
    reverse: bool | None = None
    hidden: bool | None = None
    strikethrough: bool | None = None

    def to_ansi(self) -> str:
        """Convert to ANSI escape sequence."""
        codes: list[str] = []

        # Attributes
        for name, code in ATTRIBUTES.items():
            if name != "inverse" and getattr(self, name):
                codes.append(str(code))

        # Foreground color
        if self.fg is not None:
            fg_code = self._color_to_code(self.fg, foreground=True)
            if fg_code is not None:
                codes.append(fg_code)

        # Background color
        if self.bg is not None:
            bg_code = self._color_to_code(self.bg, foreground=False)
            if bg_code is not None:
                codes.append(bg_code)

        if not codes:
            return ""

        return f"\033[{';'.join(codes)}m"

    def _color_to_code(self, color: str | int, foreground: bool) -> str | None:
        """Convert color to an ANSI parameter, ``38;5;N`` style past the first 16."""
        base = 30 if foreground else 40
        bright_base = 90 if foreground else 100

        if isinstance(color, int):
            if 0 <= color <= 7:
                return str(base + color)
            if 8 <= color <= 15:
                return str(bright_base + (color - 8))
            if 16 <= color <= PALETTE_MAX:
                return f"{38 if foreground else 48};5;{color}"
            return None

        color_lower = color.lower()

        if color_lower in COLORS:
            return str(base + COLORS[color_lower])

        if color_lower in BRIGHT_COLORS:
            return str(bright_base + (BRIGHT_COLORS[color_lower] - 8))

        if color_lower.isdigit():
            return self._color_to_code(int(color_lower), foreground)

        return None


class ColorParser:
    """Parser for color specification strings."""

    def parse(self, color_spec: str) -> ParsedColor:
        """Parse a color specification string.

        Args:
            color_spec: Color string like "bold red on white"

        Returns:
            ParsedColor object

        Raises:
            ValueError: If a word is neither a color nor an attribute

        Examples:
            >>> color = ColorParser().parse("bold red on white")
            >>> (color.fg, color.bg, color.bold)
            ('red', 'white', True)
        """
        result = ParsedColor()
        parts = color_spec.lower().replace("_", " ").split()

        i = 0
        while i < len(parts):
            part = parts[i]

            if part in ATTRIBUTES:
                setattr(result, part if part != "inverse" else "reverse", True)
                i += 1
                continue

            # Everything after "on" up to the next attribute is the background
            if part == "on" and i + 1 < len(parts):
                bg_parts: list[str] = []
                i += 1
                while i < len(parts) and parts[i] not in ATTRIBUTES and parts[i] != "on":
                    bg_parts.append(parts[i])
                    i += 1
                result.bg = self._color_name(" ".join(bg_parts), color_spec)
                continue

            if part == "bright" and i + 1 < len(parts) and parts[i + 1] in COLORS:
                if result.fg is None:
                    result.fg = f"bright {parts[i + 1]}"
                i += 2
                continue

            if result.fg is None:
                result.fg = self._color_name(part, color_spec)
            i += 1

        return result

    def _color_name(self, name: str, color_spec: str) -> str:
        if name in COLORS or name in BRIGHT_COLORS:
            return name
        if name.isascii() and name.isdigit() and int(name) <= PALETTE_MAX:
            return name
        raise ValueError(f"invalid color '{name}' in '{color_spec}'")


def parse_color(color_spec: str) -> ParsedColor:
    """Parse a color specification string.

    Args:
        color_spec: Color string like "bold red on white"

    Returns:
        ParsedColor object
    """
    return ColorParser().parse(color_spec)


def builtin_styles() -> dict[str, ParsedColor]:
    """Style keywords available in every template.

    Each color and attribute name is a keyword, with ``bright_<color>``
    spelled with an underscore so it is a valid identifier.
    """
    styles: dict[str, ParsedColor] = {}
    for name in COLORS:
        styles[name] = ParsedColor(fg=name)
        styles[f"bright_{name}"] = ParsedColor(fg=f"bright {name}")
    for alias in ("gray", "grey"):
        styles[alias] = ParsedColor(fg=alias)
    for name in ATTRIBUTES:
        if name not in ("inverse", "hidden"):
            styles[name] = ParsedColor(**{name: True})
    return styles


class StyleTable:
    """Resolves style keywords to escape sequences.

    The table always knows ``reset`` plus the built-in keywords; user
    styles from the configuration override built-ins of the same name.
    """

    def __init__(self, custom: Mapping[str, str] | None = None) -> None:
        self._styles = builtin_styles()
        parser = ColorParser()
        for name, spec in (custom or {}).items():
            self._styles[name] = parser.parse(spec)

    def __contains__(self, name: object) -> bool:
        return name == RESET_STYLE or name in self._styles

    def sequence(self, name: str) -> str:
        """Raw ANSI escape sequence for a style keyword.

        Raises:
            EvaluationError: If the keyword is unknown, e.g. when the
                template was parsed against a different table
        """
        if name == RESET_STYLE:
            return RESET_SEQUENCE
        try:
            style = self._styles[name]
        except KeyError:
            raise EvaluationError(f"unknown style: {name}") from None
        return style.to_ansi()
