"""Evaluation-time fragments.

A fragment is the rendered result of one token. A component that has
nothing to show yields ``None`` in place of a fragment.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Text:
    """Literal template text."""

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class ColorStart:
    """Escape sequence that starts a style."""

    code: str

    def __str__(self) -> str:
        return self.code


@dataclass(frozen=True)
class ColorReset:
    """Escape sequence that resets styling."""

    code: str

    def __str__(self) -> str:
        return self.code


@dataclass(frozen=True)
class Value:
    """Output computed by a component."""

    text: str

    def __str__(self) -> str:
        return self.text


Fragment = Text | ColorStart | ColorReset | Value
