"""Render shell prompts from a small template language."""

__version__ = "0.1.0"
