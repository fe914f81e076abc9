"""Pydantic models for configuration schema."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from promptline.config.defaults import DEFAULT_TEMPLATE
from promptline.core.color import RESET_STYLE, StyleTable, parse_color
from promptline.core.parser import is_identifier
from promptline.core.tokens import ENV_CONDITION_PREFIX, RESERVED_KEYWORDS, ComponentName


class Config(BaseModel):
    """Top-level configuration."""

    template: str = Field(default=DEFAULT_TEMPLATE, description="Prompt template")
    color: bool = Field(default=True, description="Enable/disable colors")
    git_timeout: float = Field(default=2.0, gt=0, description="Seconds to wait for each git command")
    styles: dict[str, str] = Field(
        default_factory=dict,
        description="Style keyword to color spec mapping, e.g. {'warn': 'bold yellow on red'}",
    )

    @field_validator("styles", mode="before")
    @classmethod
    def parse_styles(cls, v: dict[str, str] | None) -> dict[str, str]:
        """Check style names are usable as template keywords and specs parse."""
        if v is None:
            return {}
        component_names = {name.value for name in ComponentName}
        result = {}
        for name, spec in v.items():
            name = str(name)
            if not is_identifier(name):
                raise ValueError(f"style name '{name}' must contain only letters and underscores")
            if (
                name == RESET_STYLE
                or name in RESERVED_KEYWORDS
                or name in component_names
                or name.startswith(("if", ENV_CONDITION_PREFIX))
            ):
                raise ValueError(f"style name '{name}' is reserved")
            parse_color(str(spec))
            result[name] = str(spec)
        return result

    def style_table(self) -> StyleTable:
        """Style keywords for this configuration (built-ins plus custom)."""
        return StyleTable(self.styles)
