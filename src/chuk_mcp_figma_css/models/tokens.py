"""
Token and mode models.

Tokens are named indirections to literal design values. A token may vary
per mode of its collection (e.g. Light/Dark, Mobile/Desktop).
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from chuk_mcp_figma_css.constants import ModeClassification, TokenCategory, TokenOrigin

_NON_IDENT = re.compile(r"[^a-z0-9]+")


def css_variable_name(name: str) -> str:
    """Convert a token path like ``color/surface.primary`` to ``--color-surface-primary``."""
    slug = _NON_IDENT.sub("-", name.lower()).strip("-")
    return f"--{slug}"


class TokenReference(BaseModel):
    """
    A named design value.

    ``value`` is the literal at the token's default mode. When the token
    has more than one mode, ``default_mode`` must name one of them.
    """

    name: str = Field(..., description="Token path (e.g. 'color/surface' or 'spacing.md')")
    value: str = Field("", description="Resolved literal value at the default mode")
    origin: TokenOrigin = Field(TokenOrigin.LOCAL, description="Local to the project or external library")
    modes: dict[str, str] = Field(default_factory=dict, description="Mode name -> literal")
    default_mode: str | None = Field(None, description="Mode whose value is the default")
    collection: str | None = Field(None, description="Mode collection the token belongs to")
    category: TokenCategory | None = Field(None, description="Value category for matching")
    alias_of: str | None = Field(None, description="Name of the token this one aliases")

    model_config = {"frozen": True}

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Token names must contain at least one identifier character."""
        if not _NON_IDENT.sub("", v.lower()):
            raise ValueError(f"Invalid token name: {v!r}")
        return v

    @model_validator(mode="before")
    @classmethod
    def fill_default_value(cls, data: Any) -> Any:
        """Take ``value`` from the default mode when it is not given."""
        if not isinstance(data, dict):
            return data
        modes = data.get("modes") or {}
        if not data.get("value") and modes:
            default = data.get("default_mode")
            if default in modes:
                data = {**data, "value": modes[default]}
            elif len(modes) == 1:
                data = {**data, "value": next(iter(modes.values()))}
        return data

    @model_validator(mode="after")
    def check_default_mode(self) -> TokenReference:
        """Multi-mode tokens need a default mode that exists."""
        if len(self.modes) > 1:
            if self.default_mode is None:
                raise ValueError(f"Token '{self.name}' has {len(self.modes)} modes but no default_mode")
            if self.default_mode not in self.modes:
                raise ValueError(
                    f"Token '{self.name}' default_mode '{self.default_mode}' is not one of its modes"
                )
        return self

    @property
    def css_variable(self) -> str:
        """Custom property name for this token."""
        return css_variable_name(self.name)

    @property
    def is_external(self) -> bool:
        return self.origin == TokenOrigin.EXTERNAL

    def value_for(self, mode: str | None) -> str:
        """Literal value for a mode, falling back to the default value."""
        if mode is None:
            return self.value
        return self.modes.get(mode, self.value)

    def render_reference(self, fallback: str | None = None) -> str:
        """
        Render the ``var()`` reference for this token.

        External tokens always carry a fallback literal (their own value
        unless one is given). Local tokens never do.
        """
        if self.is_external:
            literal = self.value if fallback is None else fallback
            return f"var({self.css_variable}, {literal})"
        return f"var({self.css_variable})"


class ModeCollection(BaseModel):
    """A named group of modes as declared by the designer."""

    name: str = Field(..., description="Collection name (e.g. 'Theme', 'Breakpoints')")
    modes: list[str] = Field(default_factory=list, description="Mode names in declared order")

    model_config = {"frozen": True}


class ClassifiedMode(BaseModel):
    """A mode after classification."""

    name: str
    threshold: int | None = Field(None, description="Min width in px for breakpoint modes")
    is_default: bool = False

    model_config = {"frozen": True}


class ClassifiedModeCollection(BaseModel):
    """
    A mode collection with its classification and default mode.

    Produced once by the mode classifier and immutable thereafter.
    """

    name: str
    classification: ModeClassification
    default_mode: str
    modes: tuple[ClassifiedMode, ...]

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_single_default(self) -> ClassifiedModeCollection:
        """Exactly one mode is marked default and it matches ``default_mode``."""
        defaults = [m.name for m in self.modes if m.is_default]
        if defaults != [self.default_mode]:
            raise ValueError(f"Collection '{self.name}' must mark exactly one default mode")
        return self

    @property
    def mode_names(self) -> list[str]:
        return [m.name for m in self.modes]

    def non_default_modes(self) -> list[ClassifiedMode]:
        """Non-default modes in output order (ascending threshold for breakpoints)."""
        others = [m for m in self.modes if not m.is_default]
        if self.classification == ModeClassification.BREAKPOINT:
            # Modes without a threshold cannot be wrapped in a min-width query
            return sorted(
                (m for m in others if m.threshold is not None),
                key=lambda m: m.threshold or 0,
            )
        return others

    def get_mode(self, name: str) -> ClassifiedMode | None:
        for mode in self.modes:
            if mode.name == name:
                return mode
        return None


class TokenSet(BaseModel):
    """Tokens plus the mode collections they vary over."""

    name: str = Field("tokens", description="Token set name")
    description: str = ""
    collections: list[ModeCollection] = Field(default_factory=list)
    tokens: list[TokenReference] = Field(default_factory=list)

    model_config = {"frozen": True}

    def get_token(self, name: str) -> TokenReference | None:
        for token in self.tokens:
            if token.name == name:
                return token
        return None
