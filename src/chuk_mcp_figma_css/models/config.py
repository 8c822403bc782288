"""
Engine configuration and mode classification rules.

Both are loaded from YAML by the config loader; the defaults here match
the shipped library files so the engine works without any files at all.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator

from chuk_mcp_figma_css.constants import (
    DEFAULT_BREAKPOINT_THRESHOLDS,
    ModeClassification,
    SpacingTokenPolicy,
)


class EngineConfig(BaseModel):
    """Per-deployment engine settings."""

    spacing_token_policy: SpacingTokenPolicy = Field(
        default=SpacingTokenPolicy.LITERAL,
        description="Whether token-matched gap/padding values become token references",
    )
    heading_min_font_size: float = Field(
        default=28.0,
        gt=0,
        description="Text at or above this size is treated as a heading",
    )
    emit_token_definitions: bool = Field(
        default=True,
        description="Emit custom property definitions for local tokens",
    )
    theme_attribute: str = Field(
        default="data-theme",
        description="Attribute used by manual theme selectors",
    )
    root_selector: str = Field(default=":root", description="Scope of token definitions")

    model_config = {"frozen": True}


class ModeRule(BaseModel):
    """One row of the mode classification table."""

    classification: ModeClassification
    keywords: list[str] = Field(
        default_factory=list, description="Case-insensitive substrings of mode names"
    )
    patterns: list[str] = Field(default_factory=list, description="Regular expressions on mode names")

    model_config = {"frozen": True}

    @field_validator("keywords")
    @classmethod
    def lower_keywords(cls, v: list[str]) -> list[str]:
        return [k.lower() for k in v]

    @field_validator("patterns")
    @classmethod
    def check_patterns(cls, v: list[str]) -> list[str]:
        """Reject patterns that do not compile."""
        for pattern in v:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Invalid pattern {pattern!r}: {e}") from e
        return v

    def matches(self, mode_name: str) -> bool:
        """Check whether a mode name matches this rule."""
        lowered = mode_name.lower()
        if any(keyword in lowered for keyword in self.keywords):
            return True
        return any(re.search(pattern, lowered) for pattern in self.patterns)


def _default_rules() -> list[ModeRule]:
    return [
        ModeRule(classification=ModeClassification.THEME, keywords=["light", "dark", "theme"]),
        ModeRule(
            classification=ModeClassification.BREAKPOINT,
            keywords=["mobile", "tablet", "desktop"],
            patterns=[r"^\d+\s*(px)?$", r"\d+\s*px"],
        ),
    ]


class ModeRuleTable(BaseModel):
    """
    Ordered (predicate, result) table for mode classification.

    Rules are evaluated first-match-wins, so theme rules come before
    breakpoint rules: "Dark Desktop" is a theme.
    """

    rules: list[ModeRule] = Field(default_factory=_default_rules)
    breakpoints: dict[str, int] = Field(
        default_factory=lambda: dict(DEFAULT_BREAKPOINT_THRESHOLDS),
        description="Named breakpoint thresholds (px)",
    )
    pixel_pattern: str = Field(
        default=r"(?<![\d.])(\d+)\s*(?:px)?(?![\d.])",
        description="Extracts a pixel threshold from a mode name",
    )
    theme_default_keyword: str = Field(default="light")

    model_config = {"frozen": True}

    @field_validator("breakpoints")
    @classmethod
    def lower_breakpoints(cls, v: dict[str, int]) -> dict[str, int]:
        return {name.lower(): threshold for name, threshold in v.items()}

    def classify_name(self, mode_name: str) -> ModeClassification | None:
        """Classification of the first rule matching a single mode name."""
        for rule in self.rules:
            if rule.matches(mode_name):
                return rule.classification
        return None

    def threshold_for(self, mode_name: str) -> int | None:
        """
        Pixel threshold for a breakpoint mode.

        A number in the name wins; otherwise named breakpoints are looked up.
        """
        match = re.search(self.pixel_pattern, mode_name)
        if match:
            return int(match.group(1))
        lowered = mode_name.lower()
        for name, threshold in self.breakpoints.items():
            if name in lowered:
                return threshold
        return None
