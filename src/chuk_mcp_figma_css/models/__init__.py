"""
Pydantic models for the style resolution engine.

This module provides:
- DesignNode: Normalized design tree node (input)
- TokenReference / ModeCollection / TokenSet: Token store snapshot (input)
- StyleDeclaration / ResolvedNode / ModeOverride: Layer-tagged output
- EngineConfig / ModeRuleTable: Configuration
"""

from chuk_mcp_figma_css.models.config import EngineConfig, ModeRule, ModeRuleTable
from chuk_mcp_figma_css.models.declaration import (
    ModeOverride,
    ModeSelector,
    NodeOverride,
    ResolvedNode,
    ResolvedRun,
    StyleDeclaration,
)
from chuk_mcp_figma_css.models.node import (
    DesignNode,
    LayoutDescriptor,
    Padding,
    PinConstraints,
    Shadow,
    SizingDescriptor,
    Stroke,
    TextDescriptor,
    TextRun,
    VisualDescriptor,
)
from chuk_mcp_figma_css.models.tokens import (
    ClassifiedMode,
    ClassifiedModeCollection,
    ModeCollection,
    TokenReference,
    TokenSet,
    css_variable_name,
)

__all__ = [
    "ClassifiedMode",
    "ClassifiedModeCollection",
    "DesignNode",
    "EngineConfig",
    "LayoutDescriptor",
    "ModeCollection",
    "ModeOverride",
    "ModeRule",
    "ModeRuleTable",
    "ModeSelector",
    "NodeOverride",
    "Padding",
    "PinConstraints",
    "ResolvedNode",
    "ResolvedRun",
    "Shadow",
    "SizingDescriptor",
    "StyleDeclaration",
    "Stroke",
    "TextDescriptor",
    "TextRun",
    "TokenReference",
    "TokenSet",
    "VisualDescriptor",
    "css_variable_name",
]
