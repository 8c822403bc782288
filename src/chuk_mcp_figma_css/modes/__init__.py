"""
Mode handling - classification of mode collections and override merging.
"""

from chuk_mcp_figma_css.modes.classifier import ModeClassifier
from chuk_mcp_figma_css.modes.merge import (
    ModeMerger,
    ResolutionPass,
    color_scheme,
    diff_declarations,
    mode_slug,
    selector_specificity,
)

__all__ = [
    "ModeClassifier",
    "ModeMerger",
    "ResolutionPass",
    "color_scheme",
    "diff_declarations",
    "mode_slug",
    "selector_specificity",
]
