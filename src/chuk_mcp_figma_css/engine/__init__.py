"""
Style resolution engine - design tree in, layer-tagged declarations out.
"""

from chuk_mcp_figma_css.engine.resolver import (
    ResolutionResult,
    StyleEngine,
    TraversalContext,
    text_pairs,
    visual_pairs,
)

__all__ = [
    "ResolutionResult",
    "StyleEngine",
    "TraversalContext",
    "text_pairs",
    "visual_pairs",
]
