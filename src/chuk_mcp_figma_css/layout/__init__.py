"""
Layout resolution - auto layout to flexbox, and absolute positioning.
"""

from chuk_mcp_figma_css.layout.axis import AxisResolver, ResolvedDimension, primary_dimension
from chuk_mcp_figma_css.layout.container import container_declarations, has_absolute_children
from chuk_mcp_figma_css.layout.positioning import positioning_declarations

__all__ = [
    "AxisResolver",
    "ResolvedDimension",
    "container_declarations",
    "has_absolute_children",
    "positioning_declarations",
    "primary_dimension",
]
