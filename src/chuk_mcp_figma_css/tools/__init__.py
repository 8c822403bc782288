"""
MCP tool implementations.

Tools are organized by domain:
- resolution - Tree, axis and property resolution
- tokens - Token sets and mode collections
"""

from chuk_mcp_figma_css.tools.resolution import register_resolution_tools
from chuk_mcp_figma_css.tools.tokens import register_token_tools

__all__ = [
    "register_resolution_tools",
    "register_token_tools",
]
