"""
Token lookup and substitution.

Tables are immutable per-mode snapshots; the cache is an explicit per-run
object; the loader is the pre-fetch boundary for token files.
"""

from chuk_mcp_figma_css.tokens.loader import TokenLoader, TokenSetMetadata
from chuk_mcp_figma_css.tokens.table import (
    AliasIssue,
    TokenCache,
    TokenTable,
    default_selection,
)
from chuk_mcp_figma_css.tokens.values import normalize_value, padding_shorthand, px

__all__ = [
    "AliasIssue",
    "TokenCache",
    "TokenLoader",
    "TokenSetMetadata",
    "TokenTable",
    "default_selection",
    "normalize_value",
    "padding_shorthand",
    "px",
]
