"""
Token tools - MCP tools for token sets and mode collections.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_figma_css.config import ConfigLoader
from chuk_mcp_figma_css.constants import ErrorMessages
from chuk_mcp_figma_css.diagnostics import Diagnostics
from chuk_mcp_figma_css.models.tokens import ModeCollection
from chuk_mcp_figma_css.modes import ModeClassifier, ModeMerger
from chuk_mcp_figma_css.tokens import TokenCache, TokenLoader

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_token_tools(
    mcp: ChukMCPServer,
    token_loader: TokenLoader,
    config_loader: ConfigLoader,
) -> dict[str, Any]:
    """
    Register token and mode tools with the MCP server.

    Args:
        mcp: The MCP server instance
        token_loader: Loader for token sets
        config_loader: Loader for mode rules

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def figma_list_token_sets() -> str:
        """
        List token sets in the tokens directory.

        Returns:
            JSON string with token set summaries

        Example:
            figma_list_token_sets()
        """
        try:
            token_sets = token_loader.list_token_sets()
            return json.dumps(
                {
                    "status": "success",
                    "token_sets": [
                        {
                            "name": m.name,
                            "description": m.description,
                            "token_count": m.token_count,
                            "collections": m.collections,
                        }
                        for m in token_sets
                    ],
                    "count": len(token_sets),
                }
            )
        except Exception as e:
            logger.exception("Failed to list token sets")
            return json.dumps({"status": "error", "message": str(e)})

    tools["figma_list_token_sets"] = figma_list_token_sets

    @mcp.tool  # type: ignore[arg-type]
    async def figma_describe_token_set(name: str) -> str:
        """
        Get the tokens of a token set with their resolved default values.

        Args:
            name: Token set name

        Returns:
            JSON string with collections and tokens

        Example:
            figma_describe_token_set(name="brand")
        """
        try:
            token_set = token_loader.get_token_set(name)
            if token_set is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.TOKEN_SET_NOT_FOUND.format(name=name)}
                )

            diagnostics = Diagnostics()
            classifier = ModeClassifier(config_loader.get_mode_rules())
            classified = [classifier.classify(c, diagnostics) for c in token_set.collections if c.modes]
            table = TokenCache(token_set.tokens).default_table(classified)

            return json.dumps(
                {
                    "status": "success",
                    "token_set": {
                        "name": token_set.name,
                        "description": token_set.description,
                        "collections": [c.model_dump(mode="json") for c in classified],
                        "tokens": [
                            {
                                "name": token.name,
                                "variable": token.css_variable,
                                "value": table.resolve(token.name),
                                "origin": token.origin.value,
                                "category": token.category.value if token.category else None,
                                "modes": token.modes,
                                "alias_of": token.alias_of,
                            }
                            for token in table.tokens
                        ],
                        "unresolved_aliases": [issue.token for issue in table.alias_issues],
                    },
                    "diagnostics": [i.to_dict() for i in diagnostics.issues],
                }
            )
        except Exception as e:
            logger.exception("Failed to describe token set")
            return json.dumps({"status": "error", "message": str(e)})

    tools["figma_describe_token_set"] = figma_describe_token_set

    @mcp.tool  # type: ignore[arg-type]
    async def figma_save_token_set(token_set: str) -> str:
        """
        Save a token set into the tokens directory.

        Args:
            token_set: JSON token set (name, collections, tokens)

        Returns:
            JSON string with the saved path

        Example:
            figma_save_token_set(token_set='{"name": "brand", "tokens": {"color/bg": "#fff"}}')
        """
        try:
            parsed = token_loader.parse(json.loads(token_set))
            path = token_loader.save_token_set(parsed)
            return json.dumps(
                {
                    "status": "success",
                    "name": parsed.name,
                    "path": str(path),
                    "token_count": len(parsed.tokens),
                }
            )
        except Exception as e:
            logger.exception("Failed to save token set")
            return json.dumps({"status": "error", "message": str(e)})

    tools["figma_save_token_set"] = figma_save_token_set

    @mcp.tool  # type: ignore[arg-type]
    async def figma_classify_modes(modes: list[str], name: str = "modes") -> str:
        """
        Classify a mode collection as breakpoint, theme or unknown.

        Also reports the default mode and the selectors each non-default
        mode's overrides would be wrapped in.

        Args:
            modes: Mode names in declared order
            name: Collection name

        Returns:
            JSON string with classification, default mode and selectors

        Example:
            figma_classify_modes(modes=["Mobile", "Tablet", "Desktop"], name="Breakpoints")
        """
        try:
            diagnostics = Diagnostics()
            classifier = ModeClassifier(config_loader.get_mode_rules())
            merger = ModeMerger(config_loader.get_engine_config())
            classified = classifier.classify(ModeCollection(name=name, modes=modes), diagnostics)
            return json.dumps(
                {
                    "status": "success",
                    "collection": classified.model_dump(mode="json"),
                    "overrides": [
                        {
                            "mode": mode.name,
                            "selectors": [
                                s.model_dump(mode="json")
                                for s in merger.selectors_for(classified, mode)
                            ],
                        }
                        for mode in classified.non_default_modes()
                    ],
                    "diagnostics": [i.to_dict() for i in diagnostics.issues],
                }
            )
        except Exception as e:
            logger.exception("Failed to classify modes")
            return json.dumps({"status": "error", "message": str(e)})

    tools["figma_classify_modes"] = figma_classify_modes

    return tools
