"""
Resolution tools - MCP tools for resolving design trees into declarations.

Tools for resolving a whole tree, a single child's axis sizing, and a
single property placement.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_figma_css.config import ENGINE_CONFIG_FILE, MODE_RULES_FILE, ConfigLoader
from chuk_mcp_figma_css.constants import AxisMode, ErrorMessages, SizingMode
from chuk_mcp_figma_css.engine import StyleEngine
from chuk_mcp_figma_css.models.node import DesignNode, LayoutDescriptor, SizingDescriptor
from chuk_mcp_figma_css.models.tokens import ModeCollection, TokenReference
from chuk_mcp_figma_css.tokens import TokenCache, TokenLoader

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _load_json(value: str | None, default: Any) -> Any:
    if value is None or value == "":
        return default
    return json.loads(value)


def register_resolution_tools(
    mcp: ChukMCPServer,
    token_loader: TokenLoader,
    config_loader: ConfigLoader,
) -> dict[str, Any]:
    """
    Register style resolution tools with the MCP server.

    Args:
        mcp: The MCP server instance
        token_loader: Loader for token sets
        config_loader: Loader for engine settings and mode rules

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    def build_engine() -> StyleEngine:
        return StyleEngine(config_loader.get_engine_config(), config_loader.get_mode_rules())

    def gather_tokens(
        token_set: str | None,
        tokens: str | None,
        collections: str | None,
    ) -> tuple[list[TokenReference], list[ModeCollection]]:
        token_list: list[TokenReference] = []
        collection_list: list[ModeCollection] = []
        if token_set:
            loaded = token_loader.get_token_set(token_set)
            if loaded is None:
                raise ValueError(ErrorMessages.TOKEN_SET_NOT_FOUND.format(name=token_set))
            token_list.extend(loaded.tokens)
            collection_list.extend(loaded.collections)
        token_list.extend(TokenReference.model_validate(t) for t in _load_json(tokens, []))
        collection_list.extend(
            ModeCollection.model_validate(c) for c in _load_json(collections, [])
        )
        return token_list, collection_list

    @mcp.tool  # type: ignore[arg-type]
    async def figma_resolve_styles(
        tree: str,
        token_set: str | None = None,
        tokens: str | None = None,
        collections: str | None = None,
    ) -> str:
        """
        Resolve a design node tree into layer-tagged style declarations.

        Each node gets structural-utility, token-reference and component-rule
        declarations; non-default modes produce override sets.

        Args:
            tree: JSON design node tree (id, kind, layout, sizing, visual, text, children)
            token_set: Optional name of a token set in the tokens directory
            tokens: Optional JSON list of tokens
            collections: Optional JSON list of mode collections

        Returns:
            JSON string with resolved nodes, token definitions, overrides and diagnostics

        Example:
            figma_resolve_styles(tree='{"id": "1", "kind": "container"}', token_set="brand")
        """
        try:
            root = DesignNode.model_validate_json(tree)
            token_list, collection_list = gather_tokens(token_set, tokens, collections)
            result = build_engine().resolve(root, token_list, collection_list)
            return json.dumps({"status": "success", **result.to_dict()})
        except Exception as e:
            logger.exception("Failed to resolve styles")
            return json.dumps({"status": "error", "message": str(e)})

    tools["figma_resolve_styles"] = figma_resolve_styles

    @mcp.tool  # type: ignore[arg-type]
    async def figma_resolve_axis(
        parent_axis: str,
        horizontal: str,
        vertical: str,
        width: float = 0.0,
        height: float = 0.0,
        max_width: float | None = None,
        max_height: float | None = None,
    ) -> str:
        """
        Resolve a child's sizing against its parent's layout axis.

        Args:
            parent_axis: Parent layout axis ('row', 'column')
            horizontal: Horizontal sizing ('fixed', 'fill', 'hug')
            vertical: Vertical sizing ('fixed', 'fill', 'hug')
            width: Child width in px (used for fixed sizing)
            height: Child height in px (used for fixed sizing)
            max_width: Optional max width constraint
            max_height: Optional max height constraint

        Returns:
            JSON string with axis roles and declarations

        Example:
            figma_resolve_axis(parent_axis="row", horizontal="fill", vertical="fixed", height=40)
        """
        try:
            engine = build_engine()
            layout = LayoutDescriptor(axis=AxisMode(parent_axis))
            sizing = SizingDescriptor(
                horizontal=SizingMode(horizontal),
                vertical=SizingMode(vertical),
                max_width=max_width,
                max_height=max_height,
            )
            child = DesignNode(id="child", kind="container", width=width, height=height, sizing=sizing)
            resolved = engine.axis_resolver.resolve(layout, sizing, child.id)
            declarations = engine.axis_resolver.declarations(child, layout)
            return json.dumps(
                {
                    "status": "success",
                    "dimensions": [
                        {
                            "dimension": d.dimension.value,
                            "role": d.role.value,
                            "mode": d.mode.value,
                        }
                        for d in resolved
                    ],
                    "declarations": [{"property": p, "value": v} for p, v in declarations],
                }
            )
        except Exception as e:
            logger.exception("Failed to resolve axis")
            return json.dumps({"status": "error", "message": str(e)})

    tools["figma_resolve_axis"] = figma_resolve_axis

    @mcp.tool  # type: ignore[arg-type]
    async def figma_classify_property(
        css_property: str,
        value: str,
        token_set: str | None = None,
        tokens: str | None = None,
    ) -> str:
        """
        Decide which output layer a single property/value pair belongs to.

        Args:
            css_property: CSS property name (e.g. 'background-color', 'gap')
            value: Literal value (e.g. '#ffffff', '16px')
            token_set: Optional token set name used for value matching
            tokens: Optional JSON list of tokens used for value matching

        Returns:
            JSON string with layer, value and token information

        Example:
            figma_classify_property(css_property="background-color", value="#ffffff", token_set="brand")
        """
        try:
            engine = build_engine()
            token_list, collection_list = gather_tokens(token_set, tokens, None)
            classified = [engine.mode_classifier.classify(c) for c in collection_list if c.modes]
            table = TokenCache(token_list).default_table(classified)
            placement = engine.classifier.classify(css_property, value, table)
            return json.dumps(
                {
                    "status": "success",
                    "property": css_property,
                    "layer": placement.layer.value,
                    "value": placement.value,
                    "token": placement.token,
                    "fallback": placement.fallback,
                    "supported": placement.supported,
                }
            )
        except Exception as e:
            logger.exception("Failed to classify property")
            return json.dumps({"status": "error", "message": str(e)})

    tools["figma_classify_property"] = figma_classify_property

    @mcp.tool  # type: ignore[arg-type]
    async def figma_describe_config() -> str:
        """
        Describe the active engine settings and mode rules.

        Returns:
            JSON string with settings, rules and the files they come from

        Example:
            figma_describe_config()
        """
        try:
            config = config_loader.get_engine_config()
            rules = config_loader.get_mode_rules()
            engine_source = config_loader.source_of(ENGINE_CONFIG_FILE)
            rules_source = config_loader.source_of(MODE_RULES_FILE)
            return json.dumps(
                {
                    "status": "success",
                    "config": config.model_dump(mode="json"),
                    "mode_rules": rules.model_dump(mode="json"),
                    "sources": {
                        "engine": str(engine_source) if engine_source else None,
                        "mode_rules": str(rules_source) if rules_source else None,
                    },
                }
            )
        except Exception as e:
            logger.exception("Failed to describe config")
            return json.dumps({"status": "error", "message": str(e)})

    tools["figma_describe_config"] = figma_describe_config

    return tools
