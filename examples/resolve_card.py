#!/usr/bin/env python3
"""
Example: Resolving a design tree into layered CSS declarations.

This loads the sample token set, resolves a small card, and prints the
declarations per layer followed by the theme and breakpoint overrides.

Usage:
    python examples/resolve_card.py
"""

from pathlib import Path

from chuk_mcp_figma_css.config import ConfigLoader
from chuk_mcp_figma_css.constants import StyleLayer
from chuk_mcp_figma_css.engine import StyleEngine
from chuk_mcp_figma_css.models import DesignNode
from chuk_mcp_figma_css.tokens import TokenLoader

CARD = {
    "id": "card",
    "name": "Card",
    "kind": "container",
    "width": 360,
    "height": 220,
    "layout": {"axis": "column", "gap": 16, "padding": {"top": 24, "right": 24, "bottom": 24, "left": 24}},
    "visual": {"fill": "#ffffff", "corner_radius": 12},
    "bindings": {"padding": "spacing/page"},
    "children": [
        {
            "id": "title",
            "name": "Title",
            "kind": "text",
            "width": 312,
            "height": 40,
            "sizing": {"horizontal": "fill", "vertical": "hug"},
            "text": {"content": "Welcome", "font_size": 32, "font_weight": 700, "color": "#1a1a1a"},
        },
        {
            "id": "actions",
            "name": "Actions",
            "kind": "container",
            "width": 312,
            "height": 40,
            "layout": {"axis": "row", "gap": 8, "primary_align": "end"},
            "sizing": {"horizontal": "fill", "vertical": "hug"},
            "children": [
                {
                    "id": "cancel",
                    "kind": "container",
                    "width": 96,
                    "height": 40,
                    "sizing": {"horizontal": "fill", "vertical": "fill", "max_height": 48},
                },
                {
                    "id": "confirm",
                    "kind": "container",
                    "width": 96,
                    "height": 40,
                    "sizing": {"horizontal": "fill", "vertical": "fixed"},
                    "visual": {"fill": "#0055ff"},
                },
            ],
        },
    ],
}


def main() -> None:
    """Resolve the sample card and print the result."""
    print("CHUK Figma CSS Resolution Demo")
    print("=" * 40)
    print()

    token_loader = TokenLoader(Path(__file__).parent / "tokens")
    token_set = token_loader.get_token_set("brand")
    if not token_set:
        print("Failed to load token set")
        return

    config_loader = ConfigLoader()
    engine = StyleEngine(config_loader.get_engine_config(), config_loader.get_mode_rules())
    result = engine.resolve_token_set(DesignNode.model_validate(CARD), token_set)

    print("Collections:")
    for collection in result.collections:
        print(f"  {collection.name}: {collection.classification.value} (default {collection.default_mode})")
    print()

    print("Token definitions:")
    for definition in result.token_definitions:
        print(f"  {definition}")
    print()

    for node in result.nodes:
        print(f"{'  ' * node.depth}<{node.tag}> {node.name or node.node_id}")
        for layer in StyleLayer:
            declarations = node.by_layer(layer)
            if declarations:
                joined = "; ".join(str(d) for d in declarations)
                print(f"{'  ' * node.depth}  [{layer.value}] {joined}")
    print()

    print("Overrides:")
    for override in result.overrides:
        wrappers = ", ".join(s.media or s.selector for s in override.selectors)
        print(f"  {override.collection}/{override.mode} -> {wrappers}")
        for definition in override.token_definitions:
            print(f"    {definition}")
        for node_override in override.nodes:
            joined = "; ".join(str(d) for d in node_override.declarations)
            print(f"    #{node_override.node_id}: {joined}")
    print()

    if result.diagnostics.issues:
        print("Diagnostics:")
        print(result.diagnostics)
        print()

    print("Done! Hand the result to a renderer to produce utility classes and rules.")


if __name__ == "__main__":
    main()
