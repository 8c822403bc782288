"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from chuk_mcp_figma_css.models import (
    DesignNode,
    ModeCollection,
    TokenReference,
)


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def library_path() -> Path:
    """Path to the built-in config library."""
    return Path(__file__).parent.parent / "src" / "chuk_mcp_figma_css" / "config" / "library"


@pytest.fixture
def row_tree() -> DesignNode:
    """
    A row container with two children.

    A is (fill, fixed), B is (hug, fill).
    """
    return DesignNode.model_validate(
        {
            "id": "row",
            "kind": "container",
            "width": 600,
            "height": 80,
            "layout": {"axis": "row", "gap": 16},
            "children": [
                {
                    "id": "a",
                    "kind": "container",
                    "width": 200,
                    "height": 40,
                    "sizing": {"horizontal": "fill", "vertical": "fixed"},
                },
                {
                    "id": "b",
                    "kind": "container",
                    "width": 120,
                    "height": 80,
                    "sizing": {"horizontal": "hug", "vertical": "fill"},
                },
            ],
        }
    )


@pytest.fixture
def theme_tokens() -> list[TokenReference]:
    """Local theme tokens plus one external library token."""
    return [
        TokenReference(
            name="color/surface",
            collection="Theme",
            category="color",
            default_mode="Light",
            modes={"Light": "#ffffff", "Dark": "#111111"},
        ),
        TokenReference(
            name="color/text",
            collection="Theme",
            category="color",
            default_mode="Light",
            modes={"Light": "#111111", "Dark": "#f5f5f5"},
        ),
        TokenReference(name="spacing/md", value="16px", category="spacing"),
        TokenReference(name="radius/card", value="12px", category="radius"),
        TokenReference(
            name="brand/primary",
            value="#0055ff",
            origin="external",
            category="color",
        ),
    ]


@pytest.fixture
def theme_collection() -> ModeCollection:
    return ModeCollection(name="Theme", modes=["Light", "Dark"])


@pytest.fixture
def card_tree() -> DesignNode:
    """A column card with a heading, body text and a button."""
    return DesignNode.model_validate(
        {
            "id": "card",
            "name": "Card",
            "kind": "container",
            "width": 360,
            "height": 240,
            "layout": {
                "axis": "column",
                "gap": 16,
                "padding": {"top": 24, "right": 24, "bottom": 24, "left": 24},
            },
            "visual": {"fill": "#FFFFFF", "corner_radius": 12},
            "bindings": {"color": "color/text"},
            "children": [
                {
                    "id": "title",
                    "name": "Title",
                    "kind": "text",
                    "width": 312,
                    "height": 40,
                    "sizing": {"horizontal": "fill", "vertical": "hug"},
                    "text": {"content": "Hello", "font_size": 32, "font_weight": 700},
                },
                {
                    "id": "body",
                    "name": "Body",
                    "kind": "text",
                    "width": 312,
                    "height": 60,
                    "sizing": {"horizontal": "fill", "vertical": "hug"},
                    "text": {"content": "Body copy", "font_size": 16, "color": "#111111"},
                },
                {
                    "id": "button",
                    "name": "Button",
                    "kind": "container",
                    "width": 120,
                    "height": 40,
                    "layout": {"axis": "row", "primary_align": "center", "counter_align": "center"},
                    "sizing": {"horizontal": "hug", "vertical": "fixed"},
                    "visual": {"fill": "#0055ff"},
                },
            ],
        }
    )

