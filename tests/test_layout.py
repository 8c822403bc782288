"""
Tests for container layout and the positioning path.
"""

from chuk_mcp_figma_css.layout import (
    container_declarations,
    has_absolute_children,
    positioning_declarations,
)
from chuk_mcp_figma_css.models import DesignNode


def container(**layout) -> DesignNode:
    return DesignNode.model_validate(
        {"id": "c", "kind": "container", "width": 400, "height": 300, "layout": layout}
    )


class TestContainerDeclarations:
    """Tests for a container's own flexbox declarations."""

    def test_row_with_gap_and_padding(self):
        """A row becomes a flex row with gap and padding shorthand."""
        node = container(
            axis="row", gap=16, padding={"top": 8, "right": 16, "bottom": 8, "left": 16}
        )
        assert container_declarations(node) == [
            ("display", "flex"),
            ("flex-direction", "row"),
            ("align-items", "flex-start"),
            ("gap", "16px"),
            ("padding", "8px 16px"),
        ]

    def test_column_centered(self):
        """Non-start alignment is written out."""
        pairs = dict(container_declarations(container(axis="column", primary_align="center", counter_align="end")))
        assert pairs["flex-direction"] == "column"
        assert pairs["justify-content"] == "center"
        assert pairs["align-items"] == "flex-end"

    def test_space_between_drops_gap(self):
        """space-between owns the spacing, so no gap is emitted."""
        pairs = dict(container_declarations(container(axis="row", gap=24, primary_align="space-between")))
        assert pairs["justify-content"] == "space-between"
        assert "gap" not in pairs

    def test_wrap_with_counter_gap(self):
        """Wrapping rows split the gap into column-gap and row-gap."""
        pairs = dict(container_declarations(container(axis="row", gap=8, counter_gap=12, wrap=True)))
        assert pairs["flex-wrap"] == "wrap"
        assert pairs["column-gap"] == "8px"
        assert pairs["row-gap"] == "12px"
        assert "gap" not in pairs

    def test_clips_content(self):
        """Clipping frames hide overflow."""
        pairs = dict(container_declarations(container(axis="row", clips_content=True)))
        assert pairs["overflow"] == "hidden"

    def test_uneven_padding(self):
        """Four distinct sides use the full shorthand."""
        node = container(axis="column", padding={"top": 1, "right": 2, "bottom": 3, "left": 4})
        assert dict(container_declarations(node))["padding"] == "1px 2px 3px 4px"

    def test_no_axis_is_positioning_context(self):
        """A frame without auto layout only establishes a positioning context."""
        node = DesignNode.model_validate(
            {
                "id": "frame",
                "kind": "container",
                "children": [{"id": "x", "kind": "vector"}],
            }
        )
        assert has_absolute_children(node)
        assert container_declarations(node) == [("position", "relative")]

    def test_absolute_child_in_auto_layout(self):
        """An absolute child makes an auto layout parent relative."""
        node = DesignNode.model_validate(
            {
                "id": "row",
                "kind": "container",
                "layout": {"axis": "row"},
                "children": [
                    {"id": "badge", "kind": "container", "sizing": {"positioning": "absolute"}},
                ],
            }
        )
        assert ("position", "relative") in container_declarations(node)


class TestPositioning:
    """Tests for absolutely positioned children."""

    def parent(self) -> DesignNode:
        return DesignNode(id="frame", kind="container", width=400, height=300)

    def test_start_constraints(self):
        """Default constraints pin to the top-left."""
        node = DesignNode(id="n", kind="vector", x=10, y=20, width=100, height=50)
        assert positioning_declarations(node, self.parent()) == [
            ("position", "absolute"),
            ("left", "10px"),
            ("width", "100px"),
            ("top", "20px"),
            ("height", "50px"),
        ]

    def test_end_constraints(self):
        """End constraints pin to the right and bottom."""
        node = DesignNode.model_validate(
            {
                "id": "n",
                "kind": "container",
                "x": 290,
                "y": 230,
                "width": 100,
                "height": 50,
                "sizing": {"constraints": {"horizontal": "end", "vertical": "end"}},
            }
        )
        pairs = dict(positioning_declarations(node, self.parent()))
        assert pairs["right"] == "10px"
        assert pairs["bottom"] == "20px"
        assert "left" not in pairs

    def test_stretch_has_no_size(self):
        """Stretch pins both edges instead of setting a size."""
        node = DesignNode.model_validate(
            {
                "id": "n",
                "kind": "container",
                "x": 0,
                "y": 0,
                "width": 400,
                "height": 50,
                "sizing": {"constraints": {"horizontal": "stretch"}},
            }
        )
        pairs = dict(positioning_declarations(node, self.parent()))
        assert pairs["left"] == "0"
        assert pairs["right"] == "0"
        assert "width" not in pairs

    def test_centered(self):
        """A centered child uses 50% and a translate."""
        node = DesignNode.model_validate(
            {
                "id": "n",
                "kind": "container",
                "x": 150,
                "y": 125,
                "width": 100,
                "height": 50,
                "sizing": {"constraints": {"horizontal": "center", "vertical": "center"}},
            }
        )
        pairs = dict(positioning_declarations(node, self.parent()))
        assert pairs["left"] == "50%"
        assert pairs["top"] == "50%"
        assert pairs["transform"] == "translate(-50%, -50%)"

    def test_centered_with_offset(self):
        """An off-center child keeps its offset from the center line."""
        node = DesignNode.model_validate(
            {
                "id": "n",
                "kind": "container",
                "x": 170,
                "y": 0,
                "width": 100,
                "height": 50,
                "sizing": {"constraints": {"horizontal": "center"}},
            }
        )
        pairs = dict(positioning_declarations(node, self.parent()))
        assert pairs["left"] == "calc(50% + 20px)"
        assert pairs["transform"] == "translateX(-50%)"

    def test_hug_has_no_size(self):
        """Hugging dimensions keep their intrinsic size."""
        node = DesignNode.model_validate(
            {
                "id": "n",
                "kind": "container",
                "width": 100,
                "height": 50,
                "sizing": {"horizontal": "hug", "vertical": "hug"},
            }
        )
        pairs = dict(positioning_declarations(node, self.parent()))
        assert "width" not in pairs
        assert "height" not in pairs
