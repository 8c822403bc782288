"""
Tests for models and diagnostics.
"""

import pytest
from pydantic import ValidationError

from chuk_mcp_figma_css.constants import (
    AxisMode,
    Dimension,
    ModeClassification,
    SizingMode,
    StyleLayer,
    TokenOrigin,
)
from chuk_mcp_figma_css.diagnostics import Diagnostic, DiagnosticCode, Diagnostics, DiagnosticSeverity
from chuk_mcp_figma_css.models import (
    ClassifiedMode,
    ClassifiedModeCollection,
    DesignNode,
    ModeOverride,
    ModeSelector,
    ResolvedNode,
    SizingDescriptor,
    StyleDeclaration,
)


class TestDesignNode:
    """Tests for the DesignNode model."""

    def test_parse_tree(self, card_tree):
        assert card_tree.axis == AxisMode.COLUMN
        assert [n.id for n in card_tree.walk()] == ["card", "title", "body", "button"]
        assert card_tree.find("button").layout.primary_align.value == "center"
        assert card_tree.find("missing") is None

    def test_frozen(self, card_tree):
        with pytest.raises(ValidationError):
            card_tree.name = "Other"

    def test_only_containers_have_children(self):
        with pytest.raises(ValidationError):
            DesignNode.model_validate(
                {"id": "t", "kind": "text", "children": [{"id": "x", "kind": "vector"}]}
            )

    def test_only_containers_have_layout(self):
        with pytest.raises(ValidationError):
            DesignNode.model_validate({"id": "t", "kind": "image", "layout": {"axis": "row"}})

    def test_empty_id(self):
        with pytest.raises(ValidationError):
            DesignNode(id=" ", kind="container")

    def test_no_layout_means_no_axis(self):
        assert DesignNode(id="n", kind="container").axis == AxisMode.NONE

    def test_sizing_accessors(self):
        sizing = SizingDescriptor(horizontal=SizingMode.FILL, min_width=10, max_height=20)
        assert sizing.mode_for(Dimension.HORIZONTAL) == SizingMode.FILL
        assert sizing.mode_for(Dimension.VERTICAL) == SizingMode.FIXED
        assert sizing.min_for(Dimension.HORIZONTAL) == 10
        assert sizing.max_for(Dimension.VERTICAL) == 20

    def test_negative_gap_rejected(self):
        with pytest.raises(ValidationError):
            DesignNode.model_validate({"id": "n", "kind": "container", "layout": {"gap": -1}})


class TestDeclarations:
    """Tests for output models."""

    def test_external_needs_fallback(self):
        with pytest.raises(ValidationError):
            StyleDeclaration(
                property="color",
                value="var(--lib-blue)",
                layer=StyleLayer.TOKEN_REFERENCE,
                token="lib/blue",
                token_origin=TokenOrigin.EXTERNAL,
            )

    def test_local_forbids_fallback(self):
        with pytest.raises(ValidationError):
            StyleDeclaration(
                property="color",
                value="var(--blue)",
                layer=StyleLayer.TOKEN_REFERENCE,
                token="blue",
                token_origin=TokenOrigin.LOCAL,
                fallback="#00f",
            )

    def test_resolved_node_helpers(self):
        node = ResolvedNode(
            node_id="n",
            declarations=(
                StyleDeclaration(property="display", value="flex", layer=StyleLayer.STRUCTURAL_UTILITY),
                StyleDeclaration(property="color", value="red", layer=StyleLayer.COMPONENT_RULE),
            ),
        )
        assert node.as_dict() == {"display": "flex", "color": "red"}
        assert [d.property for d in node.by_layer(StyleLayer.COMPONENT_RULE)] == ["color"]
        assert node.get("gap") is None

    def test_empty_override(self):
        override = ModeOverride(collection="Theme", mode="Dark", selectors=(ModeSelector(kind="attribute"),))
        assert override.is_empty()

    def test_single_default_required(self):
        with pytest.raises(ValidationError):
            ClassifiedModeCollection(
                name="Theme",
                classification=ModeClassification.THEME,
                default_mode="Light",
                modes=(ClassifiedMode(name="Light", is_default=True), ClassifiedMode(name="Dark", is_default=True)),
            )


class TestDiagnostics:
    """Tests for Diagnostics."""

    def test_add_and_query(self):
        diagnostics = Diagnostics()
        diagnostics.add_warning(DiagnosticCode.UNSUPPORTED_PROPERTY, "cursor", "root")
        diagnostics.add_info(DiagnosticCode.ROOT_SIZING_IGNORED, "ignored")
        assert len(diagnostics) == 2
        assert diagnostics  # no errors
        assert diagnostics.codes() == [DiagnosticCode.UNSUPPORTED_PROPERTY, DiagnosticCode.ROOT_SIZING_IGNORED]
        assert len(diagnostics.warnings) == 1

    def test_errors_make_falsy(self):
        diagnostics = Diagnostics()
        diagnostics.add_error(DiagnosticCode.INVALID_AXIS_CONTEXT, "bad", "root/n")
        assert not diagnostics
        assert diagnostics.errors[0].location == "root/n"

    def test_duplicates_recorded_once(self):
        diagnostics = Diagnostics()
        for _ in range(3):
            diagnostics.add_warning(DiagnosticCode.UNRESOLVED_TOKEN_ALIAS, "a -> b -> a", "tokens/a")
        assert len(diagnostics) == 1

    def test_extend(self):
        first, second = Diagnostics(), Diagnostics()
        first.add_info("A", "one")
        second.add_info("A", "one")
        second.add_info("B", "two")
        first.extend(second)
        assert first.codes() == ["A", "B"]

    def test_str_and_dict(self):
        issue = Diagnostic(DiagnosticSeverity.WARNING, "X", "message", "a/b")
        assert str(issue) == "[WARNING] X: message at a/b"
        assert issue.to_dict()["severity"] == "warning"
        assert str(Diagnostics()) == "No diagnostics"

    def test_logged(self, caplog):
        """Warnings are logged when recorded."""
        diagnostics = Diagnostics()
        with caplog.at_level("WARNING", logger="chuk_mcp_figma_css.diagnostics"):
            diagnostics.add_warning("X", "something off")
        assert "something off" in caplog.text
