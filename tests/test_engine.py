"""
Tests for the style engine.

Tests cover:
- Layer placement across a whole tree
- Mode passes and overrides (theme and breakpoint)
- Containment of per-node and per-collection errors
- Determinism and parallel resolution
"""

import pytest

from chuk_mcp_figma_css.constants import SpacingTokenPolicy, StyleLayer, TokenOrigin
from chuk_mcp_figma_css.diagnostics import DiagnosticCode
from chuk_mcp_figma_css.engine import StyleEngine, TraversalContext
from chuk_mcp_figma_css.models import (
    DesignNode,
    EngineConfig,
    ModeCollection,
    TokenReference,
    TokenSet,
)
from chuk_mcp_figma_css.tokens import TokenCache

BREAKPOINT_TOKENS = [
    TokenReference(
        name="spacing/page",
        collection="Breakpoints",
        category="spacing",
        default_mode="Mobile",
        modes={"Mobile": "16px", "Tablet": "24px", "Desktop": "32px"},
    )
]
BREAKPOINTS = ModeCollection(name="Breakpoints", modes=["Desktop", "Mobile", "Tablet"])


def tree(data: dict) -> DesignNode:
    return DesignNode.model_validate(data)


class TestLayers:
    """Tests for layer placement across a tree."""

    def test_card_container(self, card_tree, theme_tokens, theme_collection):
        """Layout is structural, matched and bound values are token references."""
        result = StyleEngine().resolve(card_tree, theme_tokens, [theme_collection])
        card = result.get("card")
        assert card.get("display").layer == StyleLayer.STRUCTURAL_UTILITY
        assert card.get("gap").value == "16px"
        assert card.get("padding").value == "24px"
        assert card.get("background-color").value == "var(--color-surface)"
        assert card.get("border-radius").value == "var(--radius-card)"
        assert card.get("color").value == "var(--color-text)"
        assert card.get("color").token == "color/text"

    def test_children(self, card_tree, theme_tokens, theme_collection):
        """Children get sizing from the column and visual/typography rules."""
        result = StyleEngine().resolve(card_tree, theme_tokens, [theme_collection])
        title = result.get("title")
        assert title.as_dict()["align-self"] == "stretch"
        assert "height" not in title.as_dict()
        assert title.get("font-size").layer == StyleLayer.COMPONENT_RULE
        assert result.get("body").get("color").value == "var(--color-text)"

        button = result.get("button")
        assert button.as_dict()["height"] == "40px"
        assert button.as_dict()["flex-shrink"] == "0"
        assert "width" not in button.as_dict()
        assert button.get("justify-content").value == "center"

    def test_external_fallbacks(self, card_tree, theme_tokens, theme_collection):
        """External references always carry a fallback, local ones never."""
        result = StyleEngine().resolve(card_tree, theme_tokens, [theme_collection])
        background = result.get("button").get("background-color")
        assert background.value == "var(--brand-primary, #0055ff)"
        assert background.fallback == "#0055ff"
        for _, declaration in result.declarations():
            if declaration.token_origin == TokenOrigin.LOCAL:
                assert declaration.fallback is None
            if declaration.token_origin == TokenOrigin.EXTERNAL:
                assert declaration.fallback is not None

    def test_token_definitions(self, card_tree, theme_tokens, theme_collection):
        """Only local tokens are defined, at their default mode."""
        result = StyleEngine().resolve(card_tree, theme_tokens, [theme_collection])
        definitions = {d.property: d.value for d in result.token_definitions}
        assert definitions == {
            "--color-surface": "#ffffff",
            "--color-text": "#111111",
            "--radius-card": "12px",
            "--spacing-md": "16px",
        }

    def test_token_definitions_disabled(self, card_tree, theme_tokens):
        engine = StyleEngine(EngineConfig(emit_token_definitions=False))
        assert engine.resolve(card_tree, theme_tokens).token_definitions == ()

    def test_token_backed_spacing(self, card_tree, theme_tokens):
        """The token-backed policy rewrites gap but keeps it structural."""
        engine = StyleEngine(EngineConfig(spacing_token_policy=SpacingTokenPolicy.TOKEN_BACKED))
        gap = engine.resolve(card_tree, theme_tokens).get("card").get("gap")
        assert gap.value == "var(--spacing-md)"
        assert gap.layer == StyleLayer.STRUCTURAL_UTILITY

    def test_no_tokens(self, card_tree):
        """Without tokens every visual value is a component rule."""
        result = StyleEngine().resolve(card_tree)
        assert result.get("card").get("background-color").value == "#FFFFFF"
        assert result.get("card").get("background-color").layer == StyleLayer.COMPONENT_RULE
        assert result.get("card").get("color") is None
        assert result.diagnostics.has(DiagnosticCode.UNKNOWN_TOKEN_BINDING)


class TestTags:
    """Tests for semantic tag hints."""

    def test_first_heading_is_h1(self, card_tree):
        result = StyleEngine().resolve(card_tree)
        assert result.get("card").tag == "div"
        assert result.get("title").tag == "h1"
        assert result.get("body").tag == "p"

    def test_later_headings_are_h2(self):
        """Only the first heading in document order becomes the h1."""
        root = tree(
            {
                "id": "page",
                "kind": "container",
                "layout": {"axis": "column"},
                "children": [
                    {
                        "id": "section",
                        "kind": "container",
                        "layout": {"axis": "column"},
                        "children": [{"id": "t1", "kind": "text", "text": {"font_size": 40}}],
                    },
                    {"id": "t2", "kind": "text", "text": {"font_size": 32}},
                    {"id": "img", "kind": "image"},
                    {"id": "icon", "kind": "vector"},
                ],
            }
        )
        result = StyleEngine().resolve(root)
        assert result.get("t1").tag == "h1"
        assert result.get("t2").tag == "h2"
        assert result.get("img").tag == "img"
        assert result.get("icon").tag == "svg"

    def test_depth(self, card_tree):
        result = StyleEngine().resolve(card_tree)
        assert result.get("card").depth == 0
        assert result.get("button").depth == 1


class TestContext:
    """Tests for the immutable traversal context."""

    def test_enter_does_not_mutate(self):
        node = DesignNode(id="n", kind="container")
        ctx = TraversalContext()
        child = ctx.enter(node)
        assert ctx.depth == 0 and ctx.path == ()
        assert child.depth == 1 and child.path == ("n",) and child.parent is node

    def test_absorb_carries_heading(self):
        ctx = TraversalContext()
        done = TraversalContext(depth=3, heading_used=True)
        merged = ctx.absorb(done)
        assert merged.heading_used
        assert merged.depth == 0


class TestModes:
    """Tests for mode overrides."""

    def test_theme_override(self, card_tree, theme_tokens, theme_collection):
        """Dark changes token definitions only; node references stay put."""
        result = StyleEngine().resolve(card_tree, theme_tokens, [theme_collection])
        [override] = result.overrides
        assert override.mode == "Dark"
        assert [s.kind.value for s in override.selectors] == ["color-scheme", "attribute"]
        definitions = {d.property: d.value for d in override.token_definitions}
        assert definitions == {"--color-surface": "#111111", "--color-text": "#f5f5f5"}
        assert override.nodes == ()

    def test_breakpoint_overrides_ascending(self):
        root = tree({"id": "root", "kind": "container", "layout": {"axis": "row"}})
        result = StyleEngine().resolve(root, BREAKPOINT_TOKENS, [BREAKPOINTS])
        assert [o.mode for o in result.overrides] == ["Tablet", "Desktop"]
        assert [o.selectors[0].media for o in result.overrides] == [
            "(min-width: 768px)",
            "(min-width: 1024px)",
        ]
        assert result.collections[0].default_mode == "Mobile"

    def test_bound_gap_follows_mode(self):
        """A bound spacing value changes per breakpoint as a structural override."""
        root = tree(
            {
                "id": "root",
                "kind": "container",
                "layout": {"axis": "row", "gap": 16},
                "bindings": {"gap": "spacing/page"},
            }
        )
        result = StyleEngine().resolve(root, BREAKPOINT_TOKENS, [BREAKPOINTS])
        assert result.get("root").get("gap").value == "16px"
        tablet = result.overrides[0]
        [node] = tablet.nodes
        assert node.node_id == "root"
        assert node.declarations[0].property == "gap"
        assert node.declarations[0].value == "24px"
        assert node.declarations[0].layer == StyleLayer.STRUCTURAL_UTILITY

    def test_unknown_collection_no_overrides(self):
        tokens = [
            TokenReference(
                name="brand/accent",
                collection="Brand",
                default_mode="Acme",
                modes={"Acme": "#ff0000", "Globex": "#00ff00"},
            )
        ]
        root = tree({"id": "root", "kind": "container"})
        result = StyleEngine().resolve(root, tokens, [ModeCollection(name="Brand", modes=["Acme", "Globex"])])
        assert result.overrides == ()
        assert {d.property: d.value for d in result.token_definitions} == {"--brand-accent": "#ff0000"}

    def test_empty_collection_is_contained(self, card_tree, theme_tokens, theme_collection):
        """An empty collection is reported and the rest still resolves."""
        result = StyleEngine().resolve(
            card_tree, theme_tokens, [ModeCollection(name="Empty"), theme_collection]
        )
        assert result.diagnostics.has(DiagnosticCode.EMPTY_MODE_COLLECTION)
        assert len(result.overrides) == 1
        assert [c.name for c in result.collections] == ["Theme"]


class TestContainment:
    """Tests for errors that are contained to one node."""

    def test_fill_under_no_axis(self):
        """Fill under a parent without an axis fails only that node."""
        root = tree(
            {
                "id": "frame",
                "kind": "container",
                "width": 200,
                "height": 100,
                "children": [
                    {"id": "bad", "kind": "container", "sizing": {"horizontal": "fill"}},
                    {"id": "ok", "kind": "vector", "x": 10, "y": 10, "width": 20, "height": 20},
                ],
            }
        )
        result = StyleEngine().resolve(root)
        assert result.get("bad").declarations == ()
        assert result.get("ok").as_dict()["position"] == "absolute"
        assert result.get("frame").as_dict()["position"] == "relative"
        assert result.diagnostics.has(DiagnosticCode.INVALID_AXIS_CONTEXT)
        assert not result.diagnostics

    def test_absolute_child_in_auto_layout(self):
        root = tree(
            {
                "id": "row",
                "kind": "container",
                "width": 300,
                "height": 60,
                "layout": {"axis": "row"},
                "children": [
                    {
                        "id": "badge",
                        "kind": "container",
                        "x": 280,
                        "y": 0,
                        "width": 20,
                        "height": 20,
                        "sizing": {
                            "positioning": "absolute",
                            "constraints": {"horizontal": "end", "vertical": "start"},
                        },
                    }
                ],
            }
        )
        badge = StyleEngine().resolve(root).get("badge").as_dict()
        assert badge["position"] == "absolute"
        assert badge["right"] == "0"
        assert "flex-shrink" not in badge

    def test_root_sizing_ignored(self):
        root = tree({"id": "root", "kind": "container", "width": 50, "sizing": {"horizontal": "fixed"}})
        result = StyleEngine().resolve(root)
        assert result.get("root").declarations == ()
        assert result.diagnostics.has(DiagnosticCode.ROOT_SIZING_IGNORED)

    def test_hug_constraint_dropped(self):
        root = tree(
            {
                "id": "row",
                "kind": "container",
                "layout": {"axis": "row"},
                "children": [
                    {"id": "c", "kind": "container", "sizing": {"horizontal": "hug", "vertical": "hug", "min_width": 40}}
                ],
            }
        )
        result = StyleEngine().resolve(root)
        assert result.get("c").declarations == ()
        assert result.diagnostics.has(DiagnosticCode.HUG_CONSTRAINT_DROPPED)

    def test_unsupported_bound_property(self, theme_tokens):
        """Bindings on unknown properties pass through with a warning."""
        root = tree({"id": "root", "kind": "container", "bindings": {"outline-color": "color/text"}})
        result = StyleEngine().resolve(root, theme_tokens)
        declaration = result.get("root").get("outline-color")
        assert declaration.value == "#111111"
        assert declaration.layer == StyleLayer.COMPONENT_RULE
        assert result.diagnostics.has(DiagnosticCode.UNSUPPORTED_PROPERTY)

    def test_alias_issue_reported(self):
        tokens = [TokenReference(name="a", alias_of="b"), TokenReference(name="b", alias_of="a")]
        result = StyleEngine().resolve(tree({"id": "root", "kind": "container"}), tokens)
        assert result.diagnostics.has(DiagnosticCode.UNRESOLVED_TOKEN_ALIAS)
        assert result.token_definitions == ()


class TestRuns:
    """Tests for styled text runs."""

    def test_runs(self, theme_tokens):
        root = tree(
            {
                "id": "t",
                "kind": "text",
                "text": {
                    "content": "bold link",
                    "font_weight": 400,
                    "runs": [
                        {"text": "bold", "font_weight": 700},
                        {"text": "link", "color": "#0055ff", "text_decoration": "underline"},
                    ],
                },
            }
        )
        node = StyleEngine().resolve(root, theme_tokens).get("t")
        bold, link = node.runs
        assert [(d.property, d.value) for d in bold.declarations] == [("font-weight", "700")]
        assert link.declarations[0].value == "var(--brand-primary, #0055ff)"
        assert link.declarations[1].value == "underline"


class TestDeterminism:
    """Tests for idempotence and parallel resolution."""

    def test_idempotent(self, card_tree, theme_tokens, theme_collection):
        """Resolving twice gives byte-identical output."""
        engine = StyleEngine()
        first = engine.resolve(card_tree, theme_tokens, [theme_collection])
        second = engine.resolve(card_tree, theme_tokens, [theme_collection])
        assert first.to_json() == second.to_json()
        assert first == second

    def test_explicit_cache(self, card_tree, theme_tokens, theme_collection):
        """A supplied cache is used for the run."""
        cache = TokenCache(theme_tokens)
        result = StyleEngine().resolve(card_tree, collections=[theme_collection], cache=cache)
        assert len(cache) == 2
        assert result.get("card").get("background-color").token == "color/surface"

    def test_resolve_many(self, card_tree, row_tree, theme_tokens, theme_collection):
        """Parallel results match sequential ones, in input order."""
        engine = StyleEngine()
        results = engine.resolve_many([card_tree, row_tree], theme_tokens, [theme_collection], max_workers=2)
        assert [r.nodes[0].node_id for r in results] == ["card", "row"]
        assert results[0].to_json() == engine.resolve(card_tree, theme_tokens, [theme_collection]).to_json()

    def test_resolve_token_set(self, card_tree, theme_tokens, theme_collection):
        token_set = TokenSet(name="brand", tokens=theme_tokens, collections=[theme_collection])
        result = StyleEngine().resolve_token_set(card_tree, token_set)
        assert len(result.overrides) == 1

    @pytest.mark.parametrize("axis", ["row", "column"])
    def test_equal_fill_share(self, axis):
        """Two primary-axis fill children get identical flex declarations."""
        primary = "horizontal" if axis == "row" else "vertical"
        root = tree(
            {
                "id": "c",
                "kind": "container",
                "layout": {"axis": axis},
                "children": [
                    {"id": "a", "kind": "container", "width": 10, "height": 10, "sizing": {primary: "fill"}},
                    {"id": "b", "kind": "container", "width": 300, "height": 300, "sizing": {primary: "fill"}},
                ],
            }
        )
        result = StyleEngine().resolve(root)
        for node_id in ("a", "b"):
            declarations = result.get(node_id).as_dict()
            assert declarations["flex-grow"] == "1"
            assert declarations["flex-basis"] == "0"
