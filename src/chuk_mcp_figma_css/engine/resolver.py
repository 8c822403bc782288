"""
Style engine - resolves a design tree into layer-tagged declarations.

The pipeline:
    ModeCollections -> ModeClassifier -> classified collections
    TokenReferences -> TokenCache -> TokenTable per mode selection
    DesignNode tree -> per-node (property, value) pairs
                    -> PropertyClassifier -> StyleDeclarations
    default pass + one pass per non-default mode -> ModeMerger -> overrides

The engine is a pure, synchronous transformation. Everything it needs is
passed in; there is no I/O and no state shared between runs, so
independent trees can be resolved in parallel.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from typing import Any

from chuk_mcp_figma_css.constants import (
    AxisMode,
    ErrorMessages,
    ModeClassification,
    NodeKind,
    Positioning,
    SizingMode,
    StyleLayer,
    TokenOrigin,
)
from chuk_mcp_figma_css.diagnostics import DiagnosticCode, Diagnostics
from chuk_mcp_figma_css.errors import EmptyModeCollection, InvalidAxisContext
from chuk_mcp_figma_css.layout import AxisResolver, container_declarations, positioning_declarations
from chuk_mcp_figma_css.models.config import EngineConfig, ModeRuleTable
from chuk_mcp_figma_css.models.declaration import (
    ModeOverride,
    ResolvedNode,
    ResolvedRun,
    StyleDeclaration,
)
from chuk_mcp_figma_css.models.node import DesignNode, Shadow, TextDescriptor, VisualDescriptor
from chuk_mcp_figma_css.models.tokens import (
    ClassifiedModeCollection,
    ModeCollection,
    TokenReference,
    TokenSet,
)
from chuk_mcp_figma_css.modes import ModeClassifier, ModeMerger, ResolutionPass
from chuk_mcp_figma_css.placement import PropertyClassifier
from chuk_mcp_figma_css.tokens.table import TokenCache, TokenTable, default_selection
from chuk_mcp_figma_css.tokens.values import number, px

logger = logging.getLogger(__name__)

Pairs = list[tuple[str, str]]


@dataclass(frozen=True)
class TraversalContext:
    """
    Immutable traversal state.

    Each recursive call receives a context and returns an updated one;
    nothing is threaded through shared mutable state.
    """

    depth: int = 0
    path: tuple[str, ...] = ()
    parent: DesignNode | None = None
    heading_used: bool = False

    def enter(self, node: DesignNode) -> TraversalContext:
        """Context for the children of ``node``."""
        return replace(self, depth=self.depth + 1, path=(*self.path, node.id), parent=node)

    def absorb(self, child: TraversalContext) -> TraversalContext:
        """Carry accumulated flags back up from a finished subtree."""
        return replace(self, heading_used=child.heading_used)

    def location(self, node: DesignNode) -> str:
        return "/".join((*self.path, node.id))


@dataclass(frozen=True)
class ResolutionResult:
    """Result of resolving one design tree."""

    nodes: tuple[ResolvedNode, ...]
    token_definitions: tuple[StyleDeclaration, ...]
    overrides: tuple[ModeOverride, ...]
    collections: tuple[ClassifiedModeCollection, ...]
    diagnostics: Diagnostics = field(default_factory=Diagnostics, compare=False)

    def get(self, node_id: str) -> ResolvedNode | None:
        """Get the resolved node by id."""
        for node in self.nodes:
            if node.node_id == node_id:
                return node
        return None

    def declarations(self) -> list[tuple[str, StyleDeclaration]]:
        """(node id, declaration) pairs in output order."""
        return [(node.node_id, d) for node in self.nodes for d in node.declarations]

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable representation."""
        return {
            "nodes": [node.model_dump(mode="json") for node in self.nodes],
            "token_definitions": [d.model_dump(mode="json") for d in self.token_definitions],
            "overrides": [o.model_dump(mode="json") for o in self.overrides],
            "collections": [c.model_dump(mode="json") for c in self.collections],
            "diagnostics": [i.to_dict() for i in self.diagnostics.issues],
        }

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)


class StyleEngine:
    """
    Resolves design trees into structural, token and component declarations.

    Engines hold only immutable configuration, so one engine can serve
    concurrent resolutions.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        rules: ModeRuleTable | None = None,
    ):
        """
        Initialize the engine.

        Args:
            config: Engine settings (spacing token policy, heading size, ...)
            rules: Mode classification rules
        """
        self.config = config or EngineConfig()
        self.axis_resolver = AxisResolver()
        self.classifier = PropertyClassifier(self.config.spacing_token_policy)
        self.mode_classifier = ModeClassifier(rules)
        self.merger = ModeMerger(self.config)

    def resolve(
        self,
        root: DesignNode,
        tokens: Iterable[TokenReference] = (),
        collections: Iterable[ModeCollection] = (),
        cache: TokenCache | None = None,
    ) -> ResolutionResult:
        """
        Resolve a design tree.

        Args:
            root: Root of the design tree
            tokens: Materialized token snapshot
            collections: Mode collections the tokens vary over
            cache: Per-run token cache; when given it supplies the tokens

        Returns:
            ResolutionResult with nodes, token definitions, overrides and diagnostics
        """
        diagnostics = Diagnostics()
        cache = cache if cache is not None else TokenCache(tokens)

        classified: list[ClassifiedModeCollection] = []
        for collection in collections:
            try:
                classified.append(self.mode_classifier.classify(collection, diagnostics))
            except EmptyModeCollection as e:
                diagnostics.add_error(
                    DiagnosticCode.EMPTY_MODE_COLLECTION, str(e), f"collections/{collection.name}"
                )

        baseline_selection = default_selection(classified)
        baseline_table = cache.table(baseline_selection)
        baseline = self._run_pass(root, baseline_table, diagnostics)

        overrides: list[ModeOverride] = []
        for collection in classified:
            if collection.classification == ModeClassification.UNKNOWN:
                logger.debug("Collection %s is unclassified; no overrides", collection.name)
                continue
            passes: dict[str, ResolutionPass] = {}
            for mode in collection.non_default_modes():
                selection = {**baseline_selection, collection.name: mode.name}
                passes[mode.name] = self._run_pass(
                    root, cache.table(selection), diagnostics, baseline_table
                )
            overrides.extend(self.merger.merge(collection, baseline, passes))

        logger.debug(
            "Resolved %d nodes, %d overrides, %d diagnostics",
            len(baseline.nodes),
            len(overrides),
            len(diagnostics),
        )
        return ResolutionResult(
            nodes=baseline.nodes,
            token_definitions=baseline.token_definitions,
            overrides=tuple(overrides),
            collections=tuple(classified),
            diagnostics=diagnostics,
        )

    def resolve_token_set(self, root: DesignNode, token_set: TokenSet) -> ResolutionResult:
        """Resolve a tree against a loaded token set."""
        return self.resolve(root, token_set.tokens, token_set.collections)

    def resolve_many(
        self,
        roots: Sequence[DesignNode],
        tokens: Iterable[TokenReference] = (),
        collections: Iterable[ModeCollection] = (),
        max_workers: int | None = None,
    ) -> list[ResolutionResult]:
        """
        Resolve independent trees in parallel threads.

        Each tree gets its own TokenCache; results keep the input order.
        """
        token_list = tuple(tokens)
        collection_list = tuple(collections)
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures = [
                pool.submit(self.resolve, root, cache=TokenCache(token_list), collections=collection_list)
                for root in roots
            ]
            return [future.result() for future in futures]

    # ------------------------------------------------------------------
    # Passes
    # ------------------------------------------------------------------

    def _run_pass(
        self,
        root: DesignNode,
        table: TokenTable,
        diagnostics: Diagnostics,
        baseline: TokenTable | None = None,
    ) -> ResolutionPass:
        """
        Resolve the whole tree under one token table.

        Unbound literals are matched against ``baseline`` (the default-mode
        table): design literals are default-mode values, so a literal that
        matches a token there keeps referencing it in every mode.
        """
        if baseline is None:
            baseline = table
        for issue in table.alias_issues:
            diagnostics.add_warning(
                DiagnosticCode.UNRESOLVED_TOKEN_ALIAS,
                ErrorMessages.UNRESOLVED_TOKEN_ALIAS.format(
                    name=issue.token, chain=" -> ".join(issue.chain)
                ),
                f"tokens/{issue.token}",
            )
        nodes, _ = self._resolve_subtree(root, TraversalContext(), table, baseline, diagnostics)
        return ResolutionPass(nodes=tuple(nodes), token_definitions=self._token_definitions(table))

    def _token_definitions(self, table: TokenTable) -> tuple[StyleDeclaration, ...]:
        """Custom property definitions for local tokens."""
        if not self.config.emit_token_definitions:
            return ()
        definitions: list[StyleDeclaration] = []
        for token in table.tokens:
            value = table.resolve(token.name)
            if token.origin != TokenOrigin.LOCAL or not value:
                continue
            definitions.append(
                StyleDeclaration(
                    property=token.css_variable,
                    value=value,
                    layer=StyleLayer.TOKEN_REFERENCE,
                )
            )
        return tuple(definitions)

    def _resolve_subtree(
        self,
        node: DesignNode,
        ctx: TraversalContext,
        table: TokenTable,
        baseline: TokenTable,
        diagnostics: Diagnostics,
    ) -> tuple[list[ResolvedNode], TraversalContext]:
        resolved, ctx = self._resolve_node(node, ctx, table, baseline, diagnostics)
        result = [resolved]
        child_ctx = ctx.enter(node)
        for child in node.children:
            child_nodes, child_ctx = self._resolve_subtree(child, child_ctx, table, baseline, diagnostics)
            result.extend(child_nodes)
        return result, ctx.absorb(child_ctx)

    def _resolve_node(
        self,
        node: DesignNode,
        ctx: TraversalContext,
        table: TokenTable,
        baseline: TokenTable,
        diagnostics: Diagnostics,
    ) -> tuple[ResolvedNode, TraversalContext]:
        location = ctx.location(node)
        tag, ctx = self._tag_for(node, ctx)

        try:
            pairs = self._node_pairs(node, ctx, diagnostics, location)
        except InvalidAxisContext as e:
            diagnostics.add_error(DiagnosticCode.INVALID_AXIS_CONTEXT, str(e), location)
            return ResolvedNode(node_id=node.id, name=node.name, tag=tag, depth=ctx.depth), ctx

        declarations = self._classify_pairs(node, pairs, table, baseline, diagnostics, location)
        runs = self._resolve_runs(node, table, baseline, diagnostics, location)
        logger.debug("Resolved %s: %d declarations", location, len(declarations))
        return (
            ResolvedNode(
                node_id=node.id,
                name=node.name,
                tag=tag,
                depth=ctx.depth,
                declarations=tuple(declarations),
                runs=tuple(runs),
            ),
            ctx,
        )

    # ------------------------------------------------------------------
    # Node declarations
    # ------------------------------------------------------------------

    def _node_pairs(
        self,
        node: DesignNode,
        ctx: TraversalContext,
        diagnostics: Diagnostics,
        location: str,
    ) -> Pairs:
        pairs: Pairs = []
        if node.kind == NodeKind.CONTAINER:
            pairs.extend(container_declarations(node))
        pairs.extend(self._placement_pairs(node, ctx.parent, diagnostics, location))
        pairs.extend(visual_pairs(node.visual))
        pairs.extend(text_pairs(node.text))
        return pairs

    def _placement_pairs(
        self,
        node: DesignNode,
        parent: DesignNode | None,
        diagnostics: Diagnostics,
        location: str,
    ) -> Pairs:
        """Sizing in the parent's flow, or absolute positioning."""
        sizing = node.sizing
        if parent is None:
            if sizing is not None:
                diagnostics.add_info(
                    DiagnosticCode.ROOT_SIZING_IGNORED, "Root node sizing is ignored", location
                )
            return []

        absolute = sizing is not None and sizing.positioning == Positioning.ABSOLUTE
        if parent.axis == AxisMode.NONE and not absolute:
            fills = sizing is not None and SizingMode.FILL in (sizing.horizontal, sizing.vertical)
            if not fills:
                return positioning_declarations(node, parent)
            # fill is only meaningful against an axis; the resolver rejects it

        if absolute:
            return positioning_declarations(node, parent)

        if sizing is not None:
            dropped = self.axis_resolver.dropped_constraints(sizing)
            if dropped:
                diagnostics.add_info(
                    DiagnosticCode.HUG_CONSTRAINT_DROPPED,
                    f"Constraints {dropped} ignored on hugging dimensions",
                    location,
                )
        return self.axis_resolver.declarations(node, parent.layout)

    def _classify_pairs(
        self,
        node: DesignNode,
        pairs: Pairs,
        table: TokenTable,
        baseline: TokenTable,
        diagnostics: Diagnostics,
        location: str,
    ) -> list[StyleDeclaration]:
        """Apply bindings, merge duplicates (last wins) and classify."""
        merged: dict[str, str] = {}
        for prop, value in pairs:
            merged[prop] = value

        # Bound properties without a literal of their own are emitted from the token
        for prop in sorted(node.bindings):
            merged.setdefault(prop, "")

        declarations: list[StyleDeclaration] = []
        for prop, value in merged.items():
            bound = node.bindings.get(prop)
            if bound is not None:
                if bound in table:
                    value = table.resolve(bound) or value
                else:
                    diagnostics.add_warning(
                        DiagnosticCode.UNKNOWN_TOKEN_BINDING,
                        f"'{prop}' is bound to unknown token '{bound}'",
                        location,
                    )
                    bound = None
            if not value:
                continue
            declarations.append(self._classify(prop, value, table, baseline, bound, diagnostics, location))
        return declarations

    def _classify(
        self,
        prop: str,
        value: str,
        table: TokenTable,
        baseline: TokenTable,
        bound: str | None,
        diagnostics: Diagnostics,
        location: str,
    ) -> StyleDeclaration:
        if bound is None and baseline is not table:
            promoted = baseline.match(value, prop)
            if promoted is not None:
                bound = promoted.name
        placement = self.classifier.classify(prop, value, table, bound)
        if not placement.supported:
            diagnostics.add_warning(
                DiagnosticCode.UNSUPPORTED_PROPERTY,
                ErrorMessages.UNSUPPORTED_PROPERTY.format(property=prop),
                location,
            )
        return placement.to_declaration(prop)

    def _resolve_runs(
        self,
        node: DesignNode,
        table: TokenTable,
        baseline: TokenTable,
        diagnostics: Diagnostics,
        location: str,
    ) -> list[ResolvedRun]:
        if node.text is None:
            return []
        runs: list[ResolvedRun] = []
        for index, run in enumerate(node.text.runs):
            base = node.text
            pairs: Pairs = []
            if run.font_size is not None and run.font_size != base.font_size:
                pairs.append(("font-size", px(run.font_size)))
            if run.font_weight is not None and run.font_weight != base.font_weight:
                pairs.append(("font-weight", str(run.font_weight)))
            if run.font_style:
                pairs.append(("font-style", run.font_style))
            if run.color and run.color != base.color:
                pairs.append(("color", run.color))
            if run.text_decoration:
                pairs.append(("text-decoration", run.text_decoration))
            declarations = tuple(
                self._classify(prop, value, table, baseline, None, diagnostics, f"{location}/runs/{index}")
                for prop, value in pairs
            )
            runs.append(ResolvedRun(index=index, text=run.text, declarations=declarations))
        return runs

    def _tag_for(self, node: DesignNode, ctx: TraversalContext) -> tuple[str, TraversalContext]:
        """Semantic tag hint; the first heading-sized text becomes the h1."""
        if node.kind == NodeKind.IMAGE:
            return "img", ctx
        if node.kind == NodeKind.VECTOR:
            return "svg", ctx
        if node.kind == NodeKind.TEXT:
            size = node.text.font_size if node.text else None
            if size is not None and size >= self.config.heading_min_font_size:
                if ctx.heading_used:
                    return "h2", ctx
                return "h1", replace(ctx, heading_used=True)
            return "p", ctx
        return "div", ctx


def _font_family(family: str) -> str:
    if any(ch.isspace() for ch in family) and not family.startswith(('"', "'")):
        return f'"{family}"'
    return family


def _shadow(shadow: Shadow) -> str:
    parts = [px(shadow.x), px(shadow.y), px(shadow.blur)]
    if shadow.spread:
        parts.append(px(shadow.spread))
    prefix = "inset " if shadow.inner else ""
    return f"{prefix}{' '.join(parts)} {shadow.color}"


def visual_pairs(visual: VisualDescriptor | None) -> Pairs:
    """Component visual declarations from fills, strokes and effects."""
    if visual is None:
        return []
    pairs: Pairs = []
    if visual.fill:
        pairs.append(("background-color", visual.fill))
    if visual.stroke is not None and visual.stroke.weight > 0:
        pairs.append(("border-width", px(visual.stroke.weight)))
        pairs.append(("border-style", visual.stroke.style))
        pairs.append(("border-color", visual.stroke.color))
    if visual.corner_radii is not None:
        radii = {px(r) for r in visual.corner_radii}
        if len(radii) == 1:
            pairs.append(("border-radius", radii.pop()))
        else:
            pairs.append(("border-radius", " ".join(px(r) for r in visual.corner_radii)))
    elif visual.corner_radius:
        pairs.append(("border-radius", px(visual.corner_radius)))
    if visual.shadows:
        pairs.append(("box-shadow", ", ".join(_shadow(s) for s in visual.shadows)))
    if visual.opacity < 1.0:
        pairs.append(("opacity", number(visual.opacity)))
    if visual.blend_mode and visual.blend_mode != "normal":
        pairs.append(("mix-blend-mode", visual.blend_mode))
    if visual.blur:
        pairs.append(("filter", f"blur({px(visual.blur)})"))
    return pairs


def text_pairs(text: TextDescriptor | None) -> Pairs:
    """Typography declarations of a text node."""
    if text is None:
        return []
    pairs: Pairs = []
    if text.color:
        pairs.append(("color", text.color))
    if text.font_family:
        pairs.append(("font-family", _font_family(text.font_family)))
    if text.font_size is not None:
        pairs.append(("font-size", px(text.font_size)))
    if text.font_weight is not None:
        pairs.append(("font-weight", str(text.font_weight)))
    if text.line_height is not None:
        pairs.append(("line-height", px(text.line_height)))
    if text.letter_spacing:
        pairs.append(("letter-spacing", px(text.letter_spacing)))
    if text.text_align and text.text_align != "left":
        pairs.append(("text-align", text.text_align))
    return pairs
