"""
Mode merge - per-mode override sets keyed by conditional selectors.

Given the default-mode pass and one pass per non-default mode, the merger
keeps only what changes and wraps it in the selector for its
classification:

- breakpoint: ``@media (min-width: Npx)``, ascending, so each larger
  breakpoint composes on top of the smaller ones
- theme: an automatic ``prefers-color-scheme`` query on the root and a
  manual ``[data-theme="..."]`` attribute selector; the attribute
  selector has the higher specificity, so a manual choice wins. The
  automatic query is only emitted for modes named light or dark whose
  scheme differs from the default mode's. Other theme modes (``Sepia``,
  ``Light HC`` next to a ``Light`` default) get the manual selector alone,
  since no system preference selects them
- unknown: nothing; only default values reach the output
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from chuk_mcp_figma_css.constants import ModeClassification, SelectorKind
from chuk_mcp_figma_css.models.config import EngineConfig
from chuk_mcp_figma_css.models.declaration import (
    ModeOverride,
    ModeSelector,
    NodeOverride,
    ResolvedNode,
    StyleDeclaration,
)
from chuk_mcp_figma_css.models.tokens import ClassifiedMode, ClassifiedModeCollection

_ID = re.compile(r"#[\w-]+")
_CLASS_LIKE = re.compile(r"\.[\w-]+|\[[^\]]*\]|(?<!:):(?!:)[\w-]+")
_TYPE = re.compile(r"(?:^|[\s>+~])([a-zA-Z][\w-]*)")
_SLUG = re.compile(r"[^a-z0-9]+")


def selector_specificity(selector: str) -> tuple[int, int, int]:
    """(id, class, type) specificity of a simple compound selector."""
    ids = len(_ID.findall(selector))
    classes = len(_CLASS_LIKE.findall(selector))
    types = len(_TYPE.findall(selector))
    return ids, classes, types


def mode_slug(name: str) -> str:
    """Attribute value for a mode name: ``Dark Mode`` -> ``dark-mode``."""
    return _SLUG.sub("-", name.lower()).strip("-")


def color_scheme(name: str) -> str | None:
    """System color scheme a theme mode name implies, if any."""
    lowered = name.lower()
    if "dark" in lowered:
        return "dark"
    if "light" in lowered:
        return "light"
    return None


@dataclass(frozen=True)
class ResolutionPass:
    """Output of resolving the tree under one mode selection."""

    nodes: tuple[ResolvedNode, ...]
    token_definitions: tuple[StyleDeclaration, ...] = ()


class ModeMerger:
    """Turns per-mode passes into override sets."""

    def __init__(self, config: EngineConfig | None = None):
        self.config = config or EngineConfig()

    def selectors_for(
        self, collection: ClassifiedModeCollection, mode: ClassifiedMode
    ) -> tuple[ModeSelector, ...]:
        """Conditional selectors for a non-default mode."""
        root = self.config.root_selector
        if collection.classification == ModeClassification.BREAKPOINT:
            if mode.threshold is None:
                return ()
            return (
                ModeSelector(
                    kind=SelectorKind.MIN_WIDTH,
                    media=f"(min-width: {mode.threshold}px)",
                    selector=root,
                    specificity=selector_specificity(root),
                ),
            )

        if collection.classification == ModeClassification.THEME:
            selectors: list[ModeSelector] = []
            scheme = color_scheme(mode.name)
            # The system query would shadow the default mode when both share a scheme
            if scheme is not None and scheme != color_scheme(collection.default_mode):
                selectors.append(
                    ModeSelector(
                        kind=SelectorKind.COLOR_SCHEME,
                        media=f"(prefers-color-scheme: {scheme})",
                        selector=root,
                        specificity=selector_specificity(root),
                    )
                )
            manual = f'{root}[{self.config.theme_attribute}="{mode_slug(mode.name)}"]'
            selectors.append(
                ModeSelector(
                    kind=SelectorKind.ATTRIBUTE,
                    selector=manual,
                    specificity=selector_specificity(manual),
                )
            )
            return tuple(selectors)

        return ()

    def merge(
        self,
        collection: ClassifiedModeCollection,
        baseline: ResolutionPass,
        mode_passes: Mapping[str, ResolutionPass],
    ) -> list[ModeOverride]:
        """
        Build the overrides of one collection.

        Args:
            collection: Classified collection
            baseline: Pass with every collection at its default mode
            mode_passes: Mode name -> pass with that mode active

        Returns:
            Overrides in output order; empty for unknown collections
        """
        if collection.classification == ModeClassification.UNKNOWN:
            return []

        overrides: list[ModeOverride] = []
        for mode in collection.non_default_modes():
            mode_pass = mode_passes.get(mode.name)
            selectors = self.selectors_for(collection, mode)
            if mode_pass is None or not selectors:
                continue
            override = ModeOverride(
                collection=collection.name,
                mode=mode.name,
                selectors=selectors,
                token_definitions=tuple(
                    diff_declarations(baseline.token_definitions, mode_pass.token_definitions)
                ),
                nodes=tuple(self._node_overrides(baseline.nodes, mode_pass.nodes)),
            )
            if not override.is_empty():
                overrides.append(override)
        return overrides

    def _node_overrides(
        self,
        baseline: Sequence[ResolvedNode],
        variant: Sequence[ResolvedNode],
    ) -> list[NodeOverride]:
        base_by_id = {node.node_id: node for node in baseline}
        result: list[NodeOverride] = []
        for node in variant:
            base = base_by_id.get(node.node_id)
            changed = diff_declarations(base.declarations if base else (), node.declarations)
            if changed:
                result.append(NodeOverride(node_id=node.node_id, declarations=tuple(changed)))
        return result


def diff_declarations(
    baseline: Sequence[StyleDeclaration],
    variant: Sequence[StyleDeclaration],
) -> list[StyleDeclaration]:
    """
    Declarations of ``variant`` that differ from ``baseline``.

    Properties that disappear in the variant are reset with ``initial``.
    """
    base = {d.property: d for d in baseline}
    seen: set[str] = set()
    changed: list[StyleDeclaration] = []
    for declaration in variant:
        seen.add(declaration.property)
        if base.get(declaration.property) != declaration:
            changed.append(declaration)
    for declaration in baseline:
        if declaration.property not in seen:
            changed.append(
                StyleDeclaration(property=declaration.property, value="initial", layer=declaration.layer)
            )
    return changed
