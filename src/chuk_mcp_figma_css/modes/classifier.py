"""
Mode classifier - breakpoint, theme or unknown, and the default mode.

Classification walks the rule table in order and the first rule matching
any mode name wins. Theme rules come first so that "Dark Desktop" keeps
its theme axis instead of being read as a breakpoint.

Default mode:
- breakpoint: smallest threshold (mobile first)
- theme: the mode whose name contains "light", else the first declared
- unknown: the first declared

Ties never raise; the first declared mode wins and a warning is recorded.
"""

from __future__ import annotations

import logging

from chuk_mcp_figma_css.constants import ErrorMessages, ModeClassification
from chuk_mcp_figma_css.diagnostics import DiagnosticCode, Diagnostics
from chuk_mcp_figma_css.errors import EmptyModeCollection
from chuk_mcp_figma_css.models.config import ModeRuleTable
from chuk_mcp_figma_css.models.tokens import ClassifiedMode, ClassifiedModeCollection, ModeCollection

logger = logging.getLogger(__name__)


class ModeClassifier:
    """Classifies mode collections using a data-driven rule table."""

    def __init__(self, rules: ModeRuleTable | None = None):
        self.rules = rules or ModeRuleTable()

    def classify_names(self, modes: list[str]) -> ModeClassification:
        """Classification for a list of mode names."""
        for rule in self.rules.rules:
            if any(rule.matches(mode) for mode in modes):
                return rule.classification
        return ModeClassification.UNKNOWN

    def classify(
        self,
        collection: ModeCollection,
        diagnostics: Diagnostics | None = None,
    ) -> ClassifiedModeCollection:
        """
        Classify a collection and choose its default mode.

        Args:
            collection: The declared collection
            diagnostics: Receives ambiguity and threshold warnings

        Returns:
            Frozen classified collection

        Raises:
            EmptyModeCollection: The collection has no modes
        """
        if not collection.modes:
            raise EmptyModeCollection(collection.name)
        diagnostics = diagnostics if diagnostics is not None else Diagnostics()

        classification = self.classify_names(collection.modes)
        thresholds: list[int | None] = [None] * len(collection.modes)
        if classification == ModeClassification.BREAKPOINT:
            thresholds = [self.rules.threshold_for(mode) for mode in collection.modes]
            for mode, threshold in zip(collection.modes, thresholds):
                if threshold is None:
                    diagnostics.add_warning(
                        DiagnosticCode.MISSING_THRESHOLD,
                        f"Breakpoint mode '{mode}' has no width threshold; it gets no override",
                        f"collections/{collection.name}/{mode}",
                    )

        default_index = self._default_index(collection, classification, thresholds, diagnostics)
        modes = tuple(
            ClassifiedMode(name=name, threshold=threshold, is_default=index == default_index)
            for index, (name, threshold) in enumerate(zip(collection.modes, thresholds))
        )
        logger.debug(
            "Collection %s classified as %s (default %s)",
            collection.name,
            classification.value,
            collection.modes[default_index],
        )
        return ClassifiedModeCollection(
            name=collection.name,
            classification=classification,
            default_mode=collection.modes[default_index],
            modes=modes,
        )

    def _default_index(
        self,
        collection: ModeCollection,
        classification: ModeClassification,
        thresholds: list[int | None],
        diagnostics: Diagnostics,
    ) -> int:
        names = collection.modes
        if classification == ModeClassification.BREAKPOINT:
            known = [t for t in thresholds if t is not None]
            if not known:
                return 0
            smallest = min(known)
            candidates = [i for i, t in enumerate(thresholds) if t == smallest]
        elif classification == ModeClassification.THEME:
            keyword = self.rules.theme_default_keyword.lower()
            candidates = [i for i, name in enumerate(names) if keyword in name.lower()]
            if not candidates:
                return 0
        else:
            return 0

        if len(candidates) > 1:
            diagnostics.add_warning(
                DiagnosticCode.AMBIGUOUS_DEFAULT_MODE,
                ErrorMessages.AMBIGUOUS_DEFAULT_MODE.format(
                    modes=[names[i] for i in candidates],
                    name=collection.name,
                    chosen=names[candidates[0]],
                ),
                f"collections/{collection.name}",
            )
        return candidates[0]
