"""
Axis & sizing resolver - maps child sizing modes onto flexbox.

For a child of an auto layout container, each of the child's two
dimensions lies on the parent's primary or counter axis:

    row    -> horizontal is primary, vertical is counter
    column -> vertical is primary, horizontal is counter
    none   -> no axis; the child takes the positioning path instead

Sizing rules:
- fill on the primary axis is always ``flex-grow: 1`` plus ``flex-basis: 0``.
  Grow alone distributes space in proportion to content, not equally.
- fill on the counter axis is ``align-self: stretch``, unless the child has
  a max constraint on that dimension; then it is ``100%`` plus the max.
- fixed is an explicit size; on the primary axis it also stops shrinking.
- hug emits nothing for that dimension.
"""

from __future__ import annotations

from dataclasses import dataclass

from chuk_mcp_figma_css.constants import AxisMode, AxisRole, Dimension, SizingMode
from chuk_mcp_figma_css.errors import InvalidAxisContext
from chuk_mcp_figma_css.models.node import DesignNode, LayoutDescriptor, SizingDescriptor
from chuk_mcp_figma_css.tokens.values import px

_SIZE_PROPERTY = {Dimension.HORIZONTAL: "width", Dimension.VERTICAL: "height"}
_MIN_PROPERTY = {Dimension.HORIZONTAL: "min-width", Dimension.VERTICAL: "min-height"}
_MAX_PROPERTY = {Dimension.HORIZONTAL: "max-width", Dimension.VERTICAL: "max-height"}


@dataclass(frozen=True)
class ResolvedDimension:
    """One child dimension resolved against its parent's axis."""

    dimension: Dimension
    role: AxisRole
    mode: SizingMode


def primary_dimension(axis: AxisMode) -> Dimension | None:
    """Dimension along a layout axis (None for ``none``)."""
    if axis == AxisMode.ROW:
        return Dimension.HORIZONTAL
    if axis == AxisMode.COLUMN:
        return Dimension.VERTICAL
    return None


class AxisResolver:
    """Resolves child sizing against the parent's layout axis."""

    def resolve(
        self,
        parent: LayoutDescriptor | None,
        sizing: SizingDescriptor,
        node_id: str = "<node>",
    ) -> tuple[ResolvedDimension, ResolvedDimension]:
        """
        Resolve both dimensions of a child.

        Args:
            parent: Layout of the parent container
            sizing: Sizing of the child
            node_id: Used in the error message

        Returns:
            (horizontal, vertical) resolved dimensions

        Raises:
            InvalidAxisContext: The parent has no layout axis
        """
        axis = parent.axis if parent else AxisMode.NONE
        primary = primary_dimension(axis)
        if primary is None:
            raise InvalidAxisContext(node_id)

        def resolve_one(dimension: Dimension) -> ResolvedDimension:
            role = AxisRole.PRIMARY if dimension == primary else AxisRole.COUNTER
            return ResolvedDimension(dimension, role, sizing.mode_for(dimension))

        return resolve_one(Dimension.HORIZONTAL), resolve_one(Dimension.VERTICAL)

    def declarations(
        self,
        node: DesignNode,
        parent: LayoutDescriptor | None,
    ) -> list[tuple[str, str]]:
        """
        Sizing declarations for a child of an auto layout container.

        Returns:
            Ordered (property, value) pairs, horizontal dimension first
        """
        sizing = node.sizing or SizingDescriptor()
        resolved = self.resolve(parent, sizing, node.id)
        extents = {Dimension.HORIZONTAL: node.width, Dimension.VERTICAL: node.height}

        pairs: list[tuple[str, str]] = []
        for dim in resolved:
            pairs.extend(self._dimension_declarations(dim, sizing, extents[dim.dimension]))
        return pairs

    def dropped_constraints(self, sizing: SizingDescriptor) -> list[str]:
        """Min/max constraints that are not emitted because their dimension hugs."""
        dropped: list[str] = []
        for dimension in (Dimension.HORIZONTAL, Dimension.VERTICAL):
            if sizing.mode_for(dimension) != SizingMode.HUG:
                continue
            if sizing.min_for(dimension) is not None:
                dropped.append(_MIN_PROPERTY[dimension])
            if sizing.max_for(dimension) is not None:
                dropped.append(_MAX_PROPERTY[dimension])
        return dropped

    def _dimension_declarations(
        self,
        dim: ResolvedDimension,
        sizing: SizingDescriptor,
        extent: float,
    ) -> list[tuple[str, str]]:
        if dim.mode == SizingMode.HUG:
            return []

        size_property = _SIZE_PROPERTY[dim.dimension]
        min_value = sizing.min_for(dim.dimension)
        max_value = sizing.max_for(dim.dimension)
        pairs: list[tuple[str, str]] = []
        max_emitted = False

        if dim.mode == SizingMode.FIXED:
            pairs.append((size_property, px(extent)))
            if dim.role == AxisRole.PRIMARY:
                pairs.append(("flex-shrink", "0"))
        elif dim.role == AxisRole.PRIMARY:
            pairs.append(("flex-grow", "1"))
            pairs.append(("flex-basis", "0"))
        elif max_value is not None:
            # stretch ignores an explicit max in some renderers
            pairs.append((size_property, "100%"))
            pairs.append((_MAX_PROPERTY[dim.dimension], px(max_value)))
            max_emitted = True
        else:
            pairs.append(("align-self", "stretch"))

        if min_value is not None:
            pairs.append((_MIN_PROPERTY[dim.dimension], px(min_value)))
        if max_value is not None and not max_emitted:
            pairs.append((_MAX_PROPERTY[dim.dimension], px(max_value)))
        return pairs
