"""
Positioning path - absolutely positioned children.

Children of a container without an axis, and children explicitly taken
out of auto layout, are pinned with offsets derived from their
constraints and bounding box.
"""

from __future__ import annotations

from chuk_mcp_figma_css.constants import Constraint, SizingMode
from chuk_mcp_figma_css.models.node import DesignNode, PinConstraints
from chuk_mcp_figma_css.tokens.values import number, px


def _centered(offset: float) -> str:
    if round(offset, 3) == 0:
        return "50%"
    sign = "+" if offset > 0 else "-"
    return f"calc(50% {sign} {number(abs(offset))}px)"


def _axis_pairs(
    constraint: Constraint,
    start: float,
    extent: float,
    parent_extent: float,
    start_property: str,
    end_property: str,
    size_property: str,
    hug: bool,
) -> tuple[list[tuple[str, str]], bool]:
    """Offsets and size along one axis; also reports whether it is centered."""
    end = parent_extent - start - extent
    pairs: list[tuple[str, str]] = []
    if constraint == Constraint.START:
        pairs.append((start_property, px(start)))
    elif constraint == Constraint.END:
        pairs.append((end_property, px(end)))
    elif constraint == Constraint.STRETCH:
        pairs.append((start_property, px(start)))
        pairs.append((end_property, px(end)))
        return pairs, False
    else:
        pairs.append((start_property, _centered(start + extent / 2 - parent_extent / 2)))
    if not hug:
        pairs.append((size_property, px(extent)))
    return pairs, constraint == Constraint.CENTER


def positioning_declarations(node: DesignNode, parent: DesignNode) -> list[tuple[str, str]]:
    """
    Absolute positioning declarations for a child.

    Args:
        node: The positioned child
        parent: Its parent container (for end/center offsets)

    Returns:
        Ordered (property, value) pairs
    """
    sizing = node.sizing
    constraints = sizing.constraints if sizing else PinConstraints()
    hug_x = sizing is not None and sizing.horizontal == SizingMode.HUG
    hug_y = sizing is not None and sizing.vertical == SizingMode.HUG

    pairs: list[tuple[str, str]] = [("position", "absolute")]
    horizontal, center_x = _axis_pairs(
        constraints.horizontal, node.x, node.width, parent.width, "left", "right", "width", hug_x
    )
    vertical, center_y = _axis_pairs(
        constraints.vertical, node.y, node.height, parent.height, "top", "bottom", "height", hug_y
    )
    pairs.extend(horizontal)
    pairs.extend(vertical)

    if center_x and center_y:
        pairs.append(("transform", "translate(-50%, -50%)"))
    elif center_x:
        pairs.append(("transform", "translateX(-50%)"))
    elif center_y:
        pairs.append(("transform", "translateY(-50%)"))
    return pairs
