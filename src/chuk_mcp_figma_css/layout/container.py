"""
Container layout - a container's own flexbox declarations.
"""

from __future__ import annotations

from chuk_mcp_figma_css.constants import AxisMode, CounterAlign, Positioning, PrimaryAlign
from chuk_mcp_figma_css.models.node import DesignNode
from chuk_mcp_figma_css.tokens.values import padding_shorthand, px

_JUSTIFY_CONTENT: dict[PrimaryAlign, str] = {
    PrimaryAlign.START: "flex-start",
    PrimaryAlign.CENTER: "center",
    PrimaryAlign.END: "flex-end",
    PrimaryAlign.SPACE_BETWEEN: "space-between",
}

# align-items defaults to stretch in CSS, so start is always written out
_ALIGN_ITEMS: dict[CounterAlign, str] = {
    CounterAlign.START: "flex-start",
    CounterAlign.CENTER: "center",
    CounterAlign.END: "flex-end",
    CounterAlign.BASELINE: "baseline",
}


def has_absolute_children(node: DesignNode) -> bool:
    """Whether any child is taken out of the flow."""
    if node.axis == AxisMode.NONE:
        return bool(node.children)
    return any(
        child.sizing is not None and child.sizing.positioning == Positioning.ABSOLUTE
        for child in node.children
    )


def container_declarations(node: DesignNode) -> list[tuple[str, str]]:
    """
    Layout declarations of a container itself.

    Auto layout containers become flex containers. Containers without an
    axis only establish a positioning context for their children.
    """
    layout = node.layout
    pairs: list[tuple[str, str]] = []

    if layout is not None and layout.axis != AxisMode.NONE:
        is_row = layout.axis == AxisMode.ROW
        pairs.append(("display", "flex"))
        pairs.append(("flex-direction", "row" if is_row else "column"))
        if layout.wrap:
            pairs.append(("flex-wrap", "wrap"))
        if layout.primary_align != PrimaryAlign.START:
            pairs.append(("justify-content", _JUSTIFY_CONTENT[layout.primary_align]))
        pairs.append(("align-items", _ALIGN_ITEMS[layout.counter_align]))

        # space-between distributes the free space itself; the gap is ignored
        primary_gap = layout.gap if layout.primary_align != PrimaryAlign.SPACE_BETWEEN else 0
        if layout.wrap and layout.counter_gap is not None:
            if primary_gap:
                pairs.append(("column-gap" if is_row else "row-gap", px(primary_gap)))
            if layout.counter_gap:
                pairs.append(("row-gap" if is_row else "column-gap", px(layout.counter_gap)))
        elif primary_gap:
            pairs.append(("gap", px(primary_gap)))

    if layout is not None and not layout.padding.is_zero():
        p = layout.padding
        pairs.append(("padding", padding_shorthand(p.top, p.right, p.bottom, p.left)))

    if has_absolute_children(node):
        pairs.append(("position", "relative"))

    if layout is not None and layout.clips_content:
        pairs.append(("overflow", "hidden"))

    return pairs
