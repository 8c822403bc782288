"""
Design node model - the normalized input tree.

A DesignNode is what the upstream extractor hands over: an already
normalized, JSON-serializable view of a Figma node with its layout,
sizing, visual and text descriptors. The engine only reads these.
"""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, Field, field_validator, model_validator

from chuk_mcp_figma_css.constants import (
    AxisMode,
    Constraint,
    CounterAlign,
    Dimension,
    NodeKind,
    Positioning,
    PrimaryAlign,
    SizingMode,
)


class Padding(BaseModel):
    """Padding per side, in px."""

    top: float = Field(0.0, ge=0)
    right: float = Field(0.0, ge=0)
    bottom: float = Field(0.0, ge=0)
    left: float = Field(0.0, ge=0)

    model_config = {"frozen": True}

    def is_zero(self) -> bool:
        return not (self.top or self.right or self.bottom or self.left)


class LayoutDescriptor(BaseModel):
    """
    Auto layout settings of a container.

    Present only on containers. An axis of ``none`` means the container
    does not lay out its children; they are positioned absolutely.
    """

    axis: AxisMode = Field(AxisMode.NONE, description="Layout direction")
    primary_align: PrimaryAlign = Field(PrimaryAlign.START, description="Primary axis alignment")
    counter_align: CounterAlign = Field(CounterAlign.START, description="Counter axis alignment")
    gap: float = Field(0.0, ge=0, description="Spacing between children (px)")
    counter_gap: float | None = Field(
        None, ge=0, description="Spacing between wrapped rows/columns (px)"
    )
    padding: Padding = Field(default_factory=Padding)
    wrap: bool = Field(False, description="Children wrap onto new lines")
    clips_content: bool = Field(False, description="Content outside the frame is clipped")

    model_config = {"frozen": True}


class PinConstraints(BaseModel):
    """How an absolutely positioned child is pinned inside its parent."""

    horizontal: Constraint = Constraint.START
    vertical: Constraint = Constraint.START

    model_config = {"frozen": True}


class SizingDescriptor(BaseModel):
    """
    Sizing of a child inside its parent container.

    Present only when the node has a parent container.
    """

    horizontal: SizingMode = Field(SizingMode.FIXED, description="Horizontal sizing mode")
    vertical: SizingMode = Field(SizingMode.FIXED, description="Vertical sizing mode")
    min_width: float | None = Field(None, ge=0)
    max_width: float | None = Field(None, ge=0)
    min_height: float | None = Field(None, ge=0)
    max_height: float | None = Field(None, ge=0)
    positioning: Positioning = Field(
        Positioning.AUTO, description="Absolute children leave the auto layout flow"
    )
    constraints: PinConstraints = Field(default_factory=PinConstraints)

    model_config = {"frozen": True}

    def mode_for(self, dimension: Dimension) -> SizingMode:
        """Get the sizing mode of one dimension."""
        if dimension == Dimension.HORIZONTAL:
            return self.horizontal
        return self.vertical

    def min_for(self, dimension: Dimension) -> float | None:
        if dimension == Dimension.HORIZONTAL:
            return self.min_width
        return self.min_height

    def max_for(self, dimension: Dimension) -> float | None:
        if dimension == Dimension.HORIZONTAL:
            return self.max_width
        return self.max_height


class Stroke(BaseModel):
    """Border stroke."""

    color: str
    weight: float = Field(1.0, ge=0)
    style: str = Field("solid", description="solid, dashed or dotted")

    model_config = {"frozen": True}


class Shadow(BaseModel):
    """Drop or inner shadow."""

    x: float = 0.0
    y: float = 0.0
    blur: float = Field(0.0, ge=0)
    spread: float = 0.0
    color: str = "rgba(0, 0, 0, 0.25)"
    inner: bool = False

    model_config = {"frozen": True}


class VisualDescriptor(BaseModel):
    """Fills, strokes, corners and effects."""

    fill: str | None = Field(None, description="Solid fill color")
    stroke: Stroke | None = None
    corner_radius: float | None = Field(None, ge=0)
    corner_radii: tuple[float, float, float, float] | None = Field(
        None, description="Per-corner radius: top-left, top-right, bottom-right, bottom-left"
    )
    shadows: list[Shadow] = Field(default_factory=list)
    opacity: float = Field(1.0, ge=0.0, le=1.0)
    blend_mode: str | None = Field(None, description="CSS mix-blend-mode value")
    blur: float | None = Field(None, ge=0, description="Layer blur radius (px)")

    model_config = {"frozen": True}


class TextRun(BaseModel):
    """A contiguous span of text with style overrides."""

    text: str
    font_size: float | None = None
    font_weight: int | None = None
    font_style: str | None = None
    color: str | None = None
    text_decoration: str | None = None

    model_config = {"frozen": True}


class TextDescriptor(BaseModel):
    """Base typography of a text node plus its styled runs."""

    content: str = ""
    font_family: str | None = None
    font_size: float | None = Field(None, gt=0)
    font_weight: int | None = Field(None, ge=1, le=1000)
    line_height: float | None = Field(None, gt=0, description="Line height (px)")
    letter_spacing: float | None = Field(None, description="Letter spacing (px)")
    text_align: str | None = None
    color: str | None = None
    runs: list[TextRun] = Field(default_factory=list)

    model_config = {"frozen": True}


class DesignNode(BaseModel):
    """
    A node of the design tree.

    Invariant: ``layout`` and ``children`` only appear on containers.
    """

    id: str = Field(..., description="Node identifier")
    name: str = Field("", description="Layer name from the design file")
    kind: NodeKind = Field(..., description="container, text, image or vector")

    # Bounding box, relative to the parent
    width: float = Field(0.0, ge=0)
    height: float = Field(0.0, ge=0)
    x: float = 0.0
    y: float = 0.0

    layout: LayoutDescriptor | None = None
    sizing: SizingDescriptor | None = None
    visual: VisualDescriptor | None = None
    text: TextDescriptor | None = None

    # CSS property -> token name
    bindings: dict[str, str] = Field(
        default_factory=dict, description="Explicit token bindings per CSS property"
    )
    children: list[DesignNode] = Field(default_factory=list)

    model_config = {"frozen": True}

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Node ids must be non-empty."""
        if not v.strip():
            raise ValueError("Node id must not be empty")
        return v

    @model_validator(mode="after")
    def check_container_fields(self) -> DesignNode:
        """Only containers carry layout and children."""
        if self.kind != NodeKind.CONTAINER:
            if self.layout is not None:
                raise ValueError(f"Node '{self.id}' is a {self.kind.value}; only containers have layout")
            if self.children:
                raise ValueError(f"Node '{self.id}' is a {self.kind.value}; only containers have children")
        return self

    @property
    def axis(self) -> AxisMode:
        """Layout axis, ``none`` for containers without auto layout."""
        return self.layout.axis if self.layout else AxisMode.NONE

    def walk(self) -> Iterator[DesignNode]:
        """Iterate the subtree in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, node_id: str) -> DesignNode | None:
        """Find a node in this subtree by id."""
        for node in self.walk():
            if node.id == node_id:
                return node
        return None
