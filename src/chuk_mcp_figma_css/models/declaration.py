"""
Output models - layer-tagged declarations and mode overrides.

The engine emits structured declarations, not stylesheet text. Turning
them into utility class names, stylesheet rules or inline styles is the
job of a downstream renderer.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from chuk_mcp_figma_css.constants import SelectorKind, StyleLayer, TokenOrigin


class StyleDeclaration(BaseModel):
    """
    A CSS property/value pair tagged with its output layer.

    When ``token`` is set, ``value`` holds the rendered ``var()`` reference
    and ``fallback`` the literal carried for external tokens.
    """

    property: str = Field(..., description="CSS property name")
    value: str = Field(..., description="Literal value or rendered token reference")
    layer: StyleLayer = Field(..., description="Output layer")
    token: str | None = Field(None, description="Referenced token name")
    token_origin: TokenOrigin | None = Field(None, description="Origin of the referenced token")
    fallback: str | None = Field(None, description="Fallback literal for external tokens")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_fallback(self) -> StyleDeclaration:
        """External token references carry a fallback, local ones never do."""
        if self.token_origin == TokenOrigin.EXTERNAL and self.fallback is None:
            raise ValueError(f"'{self.property}' references external token '{self.token}' without fallback")
        if self.token_origin == TokenOrigin.LOCAL and self.fallback is not None:
            raise ValueError(f"'{self.property}' references local token '{self.token}' with a fallback")
        if self.token_origin is not None and self.token is None:
            raise ValueError(f"'{self.property}' has a token origin but no token")
        return self

    def __str__(self) -> str:
        return f"{self.property}: {self.value}"


class ResolvedRun(BaseModel):
    """Declarations for one styled text run."""

    index: int
    text: str
    declarations: tuple[StyleDeclaration, ...] = ()

    model_config = {"frozen": True}


class ResolvedNode(BaseModel):
    """Declarations produced for one design node."""

    node_id: str
    name: str = ""
    tag: str = "div"
    depth: int = 0
    declarations: tuple[StyleDeclaration, ...] = ()
    runs: tuple[ResolvedRun, ...] = ()

    model_config = {"frozen": True}

    def get(self, property_name: str) -> StyleDeclaration | None:
        """Get the declaration for a property, if any."""
        for declaration in self.declarations:
            if declaration.property == property_name:
                return declaration
        return None

    def by_layer(self, layer: StyleLayer) -> list[StyleDeclaration]:
        return [d for d in self.declarations if d.layer == layer]

    def as_dict(self) -> dict[str, str]:
        """Property -> value mapping."""
        return {d.property: d.value for d in self.declarations}


class ModeSelector(BaseModel):
    """
    Conditional wrapper for a mode override.

    ``specificity`` is the (id, class, type) specificity of ``selector``.
    A manual attribute selector such as ``:root[data-theme="dark"]`` is
    (0, 2, 0) and therefore overrides the automatic ``:root`` (0, 1, 0)
    inside a ``prefers-color-scheme`` query.
    """

    kind: SelectorKind
    media: str | None = Field(None, description="Media condition, e.g. '(min-width: 768px)'")
    selector: str = Field(":root", description="Selector the override applies under")
    specificity: tuple[int, int, int] = (0, 1, 0)

    model_config = {"frozen": True}


class NodeOverride(BaseModel):
    """Declarations of one node that differ in a mode."""

    node_id: str
    declarations: tuple[StyleDeclaration, ...]

    model_config = {"frozen": True}


class ModeOverride(BaseModel):
    """Everything that changes when a non-default mode is active."""

    collection: str
    mode: str
    selectors: tuple[ModeSelector, ...]
    token_definitions: tuple[StyleDeclaration, ...] = ()
    nodes: tuple[NodeOverride, ...] = ()

    model_config = {"frozen": True}

    def is_empty(self) -> bool:
        return not self.token_definitions and not self.nodes
