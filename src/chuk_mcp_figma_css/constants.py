"""
Constants and enums for the style resolution engine.

No magic strings - use enums and frozensets for constrained values.
"""

from enum import Enum


class NodeKind(str, Enum):
    """Kind of design node."""

    CONTAINER = "container"
    TEXT = "text"
    IMAGE = "image"
    VECTOR = "vector"


class AxisMode(str, Enum):
    """Auto layout direction of a container."""

    ROW = "row"
    COLUMN = "column"
    NONE = "none"  # Children are positioned absolutely


class SizingMode(str, Enum):
    """How a child sizes itself along one dimension."""

    FIXED = "fixed"
    FILL = "fill"
    HUG = "hug"


class AxisRole(str, Enum):
    """Role of a child dimension relative to its parent's layout direction."""

    PRIMARY = "primary"
    COUNTER = "counter"


class Dimension(str, Enum):
    """Physical dimension of a node."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class PrimaryAlign(str, Enum):
    """Alignment along the primary axis."""

    START = "start"
    CENTER = "center"
    END = "end"
    SPACE_BETWEEN = "space-between"


class CounterAlign(str, Enum):
    """Alignment along the counter axis."""

    START = "start"
    CENTER = "center"
    END = "end"
    BASELINE = "baseline"


class Positioning(str, Enum):
    """Whether a child participates in its parent's flow."""

    AUTO = "auto"
    ABSOLUTE = "absolute"


class Constraint(str, Enum):
    """Pin constraint used on the positioning path."""

    START = "start"
    END = "end"
    CENTER = "center"
    STRETCH = "stretch"


class StyleLayer(str, Enum):
    """Output layer a declaration belongs to."""

    STRUCTURAL_UTILITY = "structural-utility"
    TOKEN_REFERENCE = "token-reference"
    COMPONENT_RULE = "component-rule"


class TokenOrigin(str, Enum):
    """Where a token is defined."""

    LOCAL = "local"
    EXTERNAL = "external"


class TokenCategory(str, Enum):
    """Coarse value category of a token."""

    COLOR = "color"
    SPACING = "spacing"
    RADIUS = "radius"
    TYPOGRAPHY = "typography"
    SHADOW = "shadow"
    OPACITY = "opacity"
    OTHER = "other"


class ModeClassification(str, Enum):
    """What a mode collection varies over."""

    BREAKPOINT = "breakpoint"
    THEME = "theme"
    UNKNOWN = "unknown"


class SpacingTokenPolicy(str, Enum):
    """
    Deployment-wide policy for token-matched gap/padding values.

    Either way the declaration stays in the structural layer; the policy
    only decides whether the value is rewritten to a token reference.
    """

    LITERAL = "literal"
    TOKEN_BACKED = "token-backed"


class SelectorKind(str, Enum):
    """Kind of conditional wrapper for a mode override."""

    MIN_WIDTH = "min-width"
    COLOR_SCHEME = "color-scheme"
    ATTRIBUTE = "attribute"


# Layout mechanics - never substituted for component tokens
STRUCTURAL_PROPERTIES: frozenset[str] = frozenset(
    {
        "display",
        "flex-direction",
        "flex-wrap",
        "justify-content",
        "align-items",
        "align-content",
        "align-self",
        "gap",
        "row-gap",
        "column-gap",
        "padding",
        "flex-grow",
        "flex-basis",
        "flex-shrink",
        "position",
        "top",
        "right",
        "bottom",
        "left",
        "transform",
        "overflow",
        "width",
        "height",
        "min-width",
        "max-width",
        "min-height",
        "max-height",
    }
)

# Structural properties whose values may be token-backed
SPACING_PROPERTIES: frozenset[str] = frozenset({"gap", "row-gap", "column-gap", "padding"})

# Component-scoped visual properties
COMPONENT_VISUAL_PROPERTIES: frozenset[str] = frozenset(
    {
        "background-color",
        "background",
        "border-width",
        "border-style",
        "border-color",
        "border-radius",
        "box-shadow",
        "color",
        "font-family",
        "font-size",
        "font-weight",
        "font-style",
        "line-height",
        "letter-spacing",
        "text-align",
        "text-decoration",
        "opacity",
        "mix-blend-mode",
        "filter",
        "transition",
    }
)

# Which token categories may stand in for a property's value
PROPERTY_TOKEN_CATEGORIES: dict[str, frozenset[str]] = {
    "background-color": frozenset({"color"}),
    "background": frozenset({"color"}),
    "border-color": frozenset({"color"}),
    "color": frozenset({"color"}),
    "border-width": frozenset({"spacing", "other"}),
    "border-radius": frozenset({"radius", "spacing"}),
    "box-shadow": frozenset({"shadow"}),
    "font-family": frozenset({"typography"}),
    "font-size": frozenset({"typography"}),
    "font-weight": frozenset({"typography"}),
    "line-height": frozenset({"typography"}),
    "letter-spacing": frozenset({"typography"}),
    "opacity": frozenset({"opacity"}),
    "gap": frozenset({"spacing"}),
    "row-gap": frozenset({"spacing"}),
    "column-gap": frozenset({"spacing"}),
    "padding": frozenset({"spacing"}),
}

# Named breakpoint thresholds used when a mode name carries no pixel value
DEFAULT_BREAKPOINT_THRESHOLDS: dict[str, int] = {
    "mobile": 0,
    "tablet": 768,
    "desktop": 1024,
}

# Environment variables the CLI uses to relocate project directories
TOKENS_DIR_ENV = "CHUK_FIGMA_CSS_TOKENS_DIR"
CONFIG_DIR_ENV = "CHUK_FIGMA_CSS_CONFIG_DIR"


class ErrorMessages:
    """Standardized error messages."""

    INVALID_AXIS_CONTEXT = "Node '{node}' has sizing data but its parent has no layout axis."
    EMPTY_MODE_COLLECTION = "Mode collection '{name}' has no modes."
    TOKEN_SET_NOT_FOUND = "Token set '{name}' not found."
    AMBIGUOUS_DEFAULT_MODE = (
        "Modes {modes} in collection '{name}' tie for default; using '{chosen}'."
    )
    UNRESOLVED_TOKEN_ALIAS = "Token '{name}' alias chain does not terminate ({chain})."
    UNSUPPORTED_PROPERTY = "Property '{property}' is not in the known property set."
