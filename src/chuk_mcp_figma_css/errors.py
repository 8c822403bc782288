"""
Exceptions raised by the style resolution engine.

Only caller errors are raised. Data quality problems (ambiguous default
modes, broken token aliases, unknown properties) are recorded as
diagnostics instead.
"""

from __future__ import annotations

from chuk_mcp_figma_css.constants import ErrorMessages


class StyleEngineError(Exception):
    """Base class for engine errors."""


class InvalidAxisContext(StyleEngineError):
    """Axis resolution requested for a child whose parent has no layout axis."""

    def __init__(self, node: str):
        super().__init__(ErrorMessages.INVALID_AXIS_CONTEXT.format(node=node))
        self.node = node


class EmptyModeCollection(StyleEngineError):
    """A mode collection with zero modes was passed to the classifier."""

    def __init__(self, name: str):
        super().__init__(ErrorMessages.EMPTY_MODE_COLLECTION.format(name=name))
        self.name = name
