"""
Property placement - structural-utility, token-reference or component-rule.
"""

from chuk_mcp_figma_css.placement.classifier import Placement, PropertyClassifier, is_known_property

__all__ = [
    "Placement",
    "PropertyClassifier",
    "is_known_property",
]
