"""
Property placement classifier - decides the output layer of a declaration.

Decision order (first match wins):
1. Structural property -> structural-utility. Layout mechanics are never
   replaced by design tokens; only gap/padding may be token-backed, and
   only when the deployment's spacing policy says so.
2. Property outside the known set -> component-rule, literal passthrough.
3. Value equals a bound or promoted token's resolved value -> token-reference,
   with a fallback literal when the token comes from an external library.
4. Component visual property -> component-rule literal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chuk_mcp_figma_css.constants import (
    COMPONENT_VISUAL_PROPERTIES,
    SPACING_PROPERTIES,
    STRUCTURAL_PROPERTIES,
    SpacingTokenPolicy,
    StyleLayer,
    TokenOrigin,
)
from chuk_mcp_figma_css.models.declaration import StyleDeclaration
from chuk_mcp_figma_css.models.tokens import TokenReference
from chuk_mcp_figma_css.tokens.table import TokenTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    """Classifier result for one property/value pair."""

    layer: StyleLayer
    value: str
    token: str | None = None
    token_origin: TokenOrigin | None = None
    fallback: str | None = None
    supported: bool = True

    def to_declaration(self, property_name: str) -> StyleDeclaration:
        return StyleDeclaration(
            property=property_name,
            value=self.value,
            layer=self.layer,
            token=self.token,
            token_origin=self.token_origin,
            fallback=self.fallback,
        )


def is_known_property(property_name: str) -> bool:
    return property_name in STRUCTURAL_PROPERTIES or property_name in COMPONENT_VISUAL_PROPERTIES


class PropertyClassifier:
    """
    Classifies property/value pairs into output layers.

    The spacing policy is fixed per classifier so one output never mixes
    literal and token-backed spacing.
    """

    def __init__(self, spacing_policy: SpacingTokenPolicy = SpacingTokenPolicy.LITERAL):
        self.spacing_policy = spacing_policy

    def classify(
        self,
        property_name: str,
        value: str,
        table: TokenTable | None = None,
        bound_token: str | None = None,
    ) -> Placement:
        """
        Classify one declaration.

        Args:
            property_name: CSS property
            value: Literal value
            table: Token snapshot for the active modes
            bound_token: Token explicitly bound to this property, if any

        Returns:
            Placement with layer and (possibly rewritten) value
        """
        if property_name in STRUCTURAL_PROPERTIES:
            if self.spacing_policy == SpacingTokenPolicy.TOKEN_BACKED and property_name in SPACING_PROPERTIES:
                token = self._find_token(property_name, value, table, bound_token)
                if token is not None and table is not None:
                    return self._token_placement(StyleLayer.STRUCTURAL_UTILITY, token, table)
            return Placement(StyleLayer.STRUCTURAL_UTILITY, value)

        if property_name not in COMPONENT_VISUAL_PROPERTIES:
            logger.debug("Unsupported property %s passed through", property_name)
            return Placement(StyleLayer.COMPONENT_RULE, value, supported=False)

        token = self._find_token(property_name, value, table, bound_token)
        if token is not None and table is not None:
            return self._token_placement(StyleLayer.TOKEN_REFERENCE, token, table)

        return Placement(StyleLayer.COMPONENT_RULE, value)

    def declaration(
        self,
        property_name: str,
        value: str,
        table: TokenTable | None = None,
        bound_token: str | None = None,
    ) -> StyleDeclaration:
        """Classify and build the declaration in one step."""
        return self.classify(property_name, value, table, bound_token).to_declaration(property_name)

    def _find_token(
        self,
        property_name: str,
        value: str,
        table: TokenTable | None,
        bound_token: str | None,
    ) -> TokenReference | None:
        if table is None:
            return None
        if bound_token is not None:
            token = table.get(bound_token)
            if token is not None and table.resolve(token.name):
                return token
        return table.match(value, property_name)

    def _token_placement(
        self, layer: StyleLayer, token: TokenReference, table: TokenTable
    ) -> Placement:
        reference, fallback = table.reference(token)
        return Placement(
            layer=layer,
            value=reference,
            token=token.name,
            token_origin=token.origin,
            fallback=fallback,
        )
