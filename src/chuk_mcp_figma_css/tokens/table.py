"""
Token tables - immutable per-mode lookup snapshots.

A TokenTable resolves every token once, for one selection of active
modes, and indexes the resolved literals for value matching. Tables are
never mutated after construction, so one table can be read from any
number of threads.

A TokenCache memoizes tables for a single resolution run. It is passed
into the engine explicitly; there is no process-wide cache.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from chuk_mcp_figma_css.constants import PROPERTY_TOKEN_CATEGORIES, TokenOrigin
from chuk_mcp_figma_css.models.tokens import ClassifiedModeCollection, TokenReference
from chuk_mcp_figma_css.tokens.values import normalize_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AliasIssue:
    """A token whose alias chain does not terminate."""

    token: str
    chain: tuple[str, ...]
    reason: str  # "cycle" or "dangling"
    fallback: str


class TokenTable:
    """
    Resolved tokens for one mode selection.

    Args:
        tokens: Token snapshot
        selection: Collection name -> active mode. Tokens of collections
            not in the selection use their own default value.
    """

    def __init__(
        self,
        tokens: Iterable[TokenReference],
        selection: Mapping[str, str] | None = None,
    ):
        self._tokens: Mapping[str, TokenReference] = MappingProxyType(
            {token.name: token for token in tokens}
        )
        self.selection: Mapping[str, str] = MappingProxyType(dict(selection or {}))

        issues: list[AliasIssue] = []
        resolved: dict[str, str] = {}
        for name in sorted(self._tokens):
            resolved[name] = self._resolve_chain(name, issues)
        self._resolved: Mapping[str, str] = MappingProxyType(resolved)
        self.alias_issues: tuple[AliasIssue, ...] = tuple(issues)

        index: dict[str, list[TokenReference]] = {}
        for name, literal in resolved.items():
            if literal:
                index.setdefault(normalize_value(literal), []).append(self._tokens[name])
        for candidates in index.values():
            # Local tokens win over library tokens, then name order
            candidates.sort(key=lambda t: (t.origin != TokenOrigin.LOCAL, t.name))
        self._index: Mapping[str, tuple[TokenReference, ...]] = MappingProxyType(
            {value: tuple(candidates) for value, candidates in index.items()}
        )

    def __len__(self) -> int:
        return len(self._tokens)

    def __contains__(self, name: object) -> bool:
        return name in self._tokens

    @property
    def tokens(self) -> list[TokenReference]:
        """Tokens in name order."""
        return [self._tokens[name] for name in sorted(self._tokens)]

    def get(self, name: str) -> TokenReference | None:
        return self._tokens.get(name)

    def resolve(self, name: str) -> str:
        """Resolved literal of a token; unknown tokens resolve to ``""``."""
        return self._resolved.get(name, "")

    def match(self, value: str, property_name: str | None = None) -> TokenReference | None:
        """
        Find the token whose resolved value equals a literal.

        When ``property_name`` is given, tokens with a category are only
        matched against properties that accept that category.
        """
        candidates = self._index.get(normalize_value(value), ())
        if property_name is None:
            return candidates[0] if candidates else None
        allowed = PROPERTY_TOKEN_CATEGORIES.get(property_name)
        for token in candidates:
            if token.category is None:
                return token
            if allowed is not None and token.category.value in allowed:
                return token
        return None

    def reference(self, token: TokenReference) -> tuple[str, str | None]:
        """
        Rendered reference and fallback for a token in this table.

        External tokens fall back to their literal in the active mode.
        """
        if token.is_external:
            fallback = self.resolve(token.name)
            return token.render_reference(fallback), fallback
        return token.render_reference(), None

    def _literal(self, token: TokenReference) -> str:
        if token.collection and token.collection in self.selection:
            return token.value_for(self.selection[token.collection])
        return token.value

    def _resolve_chain(self, name: str, issues: list[AliasIssue]) -> str:
        """Follow alias links to a terminal literal."""
        chain = [name]
        last_known = ""
        token = self._tokens[name]
        while True:
            literal = self._literal(token)
            if literal:
                last_known = literal
            if token.alias_of is None:
                return literal
            target_name = token.alias_of
            if target_name in chain:
                reason = "cycle"
            elif target_name not in self._tokens:
                reason = "dangling"
            else:
                chain.append(target_name)
                token = self._tokens[target_name]
                continue
            issues.append(AliasIssue(name, tuple([*chain, target_name]), reason, last_known))
            logger.debug("Alias chain of %s is %s, using %r", name, reason, last_known)
            return last_known


class TokenCache:
    """
    Per-run memo of token tables keyed by mode selection.

    Create one per resolution run (or per thread); it is not shared.
    """

    def __init__(self, tokens: Iterable[TokenReference]):
        self._tokens: tuple[TokenReference, ...] = tuple(tokens)
        self._tables: dict[tuple[tuple[str, str], ...], TokenTable] = {}

    @property
    def tokens(self) -> tuple[TokenReference, ...]:
        return self._tokens

    def table(self, selection: Mapping[str, str] | None = None) -> TokenTable:
        """Get (building once) the table for a mode selection."""
        key = tuple(sorted((selection or {}).items()))
        table = self._tables.get(key)
        if table is None:
            table = TokenTable(self._tokens, dict(key))
            self._tables[key] = table
        return table

    def default_table(self, collections: Iterable[ClassifiedModeCollection]) -> TokenTable:
        """Table with every collection at its default mode."""
        return self.table(default_selection(collections))

    def __len__(self) -> int:
        return len(self._tables)


def default_selection(collections: Iterable[ClassifiedModeCollection]) -> dict[str, str]:
    """Collection name -> default mode."""
    return {c.name: c.default_mode for c in collections}
