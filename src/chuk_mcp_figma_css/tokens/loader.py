"""
Token loader - discovers and loads materialized token sets.

Token sets are YAML (or JSON) files in a tokens directory:

    name: brand
    collections:
      - name: Theme
        modes: [Light, Dark]
    tokens:
      color/surface:
        collection: Theme
        category: color
        default_mode: Light
        modes: {Light: "#ffffff", Dark: "#111111"}
      color/card:
        value: "{color/surface}"     # alias

The loader is the pre-fetch boundary: everything is read and validated
before a resolution pass starts.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from chuk_mcp_figma_css.models.tokens import ModeCollection, TokenReference, TokenSet

logger = logging.getLogger(__name__)

_ALIAS_VALUE = re.compile(r"^\{([^{}]+)\}$")
_SUFFIXES = (".yaml", ".yml", ".json")


class TokenSetMetadata:
    """Lightweight metadata for listing token sets."""

    def __init__(self, name: str, path: Path, description: str, token_count: int, collections: list[str]):
        self.name = name
        self.path = path
        self.description = description
        self.token_count = token_count
        self.collections = collections

    def __repr__(self) -> str:
        return f"TokenSetMetadata({self.name!r}, {self.token_count} tokens)"


class TokenLoader:
    """
    Discovers and loads token sets from a directory.

    Loaded sets are cached by name until ``clear_cache`` is called.
    """

    def __init__(self, tokens_dir: Path | None = None):
        """
        Initialize the token loader.

        Args:
            tokens_dir: Directory containing token set files
        """
        self.tokens_dir = tokens_dir
        self._cache: dict[str, TokenSet] = {}

    def list_token_sets(self) -> list[TokenSetMetadata]:
        """List all token sets in the tokens directory."""
        result: list[TokenSetMetadata] = []
        for path in self._files():
            token_set = self._load_file(path)
            if token_set:
                result.append(
                    TokenSetMetadata(
                        name=token_set.name,
                        path=path,
                        description=token_set.description,
                        token_count=len(token_set.tokens),
                        collections=[c.name for c in token_set.collections],
                    )
                )
        return sorted(result, key=lambda m: m.name)

    def get_token_set(self, name: str) -> TokenSet | None:
        """
        Get a token set by name.

        Args:
            name: File stem of the token set

        Returns:
            TokenSet if found, None otherwise
        """
        if name in self._cache:
            return self._cache[name]

        for path in self._files():
            if path.stem == name:
                token_set = self._load_file(path)
                if token_set:
                    self._cache[name] = token_set
                    return token_set
        return None

    def save_token_set(self, token_set: TokenSet) -> Path:
        """Write a token set as YAML into the tokens directory."""
        if not self.tokens_dir:
            raise ValueError("No tokens directory configured")
        self.tokens_dir.mkdir(parents=True, exist_ok=True)
        path = self.tokens_dir / f"{token_set.name}.yaml"
        data = token_set.model_dump(mode="json", exclude_defaults=True)
        with open(path, "w") as f:
            yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)
        self._cache.pop(token_set.name, None)
        return path

    def parse(self, data: dict[str, Any], default_name: str = "tokens") -> TokenSet:
        """Parse a token set from already-decoded YAML/JSON data."""
        collections = [
            ModeCollection.model_validate(c) for c in data.get("collections", []) or []
        ]
        tokens_data = data.get("tokens", []) or []
        if isinstance(tokens_data, dict):
            tokens_data = [
                {"name": name, **(spec if isinstance(spec, dict) else {"value": spec})}
                for name, spec in tokens_data.items()
            ]
        tokens = [self._parse_token(t) for t in tokens_data]
        return TokenSet(
            name=data.get("name", default_name),
            description=data.get("description", ""),
            collections=collections,
            tokens=tokens,
        )

    def clear_cache(self) -> None:
        """Clear the token set cache."""
        self._cache.clear()

    def _files(self) -> list[Path]:
        if not self.tokens_dir or not self.tokens_dir.exists():
            return []
        return sorted(p for p in self.tokens_dir.iterdir() if p.suffix in _SUFFIXES)

    def _load_file(self, path: Path) -> TokenSet | None:
        """Load a token set from a file; invalid files are logged and skipped."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f)  # JSON is valid YAML
            if not isinstance(data, dict):
                raise ValueError("token set file must contain a mapping")
            return self.parse(data, default_name=path.stem)
        except (OSError, yaml.YAMLError, ValidationError, ValueError) as e:
            logger.warning("Skipping token set %s: %s", path, e)
            return None

    def _parse_token(self, data: dict[str, Any]) -> TokenReference:
        """Parse one token, turning ``{other/token}`` values into aliases."""
        value = data.get("value")
        if isinstance(value, str):
            match = _ALIAS_VALUE.match(value.strip())
            if match and not data.get("alias_of"):
                data = {**data, "value": "", "alias_of": match.group(1).strip()}
        elif value is not None:
            data = {**data, "value": str(value)}
        if "modes" in data and data["modes"]:
            data = {**data, "modes": {str(k): str(v) for k, v in data["modes"].items()}}
        return TokenReference.model_validate(data)
