"""
Config loader - discovers and loads engine settings and mode rules.

Configuration can come from:
1. Built-in library (shipped with package)
2. Project config (user's project/config directory)

A project file replaces the library file of the same name.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from chuk_mcp_figma_css.models.config import EngineConfig, ModeRuleTable

logger = logging.getLogger(__name__)

ENGINE_CONFIG_FILE = "engine.yaml"
MODE_RULES_FILE = "mode_rules.yaml"


class ConfigLoader:
    """
    Loads engine configuration from YAML files.

    Missing or invalid files fall back to the built-in defaults.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the config loader.

        Args:
            library_path: Path to built-in config library
            project_path: Path to project config directory
        """
        self.library_path = library_path or (Path(__file__).parent / "library")
        self.project_path = project_path
        self._cache: dict[str, Any] = {}

    def get_engine_config(self) -> EngineConfig:
        """Get the engine settings (project first, then library, then defaults)."""
        if ENGINE_CONFIG_FILE not in self._cache:
            data = self._load_data(ENGINE_CONFIG_FILE)
            self._cache[ENGINE_CONFIG_FILE] = self._parse(EngineConfig, data, ENGINE_CONFIG_FILE)
        return self._cache[ENGINE_CONFIG_FILE]

    def get_mode_rules(self) -> ModeRuleTable:
        """Get the mode classification table."""
        if MODE_RULES_FILE not in self._cache:
            data = self._load_data(MODE_RULES_FILE)
            self._cache[MODE_RULES_FILE] = self._parse(ModeRuleTable, data, MODE_RULES_FILE)
        return self._cache[MODE_RULES_FILE]

    def source_of(self, filename: str) -> Path | None:
        """Which file a setting is read from (None means built-in defaults)."""
        if self.project_path:
            project_file = self.project_path / filename
            if project_file.exists():
                return project_file
        library_file = self.library_path / filename
        if library_file.exists():
            return library_file
        return None

    def copy_to_project(self, filename: str) -> Path | None:
        """
        Copy a library config file to the project for customization.

        Args:
            filename: Config file name (e.g. 'mode_rules.yaml')

        Returns:
            Path to copied file, or None if not found
        """
        if not self.project_path:
            raise ValueError("No project path configured")

        library_file = self.library_path / filename
        if not library_file.exists():
            return None

        self.project_path.mkdir(parents=True, exist_ok=True)

        dest_file = self.project_path / filename
        if dest_file.exists():
            raise ValueError(f"Config already exists in project: {filename}")

        dest_file.write_text(library_file.read_text())
        self._cache.pop(filename, None)
        return dest_file

    def clear_cache(self) -> None:
        """Clear the config cache."""
        self._cache.clear()

    def _load_data(self, filename: str) -> dict[str, Any] | None:
        path = self.source_of(filename)
        if path is None:
            return None
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Could not read %s, using defaults: %s", path, e)
            return None
        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning("%s does not contain a mapping, using defaults", path)
            return None
        return data

    def _parse(self, model: type[Any], data: dict[str, Any] | None, filename: str) -> Any:
        if data is None:
            return model()
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.warning("Invalid %s, using defaults: %s", filename, e)
            return model()
