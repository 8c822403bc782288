"""
Configuration - engine settings and mode rules from YAML.
"""

from chuk_mcp_figma_css.config.loader import ENGINE_CONFIG_FILE, MODE_RULES_FILE, ConfigLoader

__all__ = [
    "ENGINE_CONFIG_FILE",
    "MODE_RULES_FILE",
    "ConfigLoader",
]
