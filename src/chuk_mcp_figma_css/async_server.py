#!/usr/bin/env python3
"""
Async Figma CSS MCP Server using chuk-mcp-server

This server provides MCP tools that turn Figma-style design node trees into
layered CSS declarations. Layout becomes structural utilities, values that
match a design token become token references, and everything else becomes
component rules. Mode collections (breakpoints, themes) become override sets.

The server provides tools for:
- Resolving whole design trees and single axis/property decisions
- Listing, describing and saving token sets
- Classifying mode collections and previewing their selectors
"""

import logging
import os
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_figma_css.config import ConfigLoader
from chuk_mcp_figma_css.constants import CONFIG_DIR_ENV, TOKENS_DIR_ENV
from chuk_mcp_figma_css.tokens import TokenLoader
from chuk_mcp_figma_css.tools import register_resolution_tools, register_token_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-figma-css")

# Paths - standard project structure unless overridden from the command line
BASE_PATH = Path.cwd()
TOKENS_DIR = Path(os.environ.get(TOKENS_DIR_ENV) or BASE_PATH / "tokens")
CONFIG_DIR = Path(os.environ.get(CONFIG_DIR_ENV) or BASE_PATH / "config")
CONFIG_LIBRARY_PATH = Path(__file__).parent / "config" / "library"

# Create loaders
token_loader = TokenLoader(TOKENS_DIR)
config_loader = ConfigLoader(
    library_path=CONFIG_LIBRARY_PATH,
    project_path=CONFIG_DIR,
)

# Register all tools
resolution_tools = register_resolution_tools(mcp, token_loader, config_loader)
token_tools = register_token_tools(mcp, token_loader, config_loader)

# Export tool functions for direct access
figma_resolve_styles = resolution_tools["figma_resolve_styles"]
figma_resolve_axis = resolution_tools["figma_resolve_axis"]
figma_classify_property = resolution_tools["figma_classify_property"]
figma_describe_config = resolution_tools["figma_describe_config"]

figma_list_token_sets = token_tools["figma_list_token_sets"]
figma_describe_token_set = token_tools["figma_describe_token_set"]
figma_save_token_set = token_tools["figma_save_token_set"]
figma_classify_modes = token_tools["figma_classify_modes"]

logger.info("CHUK Figma CSS MCP Server initialized")
logger.info(f"  Config library: {CONFIG_LIBRARY_PATH}")
logger.info(f"  Tokens dir: {TOKENS_DIR}")
logger.info(f"  Config dir: {CONFIG_DIR}")
