#!/usr/bin/env python3
"""
Entry point for the CHUK Figma CSS MCP Server.

Picks the transport (stdio, http) and where token sets and project
config live. The directories default to ``tokens/`` and ``config/``
under the working directory.
"""

import argparse
import asyncio
import logging
import os
from pathlib import Path

from chuk_mcp_figma_css.constants import CONFIG_DIR_ENV, TOKENS_DIR_ENV

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Command line options for the server."""
    parser = argparse.ArgumentParser(description="CHUK Figma CSS MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP port (only for http transport)",
    )
    parser.add_argument(
        "--tokens-dir",
        type=Path,
        help="Directory of token set YAML files (default: ./tokens)",
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        help="Project config directory overriding the bundled library (default: ./config)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def apply_directories(args: argparse.Namespace) -> None:
    """Expose directory flags to the server module before it is imported."""
    if args.tokens_dir is not None:
        os.environ[TOKENS_DIR_ENV] = str(args.tokens_dir.resolve())
    if args.config_dir is not None:
        os.environ[CONFIG_DIR_ENV] = str(args.config_dir.resolve())


def main() -> None:
    """Main entry point with transport detection."""
    args = build_parser().parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    apply_directories(args)

    # Tools register on import
    from chuk_mcp_figma_css.async_server import mcp

    if args.transport == "stdio":
        logger.info("Starting CHUK Figma CSS MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info(f"Starting CHUK Figma CSS MCP Server (http:{args.port})")
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()
