"""Tests for the command line entry point."""

import os
from pathlib import Path

import pytest

from chuk_mcp_figma_css.constants import CONFIG_DIR_ENV, TOKENS_DIR_ENV
from chuk_mcp_figma_css.server import apply_directories, build_parser


class TestCommandLine:
    """Tests for argument parsing and directory overrides."""

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.transport == "stdio"
        assert args.port == 8000
        assert args.tokens_dir is None
        assert args.config_dir is None

    def test_rejects_unknown_transport(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--transport", "sse"])

    def test_directories_exported(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(os, "environ", {})
        args = build_parser().parse_args(
            ["--tokens-dir", str(temp_dir / "tokens"), "--config-dir", str(temp_dir / "config")]
        )
        apply_directories(args)
        assert Path(os.environ[TOKENS_DIR_ENV]) == (temp_dir / "tokens").resolve()
        assert Path(os.environ[CONFIG_DIR_ENV]) == (temp_dir / "config").resolve()

    def test_unset_directories_leave_environment(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(os, "environ", {})
        apply_directories(build_parser().parse_args([]))
        assert TOKENS_DIR_ENV not in os.environ
        assert CONFIG_DIR_ENV not in os.environ
