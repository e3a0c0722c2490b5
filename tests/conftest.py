"""Shared fixtures for the mimekit test suite."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def cli_env(tmp_path: Path) -> dict[str, Any]:
    """Return an environment whose HOME points at an isolated temporary directory."""
    env = {key: value for key, value in os.environ.items() if not key.startswith("MIMEKIT__")}
    env["HOME"] = str(tmp_path)
    return env
