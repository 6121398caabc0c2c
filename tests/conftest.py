"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock

import pytest


@pytest.fixture
def reporter() -> MagicMock:
    """StatusReporter mock recording messages, progress and status texts."""
    return MagicMock(spec=["message", "progress", "status_bar_message"])


@pytest.fixture
def make_files(tmp_path: Path) -> Callable[..., list[Path]]:
    """Factory creating files (and their parent folders) below tmp_path.

    Usage: make_files("App/bin/App.dll", "App/obj/App.pdb")
    """

    def _make(*relative: str, content: str = "x") -> list[Path]:
        created: list[Path] = []
        for rel in relative:
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
            created.append(path)
        return created

    return _make


@pytest.fixture
def solution(tmp_path: Path, make_files: Callable[..., list[Path]]) -> Path:
    """A workspace with one solution file and two projects with build output.

    Layout:
        Shop.sln
        Shop.Web/Shop.Web.csproj, bin/Debug/Shop.Web.dll, obj/project.assets.json
        Shop.Core/Shop.Core.csproj, bin/Debug/Shop.Core.dll, obj/Debug/Shop.Core.pdb
    """
    make_files(
        "Shop.sln",
        "Shop.Web/Shop.Web.csproj",
        "Shop.Web/Program.cs",
        "Shop.Web/bin/Debug/Shop.Web.dll",
        "Shop.Web/obj/project.assets.json",
        "Shop.Core/Shop.Core.csproj",
        "Shop.Core/Order.cs",
        "Shop.Core/bin/Debug/Shop.Core.dll",
        "Shop.Core/obj/Debug/Shop.Core.pdb",
    )
    return tmp_path


@pytest.fixture
def config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME to a temporary directory."""
    home = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home))
    return home
