"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest


def _make_project(path: Path) -> Path:
    """Create a minimal Flutter project (pubspec.yaml + lib/) at path."""
    path.mkdir(parents=True, exist_ok=True)
    (path / "pubspec.yaml").write_text("name: app\n")
    (path / "lib").mkdir(exist_ok=True)
    return path


@pytest.fixture
def make_project() -> Callable[[Path], Path]:
    """Factory creating Flutter projects on disk."""
    return _make_project


@pytest.fixture
def projects_root(tmp_path: Path) -> Path:
    """A root directory holding three projects, one nested in another.

    Layout::

        root/
          alpha/          project
            example/      project (nested)
          beta/           project
          docs/           plain directory
    """
    root = tmp_path / "root"
    root.mkdir()
    _make_project(root / "alpha")
    _make_project(root / "alpha" / "example")
    _make_project(root / "beta")
    (root / "docs").mkdir()
    (root / "docs" / "README.md").write_text("docs")
    return root
