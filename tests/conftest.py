"""Test configuration and fixtures for depexclude."""

from pathlib import Path
from typing import Iterable

import pytest


def _make_tree(root: Path, directories: Iterable[str] = (), files: Iterable[str] = ()) -> Path:
    for directory in directories:
        (root / directory).mkdir(parents=True, exist_ok=True)
    for file in files:
        path = root / file
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch()
    return root


@pytest.fixture
def make_tree():
    """Create directories and empty files below a root from root-relative paths."""
    return _make_tree


@pytest.fixture
def home(tmp_path):
    """An empty directory standing in for the user's home directory."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    return home_dir


@pytest.fixture
def config_dir(tmp_path):
    """A configuration directory path that does not exist yet."""
    return tmp_path / "config" / "depexclude"
