"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def runtime_root(tmp_path: Path) -> Iterator[Path]:
    """Provide a runtime root and forget modules imported from it."""
    root = tmp_path / "runtime"
    yield root
    for name, module in list(sys.modules.items()):
        locations = [getattr(module, "__file__", None), *getattr(module, "__path__", [])]
        if any(location and str(location).startswith(str(root)) for location in locations):
            del sys.modules[name]
