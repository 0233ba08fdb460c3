"""Unit tests for scoped search path environment handling."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from resolve.search_path import prepended_search_path


def test_prepended_search_path_restores_existing_value(monkeypatch, tmp_path: Path) -> None:
    """An existing value should be extended, then restored."""
    monkeypatch.setenv("PYTHONPATH", "/existing")

    with prepended_search_path(tmp_path):
        inside = os.environ["PYTHONPATH"]

    assert inside == f"{tmp_path}{os.pathsep}/existing" and os.environ["PYTHONPATH"] == "/existing"


def test_prepended_search_path_removes_variable_it_created(monkeypatch, tmp_path: Path) -> None:
    """An unset variable should be unset again afterwards."""
    monkeypatch.delenv("PYTHONPATH", raising=False)

    with prepended_search_path(tmp_path):
        inside = os.environ["PYTHONPATH"]

    assert inside == str(tmp_path) and "PYTHONPATH" not in os.environ


def test_prepended_search_path_restores_on_error(monkeypatch, tmp_path: Path) -> None:
    """Restoration should happen on failure paths too."""
    monkeypatch.setenv("PYTHONPATH", "/existing")

    with pytest.raises(ValueError):
        with prepended_search_path(tmp_path):
            raise ValueError("boom")

    assert os.environ["PYTHONPATH"] == "/existing"
