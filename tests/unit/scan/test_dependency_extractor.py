"""Unit tests for static dependency extraction."""

from __future__ import annotations

from scan.dependency_extractor import extract_dependencies
from tests.fixture_paths import fixture_path


def test_extract_dependencies_deduplicates_every_import_shape() -> None:
    """Each import shape should contribute the same identifier once."""
    source = (
        "import pkg\n"
        "import pkg\n"
        "mod = __import__('pkg')\n"
        "other = importlib.import_module(\"pkg\")\n"
        "from pkg import thing\n"
    )

    dependencies = extract_dependencies(source)

    assert dependencies == {"pkg"}


def test_extract_dependencies_keeps_scope_plus_one_segment() -> None:
    """Scoped requests should normalize to scope plus package name."""
    source = '__import__("google.cloud.storage.blob")\nimport azure.identity.aio\n'

    dependencies = extract_dependencies(source)

    assert dependencies == {"google.cloud.storage", "azure.identity"}


def test_extract_dependencies_reduces_plain_requests_to_first_segment() -> None:
    """Submodule requests should normalize to the top-level package."""
    source = "import requests.adapters\nfrom requests.auth import HTTPBasicAuth\n"

    dependencies = extract_dependencies(source)

    assert dependencies == {"requests"}


def test_extract_dependencies_skips_relative_path_and_stdlib_requests() -> None:
    """Relative, path, and standard-library references should be dropped."""
    source = (
        "from . import sibling\n"
        "from .x import y\n"
        "importlib.import_module('.plugin', package='demo')\n"
        "__import__('/x')\n"
        "import os, json.decoder\n"
        "from __future__ import annotations\n"
    )

    dependencies = extract_dependencies(source)

    assert dependencies == set()


def test_extract_dependencies_skips_bare_namespace_scopes() -> None:
    """A namespace root alone does not name an installable package."""
    source = "import google\nimport google.cloud\n"

    dependencies = extract_dependencies(source)

    assert dependencies == set()


def test_extract_dependencies_handles_aliases_and_semicolons() -> None:
    """Aliased and semicolon-separated imports should all be found."""
    source = "import numpy as np, pandas as pd; import scipy\n"

    dependencies = extract_dependencies(source)

    assert dependencies == {"numpy", "pandas", "scipy"}


def test_extract_dependencies_ignores_malformed_syntax() -> None:
    """Unrecognized or half-quoted references should be ignored silently."""
    source = (
        "__import__('unterminated)\n"
        "importlib.import_module(name)\n"
        "# import the data before use\n"
        "x = 'import'\n"
    )

    dependencies = extract_dependencies(source)

    assert dependencies == set()


def test_extract_dependencies_reads_mixed_fixture_script() -> None:
    """A realistic script should yield exactly its third-party packages."""
    source = fixture_path("scripts/mixed_imports_script.py").read_text(encoding="utf-8")

    dependencies = extract_dependencies(source)

    assert dependencies == {"requests", "yaml", "google.cloud.storage", "numpy", "pandas"}
