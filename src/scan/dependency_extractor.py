"""Regex-based dependency extraction.

This module scans Python source text for import references and returns
the external package identifiers they name. It is best-effort: anything
the patterns do not recognize is ignored rather than reported.
"""

from __future__ import annotations

import re
from typing import Iterable

from core.types import PackageIdentifier
from scan.package_identifier import (
    is_external_request,
    is_installable_identifier,
    normalize_package_identifier,
)

_QUOTED_PATH = r"""(?P<quote>'''|\"\"\"|'|")(?P<path>[^'"\n]+)(?P=quote)"""

_IMPORT_CALL_PATTERN = re.compile(r"\b__import__\s*\(\s*" + _QUOTED_PATH)
_IMPORT_STATEMENT_PATTERN = re.compile(
    r"(?:^|;)[ \t]*import[ \t]+(?P<names>[\w. \t,]+)", re.MULTILINE
)
_FROM_IMPORT_PATTERN = re.compile(
    r"(?:^|;)[ \t]*from[ \t]+(?P<path>\.*[\w.]*)[ \t]+import\b", re.MULTILINE
)
_IMPORT_MODULE_PATTERN = re.compile(
    r"(?:\bimportlib\s*\.\s*)?\bimport_module\s*\(\s*" + _QUOTED_PATH
)


def extract_dependencies(source_text: str) -> set[PackageIdentifier]:
    """Extract external package identifiers referenced by source text.

    Args:
        source_text: Python script body.

    Returns:
        Deduplicated identifiers, excluding relative, path and stdlib imports.
    """
    raw_paths: list[str] = []
    raw_paths.extend(_find_import_calls(source_text))
    raw_paths.extend(_find_import_statements(source_text))
    raw_paths.extend(_find_import_module_calls(source_text))
    return _normalize_paths(raw_paths)


def _find_import_calls(source_text: str) -> list[str]:
    """Return module paths passed to ``__import__``."""
    return [match.group("path").strip() for match in _IMPORT_CALL_PATTERN.finditer(source_text)]


def _find_import_statements(source_text: str) -> list[str]:
    """Return module paths named by ``import`` and ``from ... import``.

    Args:
        source_text: Python script body.

    Returns:
        Raw dotted paths, relative ones included.
    """
    paths: list[str] = []
    for match in _IMPORT_STATEMENT_PATTERN.finditer(source_text):
        paths.extend(_split_import_names(match.group("names")))
    for match in _FROM_IMPORT_PATTERN.finditer(source_text):
        paths.append(match.group("path"))
    return paths


def _find_import_module_calls(source_text: str) -> list[str]:
    """Return module paths passed to ``importlib.import_module``."""
    return [match.group("path").strip() for match in _IMPORT_MODULE_PATTERN.finditer(source_text)]


def _split_import_names(names: str) -> list[str]:
    """Split ``a.b as c, d`` into ``["a.b", "d"]``.

    Clauses that are not ``path`` or ``path as alias`` are prose, not code.
    """
    paths: list[str] = []
    for clause in names.split(","):
        words = clause.split()
        if len(words) == 1 or (len(words) == 3 and words[1] == "as"):
            paths.append(words[0])
    return paths


def _normalize_paths(raw_paths: Iterable[str]) -> set[PackageIdentifier]:
    """Filter raw paths and reduce survivors to package identifiers."""
    identifiers: set[PackageIdentifier] = set()
    for raw_path in raw_paths:
        if not is_external_request(raw_path):
            continue
        identifier = normalize_package_identifier(raw_path)
        if is_installable_identifier(identifier):
            identifiers.add(identifier)
    return identifiers
