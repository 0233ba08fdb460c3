"""Package identifier normalization and filtering.

This module decides which import requests name installable packages
and reduces them to the identifier used for install bookkeeping.
"""

from __future__ import annotations

import re
import sys

from core.types import PackageIdentifier

# Namespace roots shared by many distributions; longest entries first.
NAMESPACE_SCOPES = (
    "google.cloud",
    "google",
    "azure",
    "zope",
    "jaraco",
    "sphinxcontrib",
    "backports",
)

_BUILTIN_MODULE_NAMES = frozenset(
    set(sys.stdlib_module_names) | set(sys.builtin_module_names) | {"__future__", "__main__"}
)
_MODULE_PATH_PATTERN = re.compile(r"^[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*$")


def is_relative_request(request: str) -> bool:
    """Return whether a request is relative to the importing package."""
    return request.startswith(".")


def is_path_request(request: str) -> bool:
    """Return whether a request names a filesystem path."""
    return request.startswith("/")


def is_builtin_module(request: str) -> bool:
    """Return whether a request belongs to the standard library.

    Args:
        request: Dotted module path.

    Returns:
        True when the top-level name is built in or part of the stdlib.
    """
    return request.split(".", 1)[0] in _BUILTIN_MODULE_NAMES


def is_external_request(request: str) -> bool:
    """Return whether a request could name a third-party package.

    Args:
        request: Raw module path as written in source.

    Returns:
        True for well-formed, non-relative, non-path, non-stdlib requests.
    """
    if is_relative_request(request) or is_path_request(request):
        return False
    if not _MODULE_PATH_PATTERN.match(request):
        return False
    return not is_builtin_module(request)


def normalize_package_identifier(request: str) -> PackageIdentifier:
    """Reduce a module path to its package identifier.

    Scoped requests keep the namespace scope plus one segment; plain requests
    keep their first segment only.

    Args:
        request: Dotted module path, e.g. ``google.cloud.storage.blob``.

    Returns:
        Identifier such as ``google.cloud.storage`` or ``requests``.
    """
    segments = request.split(".")
    scope = _matching_scope(request)
    if scope is None:
        return segments[0]
    kept_segments = scope.count(".") + 2
    return ".".join(segments[:kept_segments])


def is_bare_scope(identifier: PackageIdentifier) -> bool:
    """Return whether an identifier is a namespace root with no package name."""
    return identifier in NAMESPACE_SCOPES


def is_installable_identifier(identifier: PackageIdentifier) -> bool:
    """Return whether an identifier can be handed to the installer."""
    return is_external_request(identifier) and not is_bare_scope(identifier)


def _matching_scope(request: str) -> str | None:
    """Return the longest namespace scope prefixing a request."""
    for scope in NAMESPACE_SCOPES:
        if request.startswith(scope + "."):
            return scope
    return None
