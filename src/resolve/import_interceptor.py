"""Import interception with install-and-retry fallback.

The resolver always consults the normal finder chain first. Only a
not-found result falls through to the runtime package directory, and only
a package root that is still missing triggers a single install and retry.
When everything fails, the original ``ModuleNotFoundError`` is raised,
except for a bare namespace scope, which resolves to an empty namespace
package in the runtime directory so its children can still install.
"""

from __future__ import annotations

from contextlib import contextmanager
import importlib.abc
import importlib.machinery
import sys
from types import ModuleType
from typing import Callable, Iterator, Sequence

from core.logging_config import get_logger
from install.package_installer import PackageInstaller
from scan.package_identifier import (
    is_bare_scope,
    is_installable_identifier,
    normalize_package_identifier,
)

logger = get_logger(__name__)

ModuleLookup = Callable[
    [str, Sequence[str] | None, ModuleType | None],
    importlib.machinery.ModuleSpec,
]


def find_spec_without_interceptors(
    fullname: str,
    path: Sequence[str] | None = None,
    target: ModuleType | None = None,
) -> importlib.machinery.ModuleSpec:
    """Run the interpreter's own finder chain, skipping interceptors.

    Args:
        fullname: Dotted module name.
        path: Parent package ``__path__`` for submodules, else None.
        target: Module being reloaded, if any.

    Returns:
        The first spec any finder produces.

    Raises:
        ModuleNotFoundError: If no finder locates the module.
    """
    for finder in list(sys.meta_path):
        if isinstance(finder, ImportInterceptor):
            continue
        find_spec = getattr(finder, "find_spec", None)
        if find_spec is None:
            continue
        spec = find_spec(fullname, path, target)
        if spec is not None:
            return spec
    raise ModuleNotFoundError(f"No module named {fullname!r}", name=fullname)


class ImportResolver:
    """Fallback chain from normal lookup to runtime directory to install."""

    def __init__(
        self,
        installer: PackageInstaller,
        original_lookup: ModuleLookup = find_spec_without_interceptors,
    ) -> None:
        self._installer = installer
        self._original_lookup = original_lookup

    def resolve(
        self,
        fullname: str,
        path: Sequence[str] | None = None,
        target: ModuleType | None = None,
    ) -> importlib.machinery.ModuleSpec:
        """Resolve a module spec, installing its package when needed.

        Args:
            fullname: Dotted module name.
            path: Parent package ``__path__`` for submodules, else None.
            target: Module being reloaded, if any.

        Returns:
            Spec from the first stage that locates the module.

        Raises:
            ModuleNotFoundError: The original lookup error when all stages fail.
            InstallError: If an on-demand install fails.
        """
        try:
            return self._original_lookup(fullname, path, target)
        except ModuleNotFoundError as original_error:
            return self._resolve_fallback(fullname, path, original_error)

    def _resolve_fallback(
        self,
        fullname: str,
        path: Sequence[str] | None,
        original_error: ModuleNotFoundError,
    ) -> importlib.machinery.ModuleSpec:
        spec = self._find_in_runtime(fullname, path)
        if spec is not None:
            return spec
        identifier = normalize_package_identifier(fullname)
        if fullname == identifier and is_bare_scope(identifier):
            return self._runtime_namespace_spec(fullname)
        if not self._is_install_eligible(fullname, identifier):
            raise original_error
        logger.info("import_fallback_install", module=fullname, package=identifier)
        self._installer.ensure_installed(identifier)
        spec = self._find_in_runtime(fullname, path)
        if spec is None:
            raise original_error
        return spec

    def _find_in_runtime(
        self,
        fullname: str,
        path: Sequence[str] | None,
    ) -> importlib.machinery.ModuleSpec | None:
        """Search with the runtime directory prepended to the search path."""
        runtime_dir = self._installer.environment.search_dir_for(fullname)
        base_path = list(path) if path is not None else list(sys.path)
        search_path = [str(runtime_dir), *base_path]
        return importlib.machinery.PathFinder.find_spec(fullname, search_path)

    def _runtime_namespace_spec(self, fullname: str) -> importlib.machinery.ModuleSpec:
        """Return a namespace package spec for a scope inside the runtime dir.

        Args:
            fullname: Dotted scope name such as ``azure`` or ``google.cloud``.

        Returns:
            Loader-less spec whose search location is created when missing.
        """
        environment = self._installer.environment
        environment.ensure_layout()
        scope_dir = environment.site_dir.joinpath(*fullname.split("."))
        scope_dir.mkdir(parents=True, exist_ok=True)
        logger.info("import_namespace_scope", module=fullname, path=str(scope_dir))
        spec = importlib.machinery.ModuleSpec(fullname, None, is_package=True)
        spec.submodule_search_locations = [str(scope_dir)]
        return spec

    def _is_install_eligible(self, fullname: str, identifier: str) -> bool:
        """Return whether a failed request should trigger an install.

        Parents are imported before children, so only a request for the
        package root itself decides installation.
        """
        if fullname != identifier:
            return False
        if not is_installable_identifier(identifier):
            return False
        return not self._installer.is_installed(identifier)


class ImportInterceptor(importlib.abc.MetaPathFinder):
    """Meta path finder delegating every lookup to an ImportResolver."""

    def __init__(self, resolver: ImportResolver) -> None:
        self._resolver = resolver

    def find_spec(
        self,
        fullname: str,
        path: Sequence[str] | None = None,
        target: ModuleType | None = None,
    ) -> importlib.machinery.ModuleSpec | None:
        # None lets the import system raise its own error for the request.
        try:
            return self._resolver.resolve(fullname, path, target)
        except ModuleNotFoundError:
            return None


@contextmanager
def intercept_imports(resolver: ImportResolver) -> Iterator[ImportInterceptor]:
    """Activate an interceptor at the front of ``sys.meta_path``.

    Args:
        resolver: Resolver that handles every lookup while active.

    Yields:
        The active interceptor; it is removed on every exit path.
    """
    interceptor = ImportInterceptor(resolver)
    sys.meta_path.insert(0, interceptor)
    try:
        yield interceptor
    finally:
        if interceptor in sys.meta_path:
            sys.meta_path.remove(interceptor)
