"""Script execution orchestration.

This module pre-installs statically detected dependencies, then runs a
script with import interception and the runtime search path active.
Both are restored on every exit path.
"""

from __future__ import annotations

import importlib.util
from typing import Callable

from core.logging_config import get_logger
from core.types import PackageIdentifier
from execute.script_loader import check_script_format, run_script, write_script_file
from install.package_installer import PackageInstaller
from resolve.import_interceptor import ImportResolver, intercept_imports
from resolve.search_path import prepended_search_path
from scan.dependency_extractor import extract_dependencies

logger = get_logger(__name__)

HostAvailability = Callable[[PackageIdentifier], bool]


def is_importable_on_host(identifier: PackageIdentifier) -> bool:
    """Return whether the interpreter can already import an identifier."""
    try:
        return importlib.util.find_spec(identifier) is not None
    except (ImportError, ValueError):
        return False


class ScriptExecutor:
    """Run downloaded scripts against the runtime package directory."""

    def __init__(
        self,
        installer: PackageInstaller,
        resolver: ImportResolver | None = None,
        is_available: HostAvailability = is_importable_on_host,
    ) -> None:
        self._installer = installer
        self._resolver = resolver or ImportResolver(installer)
        self._is_available = is_available

    @property
    def installer(self) -> PackageInstaller:
        return self._installer

    def execute(self, source_text: str, source_url: str) -> None:
        """Install dependencies and run a script body.

        Args:
            source_text: Script body.
            source_url: URL the script came from, for logging.

        Raises:
            InstallError: If a dependency cannot be installed.
            UnsupportedFormatError: If the script cannot be loaded by runpy.
        """
        environment = self._installer.environment
        environment.ensure_layout()
        self.install_dependencies(source_text)
        with intercept_imports(self._resolver), prepended_search_path(environment.site_dir):
            script_path = write_script_file(environment.root, source_text)
            logger.info("script_execution_started", url=source_url, script_path=str(script_path))
            check_script_format(source_text, script_path)
            run_script(script_path)
        logger.info("script_execution_completed", url=source_url)

    def install_dependencies(self, source_text: str) -> list[PackageIdentifier]:
        """Install statically detected dependencies ahead of execution.

        Args:
            source_text: Script body.

        Returns:
            Identifiers handed to the installer, in sorted order.
        """
        identifiers = sorted(extract_dependencies(source_text))
        logger.info("dependencies_extracted", packages=identifiers)
        requested: list[PackageIdentifier] = []
        for identifier in identifiers:
            if self._is_available(identifier):
                continue
            if self._installer.environment.contains(identifier):
                continue
            self._installer.ensure_installed(identifier)
            requested.append(identifier)
        return requested
