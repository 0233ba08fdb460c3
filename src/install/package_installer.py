"""Install-once package installer.

This module wraps an install tool with a process-lifetime installed set,
so each identifier reaches the tool at most once per successful install.
"""

from __future__ import annotations

import importlib

from core.errors import InstallError
from core.logging_config import get_logger
from core.types import PackageIdentifier
from install.distribution_names import distribution_for
from install.pip_tool import InstallTool
from install.runtime_environment import RuntimeEnvironment

logger = get_logger(__name__)


class PackageInstaller:
    """Ensure packages are present in the runtime directory."""

    def __init__(self, environment: RuntimeEnvironment, tool: InstallTool) -> None:
        self._environment = environment
        self._tool = tool
        self._installed: set[PackageIdentifier] = set()

    @property
    def environment(self) -> RuntimeEnvironment:
        """Runtime directory this installer targets."""
        return self._environment

    @property
    def installed(self) -> frozenset[PackageIdentifier]:
        """Identifiers installed successfully during this process."""
        return frozenset(self._installed)

    def is_installed(self, identifier: PackageIdentifier) -> bool:
        """Return whether an identifier was installed during this process."""
        return identifier in self._installed

    def ensure_installed(self, identifier: PackageIdentifier) -> None:
        """Install an identifier unless it was already installed.

        Args:
            identifier: Normalized package identifier.

        Raises:
            InstallError: If the install tool fails. The identifier is not
                recorded, so a later call tries again.
        """
        if identifier in self._installed:
            return
        distribution = distribution_for(identifier)
        self._environment.ensure_layout()
        logger.info("package_install_started", package=identifier, distribution=distribution)
        try:
            self._tool.install(distribution, self._environment.site_dir)
        except InstallError as error:
            logger.error(
                "package_install_failed",
                package=identifier,
                distribution=distribution,
                returncode=error.returncode,
            )
            raise
        self._installed.add(identifier)
        importlib.invalidate_caches()
        logger.info("package_install_completed", package=identifier, distribution=distribution)
