"""Runtime package directory layout.

This module describes the host-persistent directory that receives
on-demand installs and temporary script files. Directories are created
lazily and never torn down.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path

from core.config import FetchrunConfig
from core.constants import (
    PACKAGES_DIR_NAME,
    RUNTIME_MANIFEST,
    RUNTIME_MANIFEST_FILE_NAME,
    SITE_PACKAGES_DIR_NAME,
)
from core.types import PackageIdentifier


@dataclass(frozen=True)
class RuntimeEnvironment:
    """Paths of the shared runtime directory.

    Attributes:
        root: Root runtime directory holding scripts and packages.
    """

    root: Path

    @classmethod
    def from_config(cls, config: FetchrunConfig) -> "RuntimeEnvironment":
        """Build the environment rooted at the configured runtime directory."""
        return cls(root=config.runtime_root)

    @property
    def packages_dir(self) -> Path:
        """Directory holding the manifest and installed packages."""
        return self.root / PACKAGES_DIR_NAME

    @property
    def site_dir(self) -> Path:
        """Target directory passed to the installer."""
        return self.packages_dir / SITE_PACKAGES_DIR_NAME

    @property
    def manifest_path(self) -> Path:
        return self.packages_dir / RUNTIME_MANIFEST_FILE_NAME

    def ensure_layout(self) -> None:
        """Create directories and the manifest when missing.

        An existing manifest is left untouched.
        """
        self.site_dir.mkdir(parents=True, exist_ok=True)
        if not self.manifest_path.exists():
            self.manifest_path.write_text(
                json.dumps(RUNTIME_MANIFEST, indent=2) + "\n",
                encoding="utf-8",
            )

    def contains(self, identifier: PackageIdentifier) -> bool:
        """Return whether an identifier is already present on disk.

        Args:
            identifier: Normalized package identifier.

        Returns:
            True when a package directory or module file exists for it.
        """
        segments = identifier.split(".")
        module_path = self.site_dir.joinpath(*segments)
        if module_path.is_dir():
            return True
        if not module_path.parent.is_dir():
            return False
        return any(module_path.parent.glob(f"{segments[-1]}.*"))

    def search_dir_for(self, fullname: str) -> Path:
        """Return the runtime directory that would contain a module.

        Args:
            fullname: Dotted module name being imported.

        Returns:
            ``site_dir`` for top-level modules, else the parent package dir.
        """
        parent_segments = fullname.split(".")[:-1]
        return self.site_dir.joinpath(*parent_segments)
