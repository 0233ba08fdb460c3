"""Core constants used across fetchrun modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

DEFAULT_RUNTIME_ROOT = Path(tempfile.gettempdir()) / "fetchrun-runtime"
PACKAGES_DIR_NAME = "packages"
SITE_PACKAGES_DIR_NAME = "site-packages"
RUNTIME_MANIFEST_FILE_NAME = "manifest.json"
RUNTIME_MANIFEST = {
    "name": "fetchrun-runtime-packages",
    "version": "1.0.0",
    "description": "Runtime-installed packages",
    "private": True,
}
SCRIPT_FILE_PREFIX = "script-"
SCRIPT_FILE_SUFFIX = ".py"
SEARCH_PATH_ENV_VAR = "PYTHONPATH"
HTTP_OK_STATUS = 200
DEFAULT_MAX_SCRIPT_BYTES = 10 * 1024 * 1024
DEFAULT_DOWNLOAD_TIMEOUT_SECONDS = 30.0
DOWNLOAD_USER_AGENT = "fetchrun/0.1"
