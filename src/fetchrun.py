"""Public API surface for fetchrun.

This module provides a stable import path for library users.
It re-exports the run entry points, config, and error types.
"""

from __future__ import annotations

from core.config import FetchrunConfig
from core.errors import (
    DownloadError,
    FetchrunConfigError,
    FetchrunError,
    FetchrunInputError,
    InstallError,
    UnsupportedFormatError,
)
from execute.runner import build_executor, run, run_sync
from execute.script_executor import ScriptExecutor
from scan.dependency_extractor import extract_dependencies

__all__ = [
    "DownloadError",
    "FetchrunConfig",
    "FetchrunConfigError",
    "FetchrunError",
    "FetchrunInputError",
    "InstallError",
    "ScriptExecutor",
    "UnsupportedFormatError",
    "build_executor",
    "extract_dependencies",
    "run",
    "run_sync",
]
