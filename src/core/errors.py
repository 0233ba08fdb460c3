"""fetchrun exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class FetchrunError(Exception):
    """Base exception for all fetchrun failures."""


class FetchrunConfigError(FetchrunError):
    """Raised for invalid runtime configuration."""


class FetchrunInputError(FetchrunError):
    """Raised for missing or invalid caller input."""


class DownloadError(FetchrunError):
    """Raised when a script cannot be downloaded.

    Attributes:
        url: Requested URL.
        status_code: HTTP status when the server answered, else None.
    """

    def __init__(self, message: str, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class InstallError(FetchrunError, ImportError):
    """Raised when the package installation tool fails.

    It is also an ``ImportError`` so optional-import guards in scripts and
    libraries treat a failed lazy install like any missing module.

    Attributes:
        package: Distribution name passed to the tool.
        returncode: Tool exit code, or None when it never finished.
        output: Combined stdout/stderr captured from the tool.
    """

    def __init__(
        self,
        message: str,
        package: str,
        returncode: int | None = None,
        output: str = "",
    ) -> None:
        super().__init__(message)
        self.package = package
        self.returncode = returncode
        self.output = output


class UnsupportedFormatError(FetchrunError):
    """Raised when a script uses a format the loader cannot execute."""
