"""Runtime configuration model for fetchrun.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_DOWNLOAD_TIMEOUT_SECONDS,
    DEFAULT_MAX_SCRIPT_BYTES,
    DEFAULT_RUNTIME_ROOT,
)
from core.errors import FetchrunConfigError


@dataclass(frozen=True)
class FetchrunConfig:
    """Validated runtime configuration.

    Attributes:
        runtime_root: Host-persistent directory for installs and temp scripts.
        max_script_bytes: Upper bound on downloaded script size.
        download_timeout: HTTP timeout in seconds.
        install_timeout: Optional pip timeout in seconds; None waits forever.
        index_url: Optional package index passed to pip.
    """

    runtime_root: Path
    max_script_bytes: int
    download_timeout: float
    install_timeout: float | None
    index_url: str | None

    @classmethod
    def from_env(cls) -> "FetchrunConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            FetchrunConfigError: If environment values are invalid.
        """
        runtime_root_value = os.getenv("FETCHRUN_RUNTIME_DIR", str(DEFAULT_RUNTIME_ROOT))
        max_script_bytes = _parse_positive_int(
            "FETCHRUN_MAX_SCRIPT_BYTES",
            os.getenv("FETCHRUN_MAX_SCRIPT_BYTES", str(DEFAULT_MAX_SCRIPT_BYTES)),
        )
        download_timeout = _parse_positive_float(
            "FETCHRUN_DOWNLOAD_TIMEOUT",
            os.getenv("FETCHRUN_DOWNLOAD_TIMEOUT", str(DEFAULT_DOWNLOAD_TIMEOUT_SECONDS)),
        )
        install_timeout_value = os.getenv("FETCHRUN_INSTALL_TIMEOUT")
        install_timeout = (
            _parse_positive_float("FETCHRUN_INSTALL_TIMEOUT", install_timeout_value)
            if install_timeout_value
            else None
        )
        return cls(
            runtime_root=Path(runtime_root_value).expanduser().resolve(),
            max_script_bytes=max_script_bytes,
            download_timeout=download_timeout,
            install_timeout=install_timeout,
            index_url=os.getenv("FETCHRUN_INDEX_URL") or None,
        )


def _parse_positive_int(name: str, raw_value: str) -> int:
    """Parse a strictly positive integer environment value.

    Args:
        name: Environment variable name for error messages.
        raw_value: Raw string from environment.

    Returns:
        Parsed integer.

    Raises:
        FetchrunConfigError: If value is not a positive integer.
    """
    try:
        value = int(raw_value)
    except ValueError as error:
        raise FetchrunConfigError(
            f"Invalid {name} value: expected integer, got '{raw_value}'. "
            f"Set {name} to a positive whole number."
        ) from error
    if value <= 0:
        raise FetchrunConfigError(
            f"Invalid {name} value: expected a positive integer, got {value}."
        )
    return value


def _parse_positive_float(name: str, raw_value: str) -> float:
    """Parse a strictly positive number of seconds."""
    try:
        value = float(raw_value)
    except ValueError as error:
        raise FetchrunConfigError(
            f"Invalid {name} value: expected seconds, got '{raw_value}'. "
            f"Set {name} to a positive number."
        ) from error
    if value <= 0:
        raise FetchrunConfigError(
            f"Invalid {name} value: expected a positive number, got {value}."
        )
    return value
