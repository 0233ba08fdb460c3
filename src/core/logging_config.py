"""Structured logging configuration.

This module initializes structlog loggers with a stable JSON format.
Log lines go to stderr so they never interleave with script stdout.
"""

from __future__ import annotations

import sys
from typing import Any

import structlog

_configured = False


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with structured output.
    """
    _configure_once()
    return structlog.get_logger(name)


def _configure_once() -> None:
    """Apply the shared processor chain the first time a logger is requested."""
    global _configured
    if _configured:
        return
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=_stderr_logger_factory,
        # Resolve stderr per call so redirected streams are honored.
        cache_logger_on_first_use=False,
    )
    _configured = True


def _stderr_logger_factory(*_args: Any) -> structlog.PrintLogger:
    return structlog.PrintLogger(file=sys.stderr)
