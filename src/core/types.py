"""Shared typed models.

This module defines immutable data models passed between the download,
scan, install and execute layers.
"""

from __future__ import annotations

from dataclasses import dataclass

PackageIdentifier = str


@dataclass(frozen=True)
class ScriptSource:
    """Downloaded script body.

    Attributes:
        url: URL the script was fetched from.
        text: Decoded script source.
    """

    url: str
    text: str
