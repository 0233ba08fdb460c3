"""fetchrun CLI entry point.

This module maps a single positional URL onto the run API.
Domain failures are printed to stderr and mapped to exit code 1.
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from core.errors import FetchrunError
from execute.runner import run_sync


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="fetchrun",
        description="Download a Python script and run it, installing its imports on demand",
    )
    parser.add_argument("url", help="http(s) URL of the script to run")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the fetchrun CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        run_sync(args.url)
    except FetchrunError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0
