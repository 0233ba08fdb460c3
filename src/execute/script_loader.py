"""Script persistence and loading.

This module writes a script body to a uniquely named file, rejects
formats ``runpy`` cannot execute, and runs the file as ``__main__``.
"""

from __future__ import annotations

import ast
import json
from pathlib import Path
import runpy
import sys
import time
from uuid import uuid4

from core.constants import SCRIPT_FILE_PREFIX, SCRIPT_FILE_SUFFIX
from core.errors import UnsupportedFormatError


def write_script_file(directory: Path, source_text: str) -> Path:
    """Persist a script body under a unique name.

    Args:
        directory: Directory receiving the file.
        source_text: Script body.

    Returns:
        Path of the written file. The file is not removed afterwards.
    """
    directory.mkdir(parents=True, exist_ok=True)
    timestamp_ms = int(time.time() * 1000)
    file_name = f"{SCRIPT_FILE_PREFIX}{timestamp_ms}-{uuid4().hex[:8]}{SCRIPT_FILE_SUFFIX}"
    script_path = directory / file_name
    script_path.write_text(source_text, encoding="utf-8")
    return script_path


def check_script_format(source_text: str, script_path: Path) -> None:
    """Reject script formats the loader cannot run.

    Args:
        source_text: Script body.
        script_path: File name used in compile diagnostics.

    Raises:
        UnsupportedFormatError: For notebooks and top-level await scripts.
        SyntaxError: For any other invalid source.
    """
    if _looks_like_notebook(source_text):
        raise UnsupportedFormatError(
            f"Script at {script_path} is a Jupyter notebook, which cannot be run directly. "
            "Export it to a .py script first."
        )
    try:
        compile(source_text, str(script_path), "exec", dont_inherit=True)
    except SyntaxError as error:
        if _compiles_with_top_level_await(source_text, script_path):
            raise UnsupportedFormatError(
                f"Script at {script_path} uses top-level await, which is not supported. "
                "Move the code into an async main() and call asyncio.run(main())."
            ) from error
        raise


def run_script(script_path: Path) -> None:
    """Run a script file as ``__main__``.

    ``sys.exit()`` with a zero or empty status counts as success; other
    exit statuses propagate.

    Args:
        script_path: File to execute.
    """
    original_argv = sys.argv
    sys.argv = [str(script_path)]
    try:
        runpy.run_path(str(script_path), run_name="__main__")
    except SystemExit as exit_request:
        if exit_request.code not in (None, 0):
            raise
    finally:
        sys.argv = original_argv


def _compiles_with_top_level_await(source_text: str, script_path: Path) -> bool:
    try:
        compile(
            source_text,
            str(script_path),
            "exec",
            flags=ast.PyCF_ALLOW_TOP_LEVEL_AWAIT,
            dont_inherit=True,
        )
    except SyntaxError:
        return False
    return True


def _looks_like_notebook(source_text: str) -> bool:
    """Return whether text is Jupyter notebook JSON."""
    if not source_text.lstrip().startswith("{"):
        return False
    try:
        payload = json.loads(source_text)
    except json.JSONDecodeError:
        return False
    return isinstance(payload, dict) and "cells" in payload and "nbformat" in payload
