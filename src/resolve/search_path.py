"""Scoped module search path environment variable.

Child processes started by a script inherit ``PYTHONPATH``; this module
prepends the runtime directory for one execution and restores it after.
"""

from __future__ import annotations

from contextlib import contextmanager
import os
from pathlib import Path
from typing import Iterator

from core.constants import SEARCH_PATH_ENV_VAR


@contextmanager
def prepended_search_path(
    directory: Path,
    env_var: str = SEARCH_PATH_ENV_VAR,
) -> Iterator[None]:
    """Prepend a directory to a path-list environment variable.

    Args:
        directory: Directory to put first.
        env_var: Environment variable name.

    Yields:
        Control while the variable is augmented. The previous value, or its
        absence, is restored on exit.
    """
    original_value = os.environ.get(env_var)
    entries = [str(directory)]
    if original_value:
        entries.append(original_value)
    os.environ[env_var] = os.pathsep.join(entries)
    try:
        yield
    finally:
        if original_value is None:
            os.environ.pop(env_var, None)
        else:
            os.environ[env_var] = original_value
