"""Pip-backed install tool.

This module runs pip as an external process scoped to a target directory.
Output is echoed to the operator while it runs and kept for diagnostics.
"""

from __future__ import annotations

import os
from pathlib import Path
import subprocess
import sys
import threading
from typing import Protocol, TextIO

from core.errors import InstallError


class InstallTool(Protocol):
    """Capability that installs one distribution into a directory."""

    def install(self, distribution: str, target_dir: Path) -> None:
        """Install a distribution or raise InstallError."""


class PipInstallTool:
    """Install distributions with ``python -m pip install --target``."""

    def __init__(
        self,
        python_executable: str = sys.executable,
        index_url: str | None = None,
        timeout: float | None = None,
        echo: TextIO | None = None,
    ) -> None:
        self._python_executable = python_executable
        self._index_url = index_url
        self._timeout = timeout
        self._echo = echo

    def build_command(self, distribution: str, target_dir: Path) -> list[str]:
        """Build the pip command line.

        Args:
            distribution: Distribution name to install.
            target_dir: Directory receiving the installed files.

        Returns:
            Argument vector for subprocess.
        """
        command = [
            self._python_executable,
            "-m",
            "pip",
            "install",
            "--target",
            str(target_dir),
            "--no-input",
            "--disable-pip-version-check",
            "--no-warn-script-location",
        ]
        if self._index_url:
            command.extend(["--index-url", self._index_url])
        command.append(distribution)
        return command

    def install(self, distribution: str, target_dir: Path) -> None:
        """Run pip and block until it exits.

        Args:
            distribution: Distribution name to install.
            target_dir: Directory receiving the installed files.

        Raises:
            InstallError: If pip cannot start, exits non-zero, or times out.
        """
        command = self.build_command(distribution, target_dir)
        env = {**os.environ, "PIP_NO_INPUT": "1"}
        try:
            process = subprocess.Popen(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                env=env,
            )
        except OSError as error:
            raise InstallError(
                f"Failed to start pip for {distribution}: {error}. "
                "Check that the Python interpreter has pip available.",
                package=distribution,
            ) from error
        timed_out = threading.Event()
        timer = self._start_timer(process, timed_out)
        try:
            output = self._stream_output(process)
            returncode = process.wait()
        finally:
            if timer is not None:
                timer.cancel()
        if timed_out.is_set():
            raise InstallError(
                f"Installing {distribution} timed out after {self._timeout} seconds. "
                "Raise FETCHRUN_INSTALL_TIMEOUT or check network access to the index.",
                package=distribution,
                output=output,
            )
        if returncode != 0:
            raise InstallError(
                f"Failed to install {distribution}: pip exited with code {returncode}.\n{output}",
                package=distribution,
                returncode=returncode,
                output=output,
            )

    def _start_timer(
        self,
        process: subprocess.Popen[str],
        timed_out: threading.Event,
    ) -> threading.Timer | None:
        """Arm a kill timer when a timeout is configured."""
        if self._timeout is None:
            return None

        def expire() -> None:
            timed_out.set()
            process.kill()

        timer = threading.Timer(self._timeout, expire)
        timer.daemon = True
        timer.start()
        return timer

    def _stream_output(self, process: subprocess.Popen[str]) -> str:
        """Echo pip output line by line and return all of it."""
        echo = self._echo if self._echo is not None else sys.stderr
        lines: list[str] = []
        if process.stdout is None:
            return ""
        with process.stdout:
            for line in process.stdout:
                echo.write(line)
                echo.flush()
                lines.append(line)
        return "".join(lines)
