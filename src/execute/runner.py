"""Top-level run entry point.

This module wires configuration, download and execution together.
Installers are cached per runtime directory so the installed set lives
for the whole process.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import httpx

from core.config import FetchrunConfig
from core.errors import FetchrunInputError
from core.logging_config import get_logger
from execute.script_download import download_script
from execute.script_executor import ScriptExecutor
from install.package_installer import PackageInstaller
from install.pip_tool import PipInstallTool
from install.runtime_environment import RuntimeEnvironment

logger = get_logger(__name__)

_INSTALLERS: dict[Path, PackageInstaller] = {}


def build_executor(config: FetchrunConfig) -> ScriptExecutor:
    """Build an executor backed by the process-wide installer.

    Args:
        config: Runtime configuration.

    Returns:
        Executor using pip for installs.
    """
    return ScriptExecutor(_process_installer(config))


def _process_installer(config: FetchrunConfig) -> PackageInstaller:
    installer = _INSTALLERS.get(config.runtime_root)
    if installer is None:
        tool = PipInstallTool(index_url=config.index_url, timeout=config.install_timeout)
        installer = PackageInstaller(RuntimeEnvironment.from_config(config), tool)
        _INSTALLERS[config.runtime_root] = installer
    return installer


async def run(
    url: str | None,
    config: FetchrunConfig | None = None,
    client: httpx.AsyncClient | None = None,
    executor: ScriptExecutor | None = None,
) -> None:
    """Download a script and execute it.

    Args:
        url: HTTP or HTTPS URL of the script.
        config: Optional config; read from the environment when omitted.
        client: Optional HTTP client for the download.
        executor: Optional executor; built from config when omitted.

    Raises:
        FetchrunInputError: If url is empty, before any I/O.
        FetchrunError: For download, install and format failures.
    """
    if not url:
        raise FetchrunInputError("URL is required. Pass the http(s) URL of the script to run.")
    try:
        run_config = config or FetchrunConfig.from_env()
        logger.info("script_download_started", url=url)
        source = await download_script(url, run_config, client=client)
        logger.info("script_download_completed", url=url, characters=len(source.text))
        run_executor = executor or build_executor(run_config)
        run_executor.execute(source.text, source.url)
    except Exception as error:
        logger.error("run_failed", url=url, error=str(error), error_type=type(error).__name__)
        raise
    logger.info("run_completed", url=url)


def run_sync(url: str | None, config: FetchrunConfig | None = None) -> None:
    """Blocking wrapper around :func:`run` for callers without an event loop."""
    asyncio.run(run(url, config=config))
