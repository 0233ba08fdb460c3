"""Integration tests for the download, install, and execute flow."""

from __future__ import annotations

from dataclasses import replace
import os
from pathlib import Path
import sys

import httpx
import pytest

from core.config import FetchrunConfig
from core.errors import DownloadError, UnsupportedFormatError
from execute.script_executor import ScriptExecutor
from fetchrun import run
from install.package_installer import PackageInstaller
from install.runtime_environment import RuntimeEnvironment
from scan.dependency_extractor import extract_dependencies
from tests.fakes import FakeInstallTool
from tests.fixture_paths import fixture_path

LEFT_PAD_MODULE = (
    "def left_pad(value, width, fill=' '):\n"
    "    return str(value).rjust(width, fill)\n"
)


def _executor(runtime_root: Path, tool: FakeInstallTool) -> ScriptExecutor:
    installer = PackageInstaller(RuntimeEnvironment(root=runtime_root), tool)
    return ScriptExecutor(installer, is_available=lambda name: False)


def _client(status_code: int, text: str) -> httpx.AsyncClient:
    transport = httpx.MockTransport(lambda request: httpx.Response(status_code, text=text))
    return httpx.AsyncClient(transport=transport)


@pytest.mark.asyncio
async def test_run_installs_and_executes_left_pad_script(runtime_root: Path, capsys) -> None:
    """A script importing left_pad should install it once and run."""
    source = fixture_path("scripts/left_pad_script.py").read_text(encoding="utf-8")
    config = replace(FetchrunConfig.from_env(), runtime_root=runtime_root)
    tool = FakeInstallTool(packages={"left_pad": {"left_pad.py": LEFT_PAD_MODULE}})

    async with _client(200, source) as client:
        await run(
            "https://scripts.example/left_pad.py",
            config=config,
            client=client,
            executor=_executor(runtime_root, tool),
        )
    output = capsys.readouterr().out.strip()

    assert (
        extract_dependencies(source) == {"left_pad"}
        and tool.calls == ["left_pad"]
        and output == "0000000005"
    )


@pytest.mark.asyncio
async def test_run_rejects_missing_script_without_installing(runtime_root: Path) -> None:
    """A 404 should fail with DownloadError before any install or load."""
    config = replace(FetchrunConfig.from_env(), runtime_root=runtime_root)
    tool = FakeInstallTool()

    async with _client(404, "import left_pad\n") as client:
        with pytest.raises(DownloadError, match="404"):
            await run(
                "https://scripts.example/missing.py",
                config=config,
                client=client,
                executor=_executor(runtime_root, tool),
            )

    assert tool.calls == [] and not runtime_root.exists()


@pytest.mark.asyncio
async def test_run_rejects_top_level_await_script(runtime_root: Path) -> None:
    """Top-level await scripts should fail with a distinct format error."""
    source = fixture_path("scripts/top_level_await_script.py").read_text(encoding="utf-8")
    config = replace(FetchrunConfig.from_env(), runtime_root=runtime_root)

    async with _client(200, source) as client:
        with pytest.raises(UnsupportedFormatError) as error_info:
            await run(
                "https://scripts.example/await.py",
                config=config,
                client=client,
                executor=_executor(runtime_root, FakeInstallTool()),
            )

    assert not isinstance(error_info.value, ModuleNotFoundError)


@pytest.mark.asyncio
async def test_run_restores_interpreter_state(runtime_root: Path, monkeypatch) -> None:
    """PYTHONPATH and sys.meta_path should match their pre-run values."""
    monkeypatch.setenv("PYTHONPATH", "/opt/shared")
    meta_path_before = list(sys.meta_path)
    config = replace(FetchrunConfig.from_env(), runtime_root=runtime_root)

    async with _client(200, "import fetchrun_absent_module\n") as client:
        with pytest.raises(ModuleNotFoundError, match="fetchrun_absent_module"):
            await run(
                "https://scripts.example/absent.py",
                config=config,
                client=client,
                executor=_executor(runtime_root, FakeInstallTool()),
            )

    assert os.environ["PYTHONPATH"] == "/opt/shared" and sys.meta_path == meta_path_before
