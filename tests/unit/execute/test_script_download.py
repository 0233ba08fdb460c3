"""Unit tests for remote script download."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import httpx
import pytest

from core.config import FetchrunConfig
from core.errors import DownloadError
from execute.script_download import download_script

SCRIPT_URL = "https://scripts.example/demo.py"


def _config(tmp_path: Path, max_script_bytes: int = 1024) -> FetchrunConfig:
    return replace(
        FetchrunConfig.from_env(),
        runtime_root=tmp_path,
        max_script_bytes=max_script_bytes,
    )


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_download_script_returns_body_text(tmp_path: Path) -> None:
    """A 200 response body should be returned as text."""
    client = _client(lambda request: httpx.Response(200, text="print('hi')\n"))

    async with client:
        source = await download_script(SCRIPT_URL, _config(tmp_path), client=client)

    assert source.text == "print('hi')\n" and source.url == SCRIPT_URL


@pytest.mark.asyncio
async def test_download_script_rejects_non_ok_status(tmp_path: Path) -> None:
    """Any status other than 200 should raise with the code in the message."""
    client = _client(lambda request: httpx.Response(404, text="not found"))

    async with client:
        with pytest.raises(DownloadError, match="404") as error_info:
            await download_script(SCRIPT_URL, _config(tmp_path), client=client)

    assert error_info.value.status_code == 404


@pytest.mark.asyncio
async def test_download_script_does_not_follow_redirects(tmp_path: Path) -> None:
    """Redirect responses count as failures."""
    client = _client(
        lambda request: httpx.Response(301, headers={"Location": "https://elsewhere.example/"})
    )

    async with client:
        with pytest.raises(DownloadError) as error_info:
            await download_script(SCRIPT_URL, _config(tmp_path), client=client)

    assert error_info.value.status_code == 301


@pytest.mark.asyncio
async def test_download_script_wraps_transport_errors(tmp_path: Path) -> None:
    """Transport failures should surface as DownloadError."""

    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(_handler)

    async with client:
        with pytest.raises(DownloadError, match="connection refused") as error_info:
            await download_script(SCRIPT_URL, _config(tmp_path), client=client)

    assert error_info.value.status_code is None


@pytest.mark.asyncio
async def test_download_script_enforces_size_cap(tmp_path: Path) -> None:
    """Bodies larger than the configured cap should be rejected."""
    client = _client(lambda request: httpx.Response(200, content=b"x" * 64))

    async with client:
        with pytest.raises(DownloadError, match="exceeds 16 bytes"):
            await download_script(SCRIPT_URL, _config(tmp_path, max_script_bytes=16), client=client)

    assert True
