"""Remote script download.

This module fetches a script body over HTTP(S) with httpx. Only an exact
200 response is accepted; redirects are not followed and the body is
capped at a configured size.
"""

from __future__ import annotations

import httpx

from core.config import FetchrunConfig
from core.constants import DOWNLOAD_USER_AGENT, HTTP_OK_STATUS
from core.errors import DownloadError
from core.types import ScriptSource


async def download_script(
    url: str,
    config: FetchrunConfig,
    client: httpx.AsyncClient | None = None,
) -> ScriptSource:
    """Download a script body as text.

    Args:
        url: HTTP or HTTPS URL of the script.
        config: Runtime config with timeout and size cap.
        client: Optional client to reuse; one is created when omitted.

    Returns:
        Downloaded script source.

    Raises:
        DownloadError: On non-200 status, transport failure, or oversize body.
    """
    if client is not None:
        return await _download_with_client(client, url, config.max_script_bytes)
    async with httpx.AsyncClient(
        timeout=config.download_timeout,
        headers={"User-Agent": DOWNLOAD_USER_AGENT},
    ) as owned_client:
        return await _download_with_client(owned_client, url, config.max_script_bytes)


async def _download_with_client(
    client: httpx.AsyncClient,
    url: str,
    max_bytes: int,
) -> ScriptSource:
    try:
        async with client.stream("GET", url, follow_redirects=False) as response:
            if response.status_code != HTTP_OK_STATUS:
                raise DownloadError(
                    f"Failed to download {url}: HTTP status {response.status_code}.",
                    url=url,
                    status_code=response.status_code,
                )
            body = await _read_capped_body(response, url, max_bytes)
    except (httpx.HTTPError, httpx.InvalidURL) as error:
        raise DownloadError(f"Failed to download {url}: {error}.", url=url) from error
    return ScriptSource(url=url, text=body.decode("utf-8", errors="replace"))


async def _read_capped_body(response: httpx.Response, url: str, max_bytes: int) -> bytes:
    """Buffer a streamed body, failing once it exceeds ``max_bytes``."""
    body = bytearray()
    async for chunk in response.aiter_bytes():
        body.extend(chunk)
        if len(body) > max_bytes:
            raise DownloadError(
                f"Failed to download {url}: body exceeds {max_bytes} bytes. "
                "Raise FETCHRUN_MAX_SCRIPT_BYTES to allow larger scripts.",
                url=url,
                status_code=response.status_code,
            )
    return bytes(body)
