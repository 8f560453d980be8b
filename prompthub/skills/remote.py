"""Fetch remote SKILL.md content"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from prompthub.errors import RemoteFetchError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "prompthub-skills"


async def fetch_remote_content(
    url: str,
    timeout: float = 30.0,
    max_bytes: Optional[int] = None,
    user_agent: str = DEFAULT_USER_AGENT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """Download ``url`` and return its body as text.

    Any status other than 200 is an error. The body is buffered in memory;
    it is only bounded when ``max_bytes`` is given.
    """
    if not url.startswith(("http://", "https://")):
        raise RemoteFetchError(url, reason=f"URL must start with http:// or https://: {url}")

    chunks: list[bytes] = []
    received = 0
    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers={"User-Agent": user_agent},
            transport=transport,
        ) as client:
            async with client.stream("GET", url) as response:
                if response.status_code != 200:
                    raise RemoteFetchError(url, status_code=response.status_code)
                async for chunk in response.aiter_bytes():
                    received += len(chunk)
                    if max_bytes is not None and received > max_bytes:
                        raise RemoteFetchError(
                            url, reason=f"Response from {url} exceeds {max_bytes} bytes"
                        )
                    chunks.append(chunk)
                encoding = response.charset_encoding or "utf-8"
    except httpx.TimeoutException as e:
        raise RemoteFetchError(url, reason=f"Request timed out for {url}") from e
    except httpx.HTTPError as e:
        raise RemoteFetchError(url, reason=f"Error fetching {url}: {e}") from e

    return b"".join(chunks).decode(encoding, errors="replace")
