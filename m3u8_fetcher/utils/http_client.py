"""Shared HTTP helpers for playlists, keys and media segments."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional

import aiohttp
import requests

from ..errors import NetworkError

REAL_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)

DEFAULT_HEADERS: Dict[str, str] = {
    "user-agent": REAL_USER_AGENT,
    "accept": "*/*",
    "accept-language": "en-US,en;q=0.9",
}

DEFAULT_TIMEOUT = 30
FALLBACK_ENCODING = "utf-8"


class HttpClient:
    """Fetches manifests and keys with requests, segments with aiohttp."""

    def __init__(self, timeout: int = DEFAULT_TIMEOUT, headers: Optional[Dict[str, str]] = None) -> None:
        self.timeout = timeout
        self._headers = DEFAULT_HEADERS.copy()
        if headers:
            self._headers.update(headers)

        self._session = requests.Session()
        self._session.headers.update(self._headers)

        self._async_session: Optional[aiohttp.ClientSession] = None

    def fetch_text(self, url: str) -> str:
        """Fetch a resource as text (e.g., m3u8); UTF-8 unless a charset is declared."""

        response = self._get(url)
        if "charset" not in response.headers.get("content-type", "").lower():
            response.encoding = FALLBACK_ENCODING
        return response.text

    def fetch_bytes(self, url: str) -> bytes:
        """Fetch a small resource as raw bytes (e.g., an AES key)."""

        return self._get(url).content

    async def fetch_bytes_async(self, url: str) -> bytes:
        """Asynchronously fetch a media segment into memory."""

        session = self._get_async_session()
        try:
            async with session.get(url) as resp:
                resp.raise_for_status()
                return await resp.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logging.error("Segment download failed from %s: %s", url, exc)
            raise NetworkError(f"GET {url} failed: {exc}", url=url) from exc

    def _get(self, url: str) -> requests.Response:
        try:
            response = self._session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            logging.error("GET %s failed: %s", url, exc)
            raise NetworkError(f"GET {url} failed: {exc}", url=url) from exc
        return response

    def _get_async_session(self) -> aiohttp.ClientSession:
        # One session per run; shutdown_async_session ends it on the same loop.
        if self._async_session is None or self._async_session.closed:
            self._async_session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers=self._headers.copy(),
            )
        return self._async_session

    async def shutdown_async_session(self) -> None:
        """Closes the aiohttp session opened by the current run, if any."""

        if self._async_session is not None:
            await self._async_session.close()
        self._async_session = None

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
