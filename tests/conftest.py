from __future__ import annotations

from typing import Dict, Iterable, List, Union

import pytest
from Crypto.Cipher import AES
from Crypto.Util.Padding import pad

from m3u8_fetcher.errors import NetworkError

BASE = "https://cdn.example.com/vod"
KEY = b"0123456789abcdef"


class FakeHttpClient:
    """In-memory stand-in for HttpClient that records every request."""

    def __init__(self, resources: Dict[str, Union[str, bytes]], failing: Iterable[str] = ()) -> None:
        self.resources = dict(resources)
        self.failing = set(failing)
        self.requested: List[str] = []
        self.shutdown_calls = 0
        self.closed = False

    def _lookup(self, url: str) -> Union[str, bytes]:
        self.requested.append(url)
        if url in self.failing or url not in self.resources:
            raise NetworkError(f"GET {url} failed: 404 Not Found", url=url)
        return self.resources[url]

    def fetch_text(self, url: str) -> str:
        value = self._lookup(url)
        return value.decode("utf-8") if isinstance(value, bytes) else value

    def fetch_bytes(self, url: str) -> bytes:
        value = self._lookup(url)
        return value.encode("utf-8") if isinstance(value, str) else value

    async def fetch_bytes_async(self, url: str) -> bytes:
        return self.fetch_bytes(url)

    async def shutdown_async_session(self) -> None:
        self.shutdown_calls += 1

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "FakeHttpClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


def encrypt(plaintext: bytes, key: bytes = KEY) -> bytes:
    return AES.new(key, AES.MODE_CBC, iv=bytes(16)).encrypt(pad(plaintext, AES.block_size))


@pytest.fixture
def make_client():
    return FakeHttpClient
