"""Exceptions raised while fetching, decrypting and assembling a playlist."""

from __future__ import annotations

from typing import Optional


class M3U8FetchError(Exception):
    """Base class for every failure that aborts a download run."""


class ParseError(M3U8FetchError):
    """Raised when a numeric manifest directive carries a malformed value."""

    def __init__(self, message: str, line_number: Optional[int] = None, line: Optional[str] = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
        self.line = line


class NetworkError(M3U8FetchError):
    """Raised when the manifest, key or a segment cannot be retrieved."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class CryptoError(M3U8FetchError):
    """Raised when a segment cannot be decrypted with the playlist key."""


class OutputError(M3U8FetchError):
    """Raised when the output file cannot be created or written."""
