"""Fetch an HLS playlist, decrypt its segments and join them into one file."""

from .downloader import ManifestParser, PlaylistDownloader, SegmentDecryptor, SegmentPipeline
from .errors import CryptoError, M3U8FetchError, NetworkError, OutputError, ParseError
from .models import DirectiveSet

__all__ = [
    "DirectiveSet",
    "ManifestParser",
    "SegmentPipeline",
    "SegmentDecryptor",
    "PlaylistDownloader",
    "M3U8FetchError",
    "ParseError",
    "NetworkError",
    "CryptoError",
    "OutputError",
]
