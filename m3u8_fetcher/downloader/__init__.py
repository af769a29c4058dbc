"""Playlist parsing, segment decryption and download helpers."""

from .decryptor import SegmentDecryptor
from .m3u8_parser import ManifestParser
from .playlist_downloader import PlaylistDownloader
from .segment_pipeline import SegmentPipeline

__all__ = ["ManifestParser", "SegmentPipeline", "SegmentDecryptor", "PlaylistDownloader"]
