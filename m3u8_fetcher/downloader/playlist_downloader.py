"""Downloader that turns an m3u8 playlist into a single local media file."""

from __future__ import annotations

import logging

from ..utils.file_utils import build_output_path, ensure_directory, open_output_sink
from ..utils.http_client import HttpClient
from .m3u8_parser import ManifestParser
from .segment_pipeline import ProgressCallback, SegmentPipeline

DEFAULT_FILE_NAME = "index"
DEFAULT_SUFFIX = ".ts"


class PlaylistDownloader:
    """Fetches a playlist, then writes its segments to ``{dir}/{name}{suffix}``."""

    def __init__(self, http_client: HttpClient) -> None:
        self._parser = ManifestParser(http_client)
        self._pipeline = SegmentPipeline(http_client)

    def download(
        self,
        manifest_url: str,
        base_location: str,
        output_dir: str,
        file_name: str = DEFAULT_FILE_NAME,
        suffix: str = DEFAULT_SUFFIX,
        progress: ProgressCallback | None = None,
    ) -> str:
        directives = self._parser.load(manifest_url, suffix)
        logging.info(
            "Playlist version=%s type=%s target_duration=%s media_sequence=%s segments=%s",
            directives.version,
            directives.playlist_type,
            directives.target_duration,
            directives.media_sequence,
            len(directives.segment_refs),
        )

        ensure_directory(output_dir)
        output_file = build_output_path(output_dir, file_name, suffix)
        # A failed run leaves the partial file in place.
        with open_output_sink(output_file) as output:
            self._pipeline.run(directives, base_location, output, progress)
        logging.info("Saved %s segments to %s", len(directives.segment_refs), output_file)
        return output_file
