"""Sequential fetch, decrypt and append of the segments in a playlist."""

from __future__ import annotations

import asyncio
import logging
from typing import BinaryIO, Callable, Optional

from ..errors import OutputError
from ..models import DirectiveSet
from ..utils.http_client import HttpClient
from .decryptor import SegmentDecryptor

SUPPORTED_METHOD = "AES-128"

ProgressCallback = Callable[[int, int], None]


def log_progress(completed: int, total: int) -> None:
    logging.info("%s/%s", completed, total)


class SegmentPipeline:
    """Downloads segments one after another and appends them to ``output``.

    Segment N+1 is not requested before segment N has been written and
    flushed, so any failure leaves the output holding exactly the segments
    completed so far.
    """

    def __init__(self, http_client: HttpClient) -> None:
        self._http_client = http_client

    def run(
        self,
        directives: DirectiveSet,
        base_location: str,
        output: BinaryIO,
        progress: Optional[ProgressCallback] = None,
    ) -> None:
        decryptor = self._build_decryptor(directives, base_location)
        asyncio.run(self._process_segments(directives, base_location, output, decryptor, progress or log_progress))

    def _build_decryptor(self, directives: DirectiveSet, base_location: str) -> Optional[SegmentDecryptor]:
        if not directives.is_encrypted:
            logging.info("Playlist is not encrypted; segments are written as-is")
            return None

        if directives.key_method != SUPPORTED_METHOD:
            logging.warning(
                "Unexpected key METHOD %s; attempting %s decryption",
                directives.key_method,
                SUPPORTED_METHOD,
            )
        key_url = f"{base_location}{directives.key_uri}"
        logging.info("Fetching %s key from %s", directives.key_method, key_url)
        return SegmentDecryptor(self._http_client.fetch_bytes(key_url))

    async def _process_segments(
        self,
        directives: DirectiveSet,
        base_location: str,
        output: BinaryIO,
        decryptor: Optional[SegmentDecryptor],
        progress: ProgressCallback,
    ) -> None:
        total = len(directives.segment_refs)
        logging.info("Downloading %s segments", total)
        try:
            for completed, ref in enumerate(directives.segment_refs, start=1):
                url = f"{base_location}/{ref}"
                logging.debug("Fetching segment #%s from %s", completed, url)
                data = await self._http_client.fetch_bytes_async(url)
                if decryptor is not None:
                    data = decryptor.decrypt(data)
                self._append(output, data)
                progress(completed, total)
        finally:
            await self._http_client.shutdown_async_session()

    @staticmethod
    def _append(output: BinaryIO, data: bytes) -> None:
        try:
            output.write(data)
            output.flush()
        except OSError as exc:
            raise OutputError(f"Writing segment to output failed: {exc}") from exc
