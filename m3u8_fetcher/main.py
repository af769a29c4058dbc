from __future__ import annotations

import argparse
import logging
import os
import sys

from dotenv import load_dotenv

from .downloader.playlist_downloader import DEFAULT_FILE_NAME, DEFAULT_SUFFIX, PlaylistDownloader
from .errors import M3U8FetchError
from .utils.http_client import DEFAULT_TIMEOUT, HttpClient

load_dotenv()

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def _env_str(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return value


def _env_int(name: str) -> int | None:
    value = _env_str(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _env_bool(name: str) -> bool:
    value = _env_str(name)
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Download an HLS playlist into a single media file.")
    parser.add_argument("-m", "--m3u8-url", default=_env_str("M3U8_URL"), help="URL of the m3u8 playlist")
    parser.add_argument(
        "-d",
        "--domain",
        default=_env_str("M3U8_DOMAIN"),
        help="Base location that segment and key URIs are resolved against",
    )
    parser.add_argument("-l", "--output-dir", default=_env_str("OUTPUT_DIR") or ".", help="Directory to store the output file")
    parser.add_argument("-f", "--file-name", default=_env_str("FILE_NAME") or DEFAULT_FILE_NAME, help="Output file name without extension")
    parser.add_argument(
        "-s",
        "--suffix",
        default=_env_str("SUFFIX") or DEFAULT_SUFFIX,
        help="Segment suffix used to pick segment lines; also the output extension",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=_env_int("HTTP_TIMEOUT") or DEFAULT_TIMEOUT,
        help="HTTP timeout in seconds",
    )
    parser.add_argument("-v", "--verbose", action="store_true", default=_env_bool("VERBOSE"), help="Enable debug logging")
    return parser.parse_args(argv)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    if not args.m3u8_url or not args.domain:
        logging.error("--m3u8-url and --domain are required (or set M3U8_URL / M3U8_DOMAIN).")
        return EXIT_USAGE
    if not args.suffix:
        logging.error("--suffix must not be empty.")
        return EXIT_USAGE

    with HttpClient(timeout=args.timeout) as http_client:
        downloader = PlaylistDownloader(http_client)
        try:
            downloader.download(
                args.m3u8_url,
                args.domain,
                args.output_dir,
                file_name=args.file_name,
                suffix=args.suffix,
            )
        except M3U8FetchError as exc:
            logging.error("Download aborted: %s", exc)
            return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
