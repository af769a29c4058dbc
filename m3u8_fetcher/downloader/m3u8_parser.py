"""Tools for parsing m3u8 playlists into directives and segment references."""

from __future__ import annotations

import enum
import logging
from typing import Dict, List, NamedTuple, Optional

from ..errors import ParseError
from ..models import KEY_METHOD, KEY_URI, DirectiveSet
from ..utils.http_client import HttpClient

EXTM3U = "#EXTM3U"
EXT_X_VERSION = "#EXT-X-VERSION:"
EXT_X_TARGETDURATION = "#EXT-X-TARGETDURATION:"
EXT_X_PLAYLIST_TYPE = "#EXT-X-PLAYLIST-TYPE:"
EXT_X_MEDIA_SEQUENCE = "#EXT-X-MEDIA-SEQUENCE:"
EXT_X_KEY = "#EXT-X-KEY:"

METHOD_ATTR = "METHOD="
URI_ATTR = "URI="

UINT32_MAX = 2**32 - 1


class DirectiveKind(enum.Enum):
    VERSION = "version"
    TARGET_DURATION = "target_duration"
    PLAYLIST_TYPE = "playlist_type"
    MEDIA_SEQUENCE = "media_sequence"
    KEY = "key"
    UNRECOGNIZED = "unrecognized"


DIRECTIVE_PREFIXES = (
    (EXT_X_VERSION, DirectiveKind.VERSION),
    (EXT_X_TARGETDURATION, DirectiveKind.TARGET_DURATION),
    (EXT_X_PLAYLIST_TYPE, DirectiveKind.PLAYLIST_TYPE),
    (EXT_X_MEDIA_SEQUENCE, DirectiveKind.MEDIA_SEQUENCE),
    (EXT_X_KEY, DirectiveKind.KEY),
)

NUMERIC_KINDS = {
    DirectiveKind.VERSION,
    DirectiveKind.TARGET_DURATION,
    DirectiveKind.MEDIA_SEQUENCE,
}


class Directive(NamedTuple):
    kind: DirectiveKind
    value: str


def classify_line(line: str) -> Directive:
    """Returns the directive a line carries; the first matching prefix wins."""

    for prefix, kind in DIRECTIVE_PREFIXES:
        if line.startswith(prefix):
            return Directive(kind, line[len(prefix):])
    return Directive(DirectiveKind.UNRECOGNIZED, line)


def parse_unsigned(value: str) -> int:
    """Parses a base-10 unsigned 32-bit integer, rejecting signs and spaces."""

    if not value or not (value.isascii() and value.isdigit()):
        raise ValueError(f"{value!r} is not an unsigned integer")
    number = int(value)
    if number > UINT32_MAX:
        raise ValueError(f"{value} does not fit in 32 bits")
    return number


def parse_key_attributes(value: str) -> Dict[str, str]:
    """Extracts METHOD and URI from an ``#EXT-X-KEY`` attribute list."""

    key: Dict[str, str] = {}
    for field in value.split(","):
        if field.startswith(METHOD_ATTR):
            key[KEY_METHOD] = field[len(METHOD_ATTR):]
        elif field.startswith(URI_ATTR):
            key[KEY_URI] = field[len(URI_ATTR):].strip('"')
    return key


class ManifestParser:
    """Turns m3u8 text into a :class:`DirectiveSet`."""

    def __init__(self, http_client: Optional[HttpClient] = None) -> None:
        self._http_client = http_client

    def load(self, manifest_url: str, segment_suffix: str) -> DirectiveSet:
        """Fetches ``manifest_url`` and parses it."""

        if self._http_client is None:
            raise ValueError("ManifestParser.load requires an http client")
        logging.info("Fetching playlist %s", manifest_url)
        text = self._http_client.fetch_text(manifest_url)
        return self.parse(text, segment_suffix)

    def parse(self, text: str, segment_suffix: str) -> DirectiveSet:
        if not segment_suffix:
            raise ValueError("segment_suffix must not be empty")

        fields: Dict[str, object] = {}
        segment_refs: List[str] = []
        lines = text.split("\n")
        if lines[0].rstrip("\r") != EXTM3U:
            logging.warning("Playlist does not start with %s", EXTM3U)

        for line_number, raw_line in enumerate(lines, start=1):
            line = raw_line[:-1] if raw_line.endswith("\r") else raw_line
            directive = classify_line(line)

            if directive.kind in NUMERIC_KINDS:
                try:
                    fields[directive.kind.value] = parse_unsigned(directive.value)
                except ValueError as exc:
                    raise ParseError(str(exc), line_number=line_number, line=line) from exc
            elif directive.kind is DirectiveKind.PLAYLIST_TYPE:
                fields[directive.kind.value] = directive.value
            elif directive.kind is DirectiveKind.KEY:
                # A later key line replaces the earlier one entirely.
                fields[directive.kind.value] = parse_key_attributes(directive.value)

            # Independent of the directive match: directive lines containing the
            # suffix end up here as well.
            if segment_suffix in line:
                segment_refs.append(line)

        if not segment_refs:
            logging.warning("Playlist did not contain any %s segments", segment_suffix)
        logging.debug("Parsed %s segment references", len(segment_refs))
        return DirectiveSet(segment_refs=tuple(segment_refs), **fields)
