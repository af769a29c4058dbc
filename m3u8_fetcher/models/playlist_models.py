"""Pydantic models that describe a parsed media playlist."""

from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

KEY_METHOD = "METHOD"
KEY_URI = "URI"


class DirectiveSet(BaseModel):
    """Directives and segment references extracted from one m3u8 manifest.

    ``key`` is a single slot: when a manifest carries several ``#EXT-X-KEY``
    lines only the last one is kept. ``segment_refs`` keeps manifest order,
    which is also the order segments are written to the output.
    """

    model_config = ConfigDict(frozen=True)

    version: Optional[int] = None
    target_duration: Optional[int] = None
    playlist_type: Optional[str] = None
    media_sequence: Optional[int] = None
    key: Optional[Mapping[str, str]] = None
    segment_refs: Tuple[str, ...] = ()

    @field_validator("key")
    @classmethod
    def _freeze_key(cls, value: Optional[Mapping[str, str]]) -> Optional[Mapping[str, str]]:
        if value is None:
            return None
        return MappingProxyType(dict(value))

    @property
    def key_method(self) -> str:
        return (self.key or {}).get(KEY_METHOD, "")

    @property
    def key_uri(self) -> str:
        return (self.key or {}).get(KEY_URI, "")

    @property
    def is_encrypted(self) -> bool:
        """True when both METHOD and URI are present and non-empty."""

        return bool(self.key_method and self.key_uri)
