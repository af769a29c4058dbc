"""AES-128 segment decryption for playlists carrying an ``#EXT-X-KEY``."""

from __future__ import annotations

from Crypto.Cipher import AES
from Crypto.Util.Padding import unpad

from ..errors import CryptoError

KEY_SIZE = 16
# Shared by every segment; IV= attributes in the key line are not read.
ZERO_IV = bytes(AES.block_size)


class SegmentDecryptor:
    """Decrypts AES-128-CBC segments padded with PKCS#7."""

    def __init__(self, key: bytes) -> None:
        if len(key) != KEY_SIZE:
            raise CryptoError(f"AES-128 key must be {KEY_SIZE} bytes, got {len(key)}")
        self._key = key

    def decrypt(self, data: bytes) -> bytes:
        cipher = AES.new(self._key, AES.MODE_CBC, iv=ZERO_IV)
        try:
            return unpad(cipher.decrypt(data), AES.block_size)
        except ValueError as exc:
            raise CryptoError(f"Segment decryption failed: {exc}") from exc
