"""Data models for parsed playlists."""

from .playlist_models import KEY_METHOD, KEY_URI, DirectiveSet

__all__ = ["DirectiveSet", "KEY_METHOD", "KEY_URI"]
