"""Utility helpers for HTTP and filesystem operations."""

from .http_client import HttpClient
from .file_utils import build_output_path, ensure_directory, open_output_sink, sanitize_filename

__all__ = ["HttpClient", "build_output_path", "ensure_directory", "open_output_sink", "sanitize_filename"]
