"""Filesystem helpers for preparing the output folder and file."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import BinaryIO

from ..errors import OutputError

INVALID_FILENAME_CHARS = re.compile(r"[\\/:*?\"<>|]")


def sanitize_filename(value: str, default: str = "file") -> str:
    """Removes characters that are invalid on most filesystems."""

    sanitized = INVALID_FILENAME_CHARS.sub("", value or "").strip()
    return sanitized or default


def ensure_directory(path: str) -> str:
    """Creates a directory (and its parents) if needed."""

    try:
        Path(path).mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputError(f"Cannot create output directory {path}: {exc}") from exc
    return path


def build_output_path(output_dir: str, file_name: str, suffix: str) -> str:
    """Returns ``{output_dir}/{file_name}{suffix}``."""

    safe_name = sanitize_filename(file_name, default="index")
    return os.path.join(output_dir, f"{safe_name}{suffix}")


def open_output_sink(path: str) -> BinaryIO:
    """Creates (or truncates) ``path`` for binary writing."""

    try:
        return open(path, "wb")
    except OSError as exc:
        raise OutputError(f"Cannot open {path} for writing: {exc}") from exc
