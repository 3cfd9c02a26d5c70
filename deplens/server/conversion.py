"""Decoding of file contents read from disk."""

from __future__ import annotations

import os
from pathlib import PurePath

__all__ = ["convert_to_utf8"]


def convert_to_utf8(file_path: str | os.PathLike, contents: bytes) -> str:
    """Decode ``contents`` as UTF-8, raising ``OSError`` on failure."""
    name = PurePath(file_path).name
    if not name or name == "..":
        raise OSError(f"Path has no file name: {str(file_path)!r}")
    try:
        return bytes(contents).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise OSError(
            "Failed to parse file as utf8"
            f"\nFile path: {str(file_path)!r}"
            f"\nFile name: {name!r}"
            f"\nError: {exc}"
        ) from exc