"""Detection of the manifest language for a file name."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import PurePath
from urllib.parse import urlsplit

__all__ = ["Language", "JSON_FILE_NAMES", "TOML_FILE_NAMES"]

JSON_FILE_NAMES = ("package.json",)
TOML_FILE_NAMES = (
    "aftman.toml",
    "Cargo.toml",
    "Cargo.lock",
    "wally.toml",
    "wally.lock",
    "rokit.toml",
)


def _file_name(path: str | os.PathLike) -> str | None:
    name = PurePath(path).name
    if not name or name == "..":
        return None
    return name


def _extension(name: str) -> str | None:
    index = name.rfind(".")
    if index <= 0:
        return None
    return name[index + 1 :]


class Language(Enum):
    """The language of a manifest file."""

    JSON = "json"
    TOML = "toml"

    @classmethod
    def from_file_extension(cls, ext: str) -> Language | None:
        """Map a file extension (without the dot) to a language."""
        try:
            return cls(ext.strip().lower())
        except ValueError:
            return None

    @classmethod
    def from_file_name(cls, name: str | os.PathLike) -> Language | None:
        """Detect the language from a path's file name or extension."""
        file_name = _file_name(name)
        if file_name is None:
            return None
        stripped = file_name.strip()
        if stripped in JSON_FILE_NAMES:
            return cls.JSON
        if stripped in TOML_FILE_NAMES:
            return cls.TOML
        ext = _extension(file_name)
        if ext is None:
            return None
        return cls.from_file_extension(ext)

    @classmethod
    def from_file_uri(cls, uri: str) -> Language | None:
        """Detect the language from the path component of a URI."""
        return cls.from_file_name(urlsplit(str(uri)).path)