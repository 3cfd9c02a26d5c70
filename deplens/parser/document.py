"""A manifest file's contents paired with its detected language."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from deplens.parser.language import Language

__all__ = ["ManifestDocument"]


@dataclass
class ManifestDocument:
    """The contents of a manifest file, identified by its URI."""

    uri: str
    contents: str
    language: Language

    @classmethod
    def from_uri(cls, uri: str, contents: str) -> ManifestDocument | None:
        """Create a document, or return ``None`` if the language is unknown."""
        language = Language.from_file_uri(uri)
        if language is None:
            return None
        return cls(uri=str(uri), contents=str(contents), language=language)

    @classmethod
    def from_file(cls, file_path: str | os.PathLike, contents: str) -> ManifestDocument | None:
        """Create a document from a path, resolved against the working directory."""
        path = Path(file_path)
        if not path.is_absolute():
            path = Path.cwd() / path
        return cls.from_uri(path.as_uri(), contents)