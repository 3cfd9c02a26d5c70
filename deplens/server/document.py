"""Open text documents with UTF-16 position mapping and edits."""

from __future__ import annotations

import logging
import re
from bisect import bisect_right
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Optional
from urllib.parse import unquote, urlsplit

from deplens.parser.document import ManifestDocument
from deplens.parser.positions import Position, Range

__all__ = ["TextEdit", "TextChange", "Document"]

logger = logging.getLogger(__name__)

MIN_VERSION = -(2**31)


def _utf16_len(text: str) -> int:
    return sum(2 if ord(ch) > 0xFFFF else 1 for ch in text)


def _line_starts(text: str) -> list[int]:
    return [0] + [m.end() for m in re.finditer("\n", text)]


def _uri_file_name(uri: str) -> str | None:
    name = PurePosixPath(unquote(urlsplit(uri).path)).name
    return name or None


@dataclass
class TextEdit:
    """A replacement of the text in ``range`` with ``new_text``."""

    range: Range
    new_text: str


@dataclass
class TextChange:
    """A change sent by the client; without a range it replaces everything."""

    text: str
    range: Optional[Range] = None


@dataclass
class Document:
    """A tracked text document and its parsed manifest."""

    uri: str
    name: str
    version: int
    opened: bool
    text: str
    inner: ManifestDocument
    _line_starts: list[int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._line_starts = _line_starts(self.text)

    @classmethod
    def create(
        cls,
        uri: str,
        text: str = "",
        version: int = MIN_VERSION,
        opened: bool = False,
        name: str | None = None,
    ) -> Document:
        """Build a document, raising ``ValueError`` for unnamed or unknown files."""
        if name is None:
            name = _uri_file_name(uri)
            if name is None:
                raise ValueError(f"encountered document without file name: {uri}")
        inner = ManifestDocument.from_uri(uri, text)
        if inner is None:
            raise ValueError(f"encountered unexpected file name with no corresponding language: {uri}")
        return cls(uri=uri, name=name, version=version, opened=opened, text=text, inner=inner)

    def _line_bounds(self, line: int) -> tuple[int, int]:
        if not 0 <= line < len(self._line_starts):
            raise ValueError(f"invalid line {line}")
        start = self._line_starts[line]
        if line + 1 < len(self._line_starts):
            end = self._line_starts[line + 1] - 1
        else:
            end = len(self.text)
        return start, end

    def position_to_offset(self, position: Position) -> int:
        """The string offset of a UTF-16 based position."""
        offset, end = self._line_bounds(position.line)
        units = 0
        while units < position.character:
            if offset >= end:
                raise ValueError(f"position {position} is past the end of its line")
            units += 2 if ord(self.text[offset]) > 0xFFFF else 1
            offset += 1
        if units != position.character:
            raise ValueError(f"position {position} splits a character")
        return offset

    def offset_to_position(self, offset: int) -> Position:
        """The UTF-16 based position of a string offset."""
        if not 0 <= offset <= len(self.text):
            raise ValueError(f"offset {offset} is out of bounds")
        line = bisect_right(self._line_starts, offset) - 1
        return Position(line, _utf16_len(self.text[self._line_starts[line] : offset]))

    def range_from_span(self, start: int, end: int) -> Range:
        return Range(self.offset_to_position(start), self.offset_to_position(end))

    def range_to_span(self, rng: Range) -> tuple[int, int]:
        return self.position_to_offset(rng.start), self.position_to_offset(rng.end)

    def create_edit(self, rng: Range, new_text: str) -> TextEdit:
        start, end = self.range_to_span(rng)
        logger.debug(
            "Created edit: '%s' at range '%d:%d -> %d:%d' becomes '%s'",
            self.text[start:end],
            rng.start.line,
            rng.start.character,
            rng.end.line,
            rng.end.character,
            new_text,
        )
        return TextEdit(range=rng, new_text=new_text)

    def create_substring_edit(self, line: int, substring: str, replacement: str) -> TextEdit:
        """Replace the first occurrence of ``substring`` on ``line``."""
        start, end = self._line_bounds(line)
        line_text = self.text[start:end]
        index = line_text.find(substring)
        if index < 0:
            raise ValueError(f"invalid source text: {substring!r} not on line {line}")
        first = _utf16_len(line_text[:index])
        rng = Range(Position(line, first), Position(line, first + _utf16_len(substring)))
        return self.create_edit(rng, replacement)

    def set_text(self, new_text: str) -> None:
        self.text = new_text
        self._line_starts = _line_starts(new_text)
        self.inner.contents = new_text

    def apply_change(self, change: TextChange) -> None:
        if change.range is None:
            self.set_text(change.text)
            return
        start, end = self.range_to_span(change.range)
        self.set_text(self.text[:start] + change.text + self.text[end:])