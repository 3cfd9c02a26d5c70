"""A tolerant scanner for the parts of TOML that manifest files use.

The scanner never fails: unterminated strings, tables and arrays are closed
at the point where the input stops making sense. This is what an editor
needs while a file is being typed. Every key and value keeps its range.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from deplens.parser.positions import Position, Range, range_extend

__all__ = ["TomlValue", "TomlEntry", "TomlSection", "scan_toml"]

_LINE_END = frozenset({"\n", "\r", ""})
_TOP_STOPS = frozenset({"\n", "\r", "#", ""})
_TABLE_STOPS = frozenset({"\n", "\r", "#", ",", "}", ""})
_SCALAR_STOPS = frozenset({"\n", "\r", "#", ",", "]", "}", ""})
_BLANK = frozenset({" ", "\t"})


@dataclass
class TomlValue:
    """A value with its raw text; strings keep their quotes."""

    class Kind(Enum):
        STRING = "string"
        TABLE = "table"
        ARRAY = "array"
        OTHER = "other"

    kind: TomlValue.Kind
    text: str
    range: Range
    items: list[TomlValue] = field(default_factory=list)
    entries: list[TomlEntry] = field(default_factory=list)

    def get(self, key: str) -> TomlValue | None:
        """Return the value of ``key`` in an inline table, if present."""
        return next(
            (entry.value for entry in self.entries if entry.name == key and entry.value is not None),
            None,
        )


@dataclass
class TomlEntry:
    """A ``key = value`` pair; ``value`` is ``None`` when it is still missing."""

    key: str
    key_range: Range
    value: Optional[TomlValue] = None

    @property
    def name(self) -> str:
        """The key with one pair of surrounding quotes removed."""
        key = self.key
        if len(key) >= 2 and key[0] == key[-1] and key[0] in "\"'":
            return key[1:-1]
        return key

    @property
    def range(self) -> Range:
        if self.value is None:
            return self.key_range
        return range_extend(self.key_range, self.value.range)


@dataclass
class TomlSection:
    """A table; the first section of every scan is the root, named ``None``."""

    name: Optional[str] = None
    header_range: Optional[Range] = None
    entries: list[TomlEntry] = field(default_factory=list)
    is_array: bool = False


class _Scanner:
    def __init__(self, text: str) -> None:
        self.text = text
        self.i = 0
        self._line_starts = [0] + [m.end() for m in re.finditer("\n", text)]

    def position(self, index: int) -> Position:
        line = bisect_right(self._line_starts, index) - 1
        return Position(line, index - self._line_starts[line])

    def span(self, start: int, end: int) -> Range:
        return Range(self.position(start), self.position(end))

    def peek(self, offset: int = 0) -> str:
        index = self.i + offset
        return self.text[index] if index < len(self.text) else ""

    def skip_inline_space(self) -> None:
        while self.peek() in _BLANK:
            self.i += 1

    def skip_comment(self) -> None:
        if self.peek() == "#":
            self.skip_line()

    def skip_line(self) -> None:
        while self.peek() not in ("\n", ""):
            self.i += 1

    def skip_blank(self) -> None:
        while True:
            self.skip_inline_space()
            self.skip_comment()
            if self.peek() in ("\n", "\r"):
                self.i += 1
                continue
            return

    def scan(self) -> list[TomlSection]:
        sections = [TomlSection()]
        while True:
            self.skip_blank()
            if not self.peek():
                return sections
            if self.peek() == "[":
                sections.append(self.header())
            else:
                entry = self.entry(_TOP_STOPS)
                if entry is not None:
                    sections[-1].entries.append(entry)
            self.skip_line()

    def header(self) -> TomlSection:
        start = self.i
        is_array = self.peek(1) == "["
        self.i += 2 if is_array else 1
        name_start = self.i
        while self.peek() not in ("]", "\n", ""):
            self.i += 1
        name = self.text[name_start : self.i].strip()
        if self.peek() == "]":
            self.i += 1
            if is_array and self.peek() == "]":
                self.i += 1
        return TomlSection(name=name, header_range=self.span(start, self.i), is_array=is_array)

    def entry(self, stops: frozenset) -> TomlEntry | None:
        start = self.i
        while (ch := self.peek()) not in stops and ch != "=":
            if ch in "\"'":
                self.string()
            else:
                self.i += 1
        key = self.text[start : self.i].rstrip()
        if not key:
            return None
        key_range = self.span(start, start + len(key))
        value = None
        if self.peek() == "=":
            self.i += 1
            self.skip_inline_space()
            if self.peek() not in stops:
                value = self.value()
        return TomlEntry(key=key, key_range=key_range, value=value)

    def value(self) -> TomlValue:
        start = self.i
        ch = self.peek()
        entries: list[TomlEntry] = []
        items: list[TomlValue] = []
        if ch in ('"', "'"):
            self.string()
            kind = TomlValue.Kind.STRING
            end = self.i
        elif ch == "{":
            entries = self.inline_table()
            kind = TomlValue.Kind.TABLE
            end = self.i
        elif ch == "[":
            items = self.array()
            kind = TomlValue.Kind.ARRAY
            end = self.i
        else:
            while self.peek() not in _SCALAR_STOPS:
                self.i += 1
            kind = TomlValue.Kind.OTHER
            end = start + len(self.text[start : self.i].rstrip())
        return TomlValue(
            kind=kind,
            text=self.text[start:end],
            range=self.span(start, end),
            items=items,
            entries=entries,
        )

    def string(self) -> None:
        quote = self.peek()
        triple = self.text.startswith(quote * 3, self.i)
        close = quote * 3 if triple else quote
        self.i += len(close)
        while True:
            ch = self.peek()
            if not ch:
                return
            if quote == '"' and ch == "\\":
                self.i += 2
                continue
            if self.text.startswith(close, self.i):
                self.i += len(close)
                return
            if not triple and ch in ("\n", "\r"):
                return
            self.i += 1

    def inline_table(self) -> list[TomlEntry]:
        self.i += 1
        entries: list[TomlEntry] = []
        while True:
            self.skip_inline_space()
            self.skip_comment()
            ch = self.peek()
            if ch in _LINE_END:
                return entries
            if ch == "}":
                self.i += 1
                return entries
            if ch == ",":
                self.i += 1
                continue
            before = self.i
            entry = self.entry(_TABLE_STOPS)
            if entry is not None:
                entries.append(entry)
            if self.i == before:
                self.i += 1

    def array(self) -> list[TomlValue]:
        self.i += 1
        items: list[TomlValue] = []
        while True:
            self.skip_blank()
            ch = self.peek()
            if not ch or ch == "}":
                return items
            if ch == "]":
                self.i += 1
                return items
            if ch in (",", "="):
                self.i += 1
                continue
            before = self.i
            items.append(self.value())
            if self.i == before:
                self.i += 1


def scan_toml(text: str) -> list[TomlSection]:
    """Split TOML text into sections of entries, keeping every range."""
    return _Scanner(text).scan()