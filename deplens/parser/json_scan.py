"""A tolerant scanner for JSON manifest files.

The scanner never fails: unterminated strings end at the end of their line,
unclosed objects and arrays end where the input ends, and stray commas are
skipped. This is what an editor needs while a file is being typed. Every
value keeps its range, and strings also keep the range of their contents.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from deplens.parser.positions import Position, Range, range_extend

__all__ = ["JsonValue", "JsonMember", "scan_json"]

_WHITESPACE = frozenset({" ", "\t", "\n", "\r"})
_SCALAR_STOPS = frozenset({" ", "\t", "\n", "\r", ",", "}", "]", ":", '"', ""})
_VALUE_STOPS = frozenset({"", ",", "}", "]"})


@dataclass
class JsonValue:
    """A value with its raw text; strings keep their quotes in ``text``."""

    class Kind(Enum):
        STRING = "string"
        OBJECT = "object"
        ARRAY = "array"
        OTHER = "other"

    kind: JsonValue.Kind
    text: str
    range: Range
    content: Optional[str] = None
    content_range: Optional[Range] = None
    members: list[JsonMember] = field(default_factory=list)
    items: list[JsonValue] = field(default_factory=list)

    def get(self, key: str) -> JsonValue | None:
        """Return the value of ``key`` in an object, if present."""
        return next(
            (member.value for member in self.members if member.name == key and member.value is not None),
            None,
        )


@dataclass
class JsonMember:
    """A ``"key": value`` pair; ``value`` is ``None`` when it is still missing."""

    key: JsonValue
    value: Optional[JsonValue] = None

    @property
    def name(self) -> str:
        """The key without its quotes."""
        return self.key.content or ""

    @property
    def range(self) -> Range:
        if self.value is None:
            return self.key.range
        return range_extend(self.key.range, self.value.range)


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

    def peek(self) -> str:
        return self.text[self.i] if self.i < len(self.text) else ""

    def skip_whitespace(self) -> None:
        while self.peek() in _WHITESPACE and self.peek():
            self.i += 1

    def value(self) -> JsonValue:
        ch = self.peek()
        if ch == '"':
            return self.string()
        start = self.i
        if ch == "{":
            members = self.obj()
            return JsonValue(
                kind=JsonValue.Kind.OBJECT,
                text=self.text[start : self.i],
                range=self.span(start, self.i),
                members=members,
            )
        if ch == "[":
            items = self.array()
            return JsonValue(
                kind=JsonValue.Kind.ARRAY,
                text=self.text[start : self.i],
                range=self.span(start, self.i),
                items=items,
            )
        while self.peek() not in _SCALAR_STOPS:
            self.i += 1
        return JsonValue(
            kind=JsonValue.Kind.OTHER,
            text=self.text[start : self.i],
            range=self.span(start, self.i),
        )

    def string(self) -> JsonValue:
        start = self.i
        self.i += 1
        closed = False
        while True:
            ch = self.peek()
            if not ch or ch in ("\n", "\r"):
                break
            if ch == "\\":
                self.i = min(self.i + 2, len(self.text))
                continue
            if ch == '"':
                self.i += 1
                closed = True
                break
            self.i += 1
        content_end = self.i - 1 if closed else self.i
        return JsonValue(
            kind=JsonValue.Kind.STRING,
            text=self.text[start : self.i],
            range=self.span(start, self.i),
            content=self.text[start + 1 : content_end],
            content_range=self.span(start + 1, content_end),
        )

    def obj(self) -> list[JsonMember]:
        self.i += 1
        members: list[JsonMember] = []
        while True:
            self.skip_whitespace()
            ch = self.peek()
            if not ch:
                return members
            if ch == "}":
                self.i += 1
                return members
            if ch in (",", "]", ":"):
                self.i += 1
                continue
            if ch == '"':
                key = self.string()
                self.skip_whitespace()
                value = None
                if self.peek() == ":":
                    self.i += 1
                    self.skip_whitespace()
                    if self.peek() not in _VALUE_STOPS:
                        value = self.value()
                members.append(JsonMember(key=key, value=value))
                continue
            before = self.i
            self.value()
            if self.i == before:
                self.i += 1

    def array(self) -> list[JsonValue]:
        self.i += 1
        items: list[JsonValue] = []
        while True:
            self.skip_whitespace()
            ch = self.peek()
            if not ch or ch == "}":
                return items
            if ch == "]":
                self.i += 1
                return items
            if ch in (",", ":"):
                self.i += 1
                continue
            before = self.i
            items.append(self.value())
            if self.i == before:
                self.i += 1


def scan_json(text: str) -> JsonValue | None:
    """Return the top-level value of JSON text, or ``None`` if there is none."""
    scanner = _Scanner(text)
    scanner.skip_whitespace()
    if not scanner.peek():
        return None
    return scanner.value()