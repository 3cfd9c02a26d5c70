"""Line/character positions and ranges inside a text document."""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = [
    "Position",
    "Range",
    "range_contains",
    "range_extend",
    "range_for_substring",
    "pos_min",
    "pos_max",
]


@dataclass(frozen=True, order=True)
class Position:
    """A zero-based line and character offset."""

    line: int = 0
    character: int = 0


@dataclass(frozen=True, order=True)
class Range:
    """A span between two positions, end inclusive for containment checks."""

    start: Position = field(default_factory=Position)
    end: Position = field(default_factory=Position)


def range_contains(rng: Range, pos: Position) -> bool:
    """Return whether ``pos`` lies within ``rng`` (both ends inclusive)."""
    return rng.start <= pos <= rng.end


def range_extend(rng: Range, other: Range) -> Range:
    """Return the smallest range covering both ranges."""
    return Range(start=pos_min(rng.start, other.start), end=pos_max(rng.end, other.end))


def range_for_substring(original_range: Range, original_string: str, substring: str) -> Range:
    """Locate the first occurrence of ``substring`` and return its range.

    The range is computed on the starting line of ``original_range``.
    Raises ``ValueError`` if the substring does not occur.
    """
    offset = original_string.find(substring)
    if offset < 0:
        raise ValueError(f"substring {substring!r} not found in {original_string!r}")
    line = original_range.start.line
    first = original_range.start.character + offset
    return Range(
        start=Position(line, first),
        end=Position(line, first + len(substring)),
    )


def pos_min(pos: Position, other: Position) -> Position:
    """Return the earlier of two positions."""
    if pos.line == other.line:
        return Position(pos.line, min(pos.character, other.character))
    return pos if pos.line < other.line else other


def pos_max(pos: Position, other: Position) -> Position:
    """Return the later of two positions."""
    if pos.line == other.line:
        return Position(pos.line, max(pos.character, other.character))
    return other if pos.line < other.line else pos