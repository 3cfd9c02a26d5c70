"""Data structures describing dependencies found in manifest files."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Iterable, Optional, TypeVar

from deplens.parser.positions import (
    Position,
    Range,
    range_contains,
    range_extend,
    range_for_substring,
)

__all__ = [
    "Node",
    "DependencyKind",
    "SourceKind",
    "DependencySource",
    "DependencySpec",
    "Dependency",
    "SimpleDependency",
    "ParsedSpec",
    "ParsedSpecFull",
    "sort_dependencies",
    "sort_simple_dependencies",
    "find_at_pos",
]

T = TypeVar("T")
I = TypeVar("I")


@dataclass
class Node(Generic[T]):
    """A piece of parsed content together with its location in the document."""

    contents: T
    range: Range = field(default_factory=Range)

    def contains(self, pos: Position) -> bool:
        return range_contains(self.range, pos)

    def quoted(self) -> str:
        """The raw text, including any surrounding quotes."""
        return str(self.contents)

    def unquoted(self) -> str:
        """The text with one pair of surrounding double quotes removed."""
        text = self.quoted()
        if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
            return text[1:-1]
        return text


class DependencyKind(Enum):
    """The section a dependency was declared in."""

    DEFAULT = "default"
    DEV = "dev"
    BUILD = "build"
    PEER = "peer"
    OPTIONAL = "optional"
    BUNDLED = "bundled"
    SERVER = "server"


class SourceKind(Enum):
    """Where a dependency is fetched from."""

    REGISTRY = "registry"
    PATH = "path"
    GIT = "git"


@dataclass
class DependencySource:
    """The source of a dependency; path and git sources carry their text."""

    kind: SourceKind = SourceKind.REGISTRY
    node: Optional[Node[str]] = None

    def contents(self) -> str | None:
        if self.kind is SourceKind.REGISTRY or self.node is None:
            return None
        return self.node.contents


@dataclass
class DependencySpec:
    """Source, version and features of a dependency."""

    source: DependencySource = field(default_factory=DependencySource)
    version: Optional[Node[str]] = None
    features: Optional[Node[list]] = None

    def raw_version_string(self) -> str:
        return self.version.unquoted() if self.version is not None else ""


@dataclass
class Dependency:
    """A dependency; ``spec`` is ``None`` while it is only partially written."""

    kind: DependencyKind
    range: Range
    name: Node[str]
    spec: Optional[Node[DependencySpec]] = None

    def is_full(self) -> bool:
        return self.spec is not None

    def raw_version_string(self) -> str:
        if self.spec is None:
            return ""
        return self.spec.contents.raw_version_string()


@dataclass
class SimpleDependency:
    """A dependency given as a single ``"author/name@version"`` string."""

    kind: DependencyKind
    name: Node[str]
    spec: Node[str]

    @property
    def range(self) -> Range:
        return range_extend(self.name.range, self.spec.range)

    def parsed_spec(self) -> ParsedSpec:
        return ParsedSpec.from_node(self.spec)

    def raw_version_string(self) -> str:
        version = self.parsed_spec().version
        return version.unquoted() if version is not None else ""


@dataclass
class ParsedSpec:
    """A possibly incomplete ``author/name@version`` specification."""

    author: Node[str]
    name: Optional[Node[str]] = None
    version: Optional[Node[str]] = None

    @classmethod
    def from_node(cls, node: Node[str]) -> ParsedSpec:
        raw = node.unquoted()
        quoted = node.quoted()

        author, slash, rest = raw.partition("/")
        name: str | None = None
        version: str | None = None
        if slash:
            name, at, after = rest.partition("@")
            if at:
                version = after

        # An empty part cannot be located by search, so it gets a
        # zero-length range at the end of the (unquoted) text instead.
        end_char = node.range.end.character
        if len(raw) < len(quoted):
            end_char = max(end_char - 1, 0)
        end_pos = Position(node.range.end.line, end_char)
        end_range = Range(end_pos, end_pos)

        def locate(part: str) -> Node[str]:
            if not part:
                return Node("", end_range)
            return Node(part, range_for_substring(node.range, quoted, part))

        return cls(
            author=locate(author),
            name=locate(name) if name is not None else None,
            version=locate(version) if version is not None else None,
        )

    def into_full(self) -> ParsedSpecFull | None:
        if self.name is None or self.version is None:
            return None
        return ParsedSpecFull(author=self.author, name=self.name, version=self.version)

    def raw_version_string(self) -> str:
        return self.version.unquoted() if self.version is not None else ""


@dataclass
class ParsedSpecFull:
    """A complete ``author/name@version`` specification."""

    author: Node[str]
    name: Node[str]
    version: Node[str]

    @property
    def range(self) -> Range:
        return range_extend(self.author.range, self.version.range)

    def raw_version_string(self) -> str:
        return self.version.unquoted()


def sort_dependencies(deps: Iterable[Dependency]) -> list[Dependency]:
    """Sort full dependencies by spec range, partial ones last in original order."""

    def key(dep: Dependency):
        if dep.spec is None:
            return (1,)
        return (0, dep.spec.range.start, dep.spec.range.end)

    return sorted(deps, key=key)


def sort_simple_dependencies(deps: Iterable[SimpleDependency]) -> list[SimpleDependency]:
    """Sort simple dependencies by the range of their names."""
    return sorted(deps, key=lambda dep: (dep.name.range.start, dep.name.range.end))


def find_at_pos(items: Iterable[I], pos: Position) -> I | None:
    """Return the first item whose range contains ``pos``."""
    return next((item for item in items if range_contains(item.range, pos)), None)