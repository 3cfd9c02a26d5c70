"""Dependencies declared in ``wally.toml`` files."""

from __future__ import annotations

from deplens.parser.document import ManifestDocument
from deplens.parser.language import Language
from deplens.parser.structs import (
    DependencyKind,
    Node,
    SimpleDependency,
    sort_simple_dependencies,
)
from deplens.parser.toml_scan import TomlValue, scan_toml

__all__ = ["query_wally_toml_dependencies"]

_SECTION_KINDS = {
    "dependencies": DependencyKind.DEFAULT,
    "dev-dependencies": DependencyKind.DEV,
    "server-dependencies": DependencyKind.SERVER,
}


def query_wally_toml_dependencies(doc: ManifestDocument) -> list[SimpleDependency]:
    """Return the dependencies of a wally manifest, sorted by position."""
    if doc.language is not Language.TOML:
        return []
    dependencies = [
        SimpleDependency(
            kind=_SECTION_KINDS[section.name],
            name=Node(entry.key, entry.key_range),
            spec=Node(entry.value.text, entry.value.range),
        )
        for section in scan_toml(doc.contents)
        if section.name in _SECTION_KINDS and not section.is_array
        for entry in section.entries
        if entry.value is not None and entry.value.kind is TomlValue.Kind.STRING
    ]
    return sort_simple_dependencies(dependencies)