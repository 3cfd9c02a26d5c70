"""Dependencies declared in ``Cargo.toml`` files."""

from __future__ import annotations

from deplens.parser.document import ManifestDocument
from deplens.parser.language import Language
from deplens.parser.positions import range_extend
from deplens.parser.structs import (
    Dependency,
    DependencyKind,
    DependencySource,
    DependencySpec,
    Node,
)
from deplens.parser.toml_scan import TomlEntry, TomlValue, scan_toml

__all__ = ["query_cargo_toml_dependencies"]

_SECTION_KINDS = {
    "dependencies": DependencyKind.DEFAULT,
    "dev-dependencies": DependencyKind.DEV,
    "dev_dependencies": DependencyKind.DEV,
    "build-dependencies": DependencyKind.BUILD,
    "build_dependencies": DependencyKind.BUILD,
}


def _string_node(value: TomlValue | None) -> Node[str] | None:
    if value is None or value.kind is not TomlValue.Kind.STRING:
        return None
    return Node(value.text, value.range)


def _dependency(kind: DependencyKind, entry: TomlEntry) -> Dependency | None:
    name = Node(entry.key, entry.key_range)
    value = entry.value
    if value is None:
        return Dependency(kind=kind, range=entry.key_range, name=name)

    if value.kind is TomlValue.Kind.STRING:
        spec = DependencySpec(source=DependencySource(), version=_string_node(value))
    elif value.kind is TomlValue.Kind.TABLE:
        features = None
        features_value = value.get("features")
        if features_value is not None and features_value.kind is TomlValue.Kind.ARRAY:
            features = Node(
                [
                    Node(item.text, item.range)
                    for item in features_value.items
                    if item.kind is TomlValue.Kind.STRING
                ],
                features_value.range,
            )
        spec = DependencySpec(
            source=DependencySource(),
            version=_string_node(value.get("version")),
            features=features,
        )
    else:
        return None

    return Dependency(
        kind=kind,
        range=range_extend(entry.key_range, value.range),
        name=name,
        spec=Node(spec, value.range),
    )


def query_cargo_toml_dependencies(doc: ManifestDocument) -> list[Dependency]:
    """Return the dependencies of a Cargo manifest in document order."""
    if doc.language is not Language.TOML:
        return []
    dependencies = []
    for section in scan_toml(doc.contents):
        kind = None if section.is_array else _SECTION_KINDS.get(section.name)
        if kind is None:
            continue
        for entry in section.entries:
            dependency = _dependency(kind, entry)
            if dependency is not None:
                dependencies.append(dependency)
    return dependencies