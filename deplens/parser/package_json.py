"""Dependencies declared in ``package.json`` files."""

from __future__ import annotations

from deplens.parser.document import ManifestDocument
from deplens.parser.json_scan import JsonMember, JsonValue, scan_json
from deplens.parser.language import Language
from deplens.parser.structs import (
    Dependency,
    DependencyKind,
    DependencySource,
    DependencySpec,
    Node,
    SourceKind,
    sort_dependencies,
)

__all__ = ["query_package_json_dependencies"]

_SECTION_KINDS = {
    "dependencies": DependencyKind.DEFAULT,
    "devDependencies": DependencyKind.DEV,
    "peerDependencies": DependencyKind.PEER,
    "optionalDependencies": DependencyKind.OPTIONAL,
    "bundleDependencies": DependencyKind.BUNDLED,
    "bundledDependencies": DependencyKind.BUNDLED,
}


def _dependency(kind: DependencyKind, member: JsonMember) -> Dependency | None:
    key, value = member.key, member.value
    if not key.content or value is None or value.kind is not JsonValue.Kind.STRING:
        return None
    if not value.content:
        return None

    text = value.content
    text_node = Node(text, value.content_range)
    version = None
    if text.startswith("git") or text.endswith(".git"):
        source = DependencySource(SourceKind.GIT, text_node)
    elif text.startswith(("file:", "./", "../")):
        source = DependencySource(SourceKind.PATH, text_node)
    else:
        source = DependencySource()
        version = text_node

    return Dependency(
        kind=kind,
        range=member.range,
        name=Node(key.content, key.content_range),
        spec=Node(DependencySpec(source=source, version=version), value.range),
    )


def query_package_json_dependencies(doc: ManifestDocument) -> list[Dependency]:
    """Return the dependencies of an npm manifest, sorted by position."""
    if doc.language is not Language.JSON:
        return []
    root = scan_json(doc.contents)
    if root is None or root.kind is not JsonValue.Kind.OBJECT:
        return []
    dependencies = []
    for section in root.members:
        kind = _SECTION_KINDS.get(section.name)
        table = section.value
        if kind is None or table is None or table.kind is not JsonValue.Kind.OBJECT:
            continue
        for member in table.members:
            dependency = _dependency(kind, member)
            if dependency is not None:
                dependencies.append(dependency)
    return sort_dependencies(dependencies)