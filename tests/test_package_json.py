import pytest

from deplens.parser.document import ManifestDocument
from deplens.parser.package_json import query_package_json_dependencies
from deplens.parser.structs import DependencyKind, SourceKind

DEFAULT = DependencyKind.DEFAULT


def _query(contents):
    doc = ManifestDocument.from_file("package.json", contents)
    return query_package_json_dependencies(doc)


def _check(contents, expected):
    deps = _query(contents)
    assert len(deps) == len(expected), "mismatched number of dependencies"
    for dep, (kind, name, version, source) in zip(deps, expected):
        assert dep.kind is kind
        assert dep.name.contents == name
        spec = dep.spec.contents
        assert (spec.version.unquoted() if spec.version else None) == version
        if source is not None:
            source_kind, source_text = source
            assert spec.source.kind is source_kind
            assert spec.source.contents() == source_text


def test_empty():
    _check('{\n\t"dependencies": {}\n}', [])


def test_simple_version():
    _check(
        '{\n "dependencies": {\n  "express": "^4.17.1"\n }\n}',
        [(DEFAULT, "express", "^4.17.1", None)],
    )


def test_multiple_dependencies():
    _check(
        '{\n "dependencies": {\n  "express": "^4.17.1",\n  "typescript": "~4.5.0"\n }\n}',
        [
            (DEFAULT, "express", "^4.17.1", None),
            (DEFAULT, "typescript", "~4.5.0", None),
        ],
    )


@pytest.mark.parametrize(
    "section, kind, name, version",
    [
        ("devDependencies", DependencyKind.DEV, "jest", "^27.0.0"),
        ("peerDependencies", DependencyKind.PEER, "react", "^17.0.0"),
        ("optionalDependencies", DependencyKind.OPTIONAL, "colors", "^1.4.0"),
    ],
)
def test_section_kinds(section, kind, name, version):
    _check(
        f'{{\n "{section}": {{\n  "{name}": "{version}"\n }}\n}}',
        [(kind, name, version, None)],
    )


def test_mixed_dependencies():
    _check(
        """{
            "dependencies": {
                "express": "^4.17.1"
            },
            "devDependencies": {
                "jest": "^27.0.0"
            },
            "peerDependencies": {
                "react": "^17.0.0"
            }
        }""",
        [
            (DEFAULT, "express", "^4.17.1", None),
            (DependencyKind.DEV, "jest", "^27.0.0", None),
            (DependencyKind.PEER, "react", "^17.0.0", None),
        ],
    )


def test_git_dependencies():
    _check(
        """{
            "dependencies": {
                "debug": "git://github.com/debug/debug.git#master",
                "express": "git+https://github.com/expressjs/express.git"
            }
        }""",
        [
            (DEFAULT, "debug", None, (SourceKind.GIT, "git://github.com/debug/debug.git#master")),
            (
                DEFAULT,
                "express",
                None,
                (SourceKind.GIT, "git+https://github.com/expressjs/express.git"),
            ),
        ],
    )


def test_local_dependencies():
    _check(
        """{
            "dependencies": {
                "local-pkg": "file:../local-pkg",
                "sibling-pkg": "file:./sibling-pkg/index.js",
            }
        }""",
        [
            (DEFAULT, "local-pkg", None, (SourceKind.PATH, "file:../local-pkg")),
            (DEFAULT, "sibling-pkg", None, (SourceKind.PATH, "file:./sibling-pkg/index.js")),
        ],
    )


def test_mixed_sources():
    _check(
        """{
            "dependencies": {
                "express": "^4.17.1",
                "local-pkg": "file:../local-pkg",
                "private-pkg": "git+ssh://[email]/org/repo.git"
            }
        }""",
        [
            (DEFAULT, "express", "^4.17.1", (SourceKind.REGISTRY, None)),
            (DEFAULT, "local-pkg", None, (SourceKind.PATH, "file:../local-pkg")),
            (DEFAULT, "private-pkg", None, (SourceKind.GIT, "git+ssh://[email]/org/repo.git")),
        ],
    )


def test_spec_range_covers_quoted_value():
    contents = '{"dependencies": {"express": "^4.17.1"}}'
    dep = _query(contents)[0]
    rng = dep.spec.range
    assert contents[rng.start.character : rng.end.character] == '"^4.17.1"'
    assert dep.raw_version_string() == "^4.17.1"
    assert dep.spec.range.start > dep.name.range.end


def test_unknown_sections_are_ignored():
    assert _query('{"scripts": {"build": "tsc"}, "name": "pkg"}') == []


def test_non_json_document_gives_nothing():
    doc = ManifestDocument.from_file("Cargo.toml", '{"dependencies": {"a": "1"}}')
    assert query_package_json_dependencies(doc) == []