from deplens.parser.document import ManifestDocument
from deplens.parser.structs import DependencyKind
from deplens.parser.wally_toml import query_wally_toml_dependencies

DEFAULT = DependencyKind.DEFAULT


def _query(contents):
    doc = ManifestDocument.from_file("wally.toml", contents)
    return query_wally_toml_dependencies(doc)


def _check(contents, expected):
    deps = _query(contents)
    assert len(deps) == len(expected), "mismatched number of dependencies"
    for dep, (kind, name, spec) in zip(deps, expected):
        assert dep.kind is kind
        assert dep.name.unquoted() == name
        assert dep.spec.unquoted() == spec


def test_empty():
    _check("[dependencies]", [])


def test_single():
    _check(
        '\n[dependencies]\nFusion = "elttob/fusion@0.3.0"\n',
        [(DEFAULT, "Fusion", "elttob/fusion@0.3.0")],
    )


def test_multiple():
    _check(
        """
        [dependencies]
        Fusion = "elttob/fusion@0.3.0"
        UILabs = "pepeeltoro41/ui-labs@2.3.0"
        """,
        [
            (DEFAULT, "Fusion", "elttob/fusion@0.3.0"),
            (DEFAULT, "UILabs", "pepeeltoro41/ui-labs@2.3.0"),
        ],
    )


def test_server_dependencies():
    _check(
        '\n[server-dependencies]\nServerPkg = "user/repo@1.0.0"\n',
        [(DependencyKind.SERVER, "ServerPkg", "user/repo@1.0.0")],
    )


def test_dev_dependencies():
    _check(
        '\n[dev-dependencies]\nTestPkg = "user/repo@1.0.0"\n',
        [(DependencyKind.DEV, "TestPkg", "user/repo@1.0.0")],
    )


def test_mixed_dependencies():
    _check(
        """
        [dependencies]
        Fusion = "elttob/fusion@0.3.0"

        [dev-dependencies]
        TestPkg = "user/repo@1.0.0"

        [server-dependencies]
        ServerPkg = "user/repo@1.0.0"
        """,
        [
            (DEFAULT, "Fusion", "elttob/fusion@0.3.0"),
            (DependencyKind.DEV, "TestPkg", "user/repo@1.0.0"),
            (DependencyKind.SERVER, "ServerPkg", "user/repo@1.0.0"),
        ],
    )


def test_parsed_spec_parts():
    dep = _query('[dependencies]\nFusion = "elttob/fusion@0.3.0"\n')[0]
    spec = dep.parsed_spec()
    assert spec.author.contents == "elttob"
    assert spec.name.contents == "fusion"
    assert dep.raw_version_string() == "0.3.0"


def test_other_sections_ignored():
    assert _query('[package]\nname = "me/pkg"\nversion = "1.0.0"\n') == []


def test_non_toml_document_gives_nothing():
    doc = ManifestDocument.from_file("package.json", '[dependencies]\nA = "a/b@1.0.0"\n')
    assert query_wally_toml_dependencies(doc) == []