from pathlib import Path

import pytest

from deplens.parser.document import ManifestDocument
from deplens.parser.language import Language


@pytest.mark.parametrize(
    "file_path, contents, language",
    [
        ("package.json", "{}", Language.JSON),
        ("Cargo.toml", "[header]", Language.TOML),
        ("Cargo.lock", "[header]", Language.TOML),
        ("wally.toml", "[header]", Language.TOML),
        ("wally.lock", "[header]", Language.TOML),
        ("rokit.toml", "[header]", Language.TOML),
        ("package.txt", "{}", None),
        ("package.json.txt", "{}", None),
    ],
)
def test_new(file_path, contents, language):
    doc = ManifestDocument.from_file(Path(file_path), contents)
    assert (doc is None) == (language is None)
    if doc is not None:
        assert doc.language == language
        assert doc.contents == contents


def test_from_file_relative_becomes_file_uri():
    doc = ManifestDocument.from_file("Cargo.toml", "[package]")
    assert doc.uri.startswith("file://")
    assert doc.uri.endswith("/Cargo.toml")


def test_from_uri_keeps_uri():
    uri = "file:///home/user/project/package.json"
    doc = ManifestDocument.from_uri(uri, "{}")
    assert doc.uri == uri
    assert doc.language == Language.JSON


def test_from_uri_unknown_language():
    assert ManifestDocument.from_uri("file:///home/user/readme.md", "# hi") is None