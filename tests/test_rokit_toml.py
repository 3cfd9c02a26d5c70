import pytest

from deplens.parser.document import ManifestDocument
from deplens.parser.rokit_toml import query_rokit_toml_dependencies
from deplens.parser.structs import DependencyKind


def _tools(contents):
    doc = ManifestDocument.from_file("rokit.toml", contents)
    return query_rokit_toml_dependencies(doc)


@pytest.mark.parametrize(
    "contents, expected",
    [
        ("[tools]", []),
        (
            '\n[tools]\nstylua = "JohnnyMorganz/StyLua@2.0.2"\n',
            [("stylua", "JohnnyMorganz/StyLua@2.0.2")],
        ),
        (
            '\n[tools]\nstylua = "JohnnyMorganz/StyLua@2.0.2"\nwally = "UpliftGames/wally@0.3.2"\n',
            [
                ("stylua", "JohnnyMorganz/StyLua@2.0.2"),
                ("wally", "UpliftGames/wally@0.3.2"),
            ],
        ),
    ],
)
def test_tools(contents, expected):
    tools = _tools(contents)
    assert len(tools) == len(expected)
    for tool, (name, spec) in zip(tools, expected):
        assert tool.name.contents == name
        assert tool.spec.unquoted() == spec
        assert tool.kind is DependencyKind.DEFAULT


def test_parsed_spec_of_tool():
    tools = _tools('[tools]\nstylua = "JohnnyMorganz/StyLua@2.0.2"\n')
    parsed = tools[0].parsed_spec()
    assert parsed.author.contents == "JohnnyMorganz"
    assert parsed.name.contents == "StyLua"
    assert parsed.version.contents == "2.0.2"
    assert tools[0].raw_version_string() == "2.0.2"


def test_tools_sorted_by_position():
    tools = _tools('[tools]\nb = "x/b@1"\na = "x/a@1"\n')
    assert [t.name.contents for t in tools] == ["b", "a"]
    assert tools[0].name.range.start < tools[1].name.range.start


def test_other_sections_and_values_ignored():
    tools = _tools('[other]\nx = "a/b@1"\n[tools]\nbad = 5\nincomplete\n')
    assert tools == []


def test_json_document_yields_nothing():
    doc = ManifestDocument.from_file("package.json", "{}")
    assert query_rokit_toml_dependencies(doc) == []