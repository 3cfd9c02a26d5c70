import pytest

from deplens.parser.language import Language
from deplens.parser.positions import Position, Range
from deplens.server.document import MIN_VERSION, Document, TextChange

URI = "file:///tmp/project/Cargo.toml"
TEXT = '[dependencies]\ntokio = "1.0"\n'


def make(text=TEXT):
    return Document.create(URI, text)


def test_create_defaults():
    doc = make()
    assert doc.name == "Cargo.toml"
    assert doc.version == MIN_VERSION
    assert doc.opened is False
    assert doc.inner.language is Language.TOML
    assert doc.inner.contents == TEXT


def test_create_unknown_language():
    with pytest.raises(ValueError):
        Document.create("file:///tmp/notes.txt", "")


def test_create_without_file_name():
    with pytest.raises(ValueError):
        Document.create("file:///", "")


def test_offset_position_round_trip():
    doc = make()
    for offset in range(len(TEXT) + 1):
        assert doc.position_to_offset(doc.offset_to_position(offset)) == offset


def test_position_on_second_line():
    doc = make()
    offset = doc.position_to_offset(Position(1, 0))
    assert TEXT[offset:].startswith("tokio")


def test_utf16_positions():
    doc = Document.create(URI, "a\U0001F600b")
    assert doc.offset_to_position(2) == Position(0, 3)
    with pytest.raises(ValueError):
        doc.position_to_offset(Position(0, 2))


def test_invalid_positions():
    doc = make()
    with pytest.raises(ValueError):
        doc.position_to_offset(Position(10, 0))
    with pytest.raises(ValueError):
        doc.position_to_offset(Position(0, 100))
    with pytest.raises(ValueError):
        doc.offset_to_position(len(TEXT) + 1)


def test_span_range_round_trip():
    doc = make()
    rng = doc.range_from_span(15, 20)
    assert doc.range_to_span(rng) == (15, 20)


def test_substring_edit():
    doc = make()
    edit = doc.create_substring_edit(1, '"1.0"', '"2.0"')
    start, end = doc.range_to_span(edit.range)
    assert doc.text[start:end] == '"1.0"'
    assert edit.new_text == '"2.0"'
    assert edit.range.start.line == 1


def test_substring_edit_missing():
    doc = make()
    with pytest.raises(ValueError):
        doc.create_substring_edit(1, "serde", "x")
    with pytest.raises(ValueError):
        doc.create_substring_edit(9, "tokio", "x")


def test_apply_full_change():
    doc = make()
    doc.apply_change(TextChange(text="[dev-dependencies]\n"))
    assert doc.text == "[dev-dependencies]\n"
    assert doc.inner.contents == "[dev-dependencies]\n"


def test_apply_ranged_change():
    doc = make()
    doc.apply_change(TextChange(text="serde", range=Range(Position(1, 0), Position(1, 5))))
    assert doc.text == '[dependencies]\nserde = "1.0"\n'
    assert doc.inner.contents == doc.text
    assert doc.position_to_offset(Position(1, 5)) == doc.text.index(" =")