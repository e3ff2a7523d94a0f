from __future__ import annotations

from typing import List

import pytest
from pygments.lexer import Lexer
from pygments.lexers import PythonLexer, TextLexer
from pygments.token import STANDARD_TYPES, Token

from termpad.buffer import TextBuffer
from termpad.syntax import (
    ParseFailure,
    SyntaxEntry,
    SyntaxIndex,
    lexer_for_path,
    type_tag_for,
)

SOURCE = "def greet():\n    return 1\n"


class BrokenLexer(Lexer):
    name = "Broken"

    def get_tokens_unprocessed(self, text):
        raise RuntimeError("lexer exploded")


def build(text: str, lexer: Lexer) -> tuple[TextBuffer, List[SyntaxEntry]]:
    buffer = TextBuffer.load(text.encode("utf-8"))
    return buffer, SyntaxIndex(lexer).build(buffer)


def entry_text(buffer: TextBuffer, entry: SyntaxEntry) -> str:
    start = buffer.absolute_char_offset(*entry.start)
    end = buffer.absolute_char_offset(*entry.end)
    return buffer.slice(start, end)


def test_python_keywords_and_names_become_entries() -> None:
    buffer, entries = build(SOURCE, PythonLexer())
    by_text = {entry_text(buffer, entry): entry for entry in entries}

    assert by_text["def"].kind == "Token.Keyword"
    assert by_text["def"].start == (0, 0)
    assert by_text["def"].end == (3, 0)
    assert by_text["greet"].kind == "Token.Name.Function"
    assert by_text["return"].start == (4, 1)
    assert by_text["1"].kind.startswith("Token.Literal.Number")


def test_entries_skip_whitespace_and_come_out_in_document_order() -> None:
    buffer, entries = build(SOURCE, PythonLexer())

    assert entries
    assert all(not entry_text(buffer, entry).isspace() for entry in entries)
    starts = [(entry.start[1], entry.start[0]) for entry in entries]
    assert starts == sorted(starts)

    offsets = [
        (buffer.absolute_char_offset(*e.start), buffer.absolute_char_offset(*e.end))
        for e in entries
    ]
    for (_, previous_end), (next_start, _) in zip(offsets, offsets[1:]):
        assert previous_end <= next_start


def test_multiline_tokens_span_rows() -> None:
    buffer, entries = build('"""a\nb"""\n', PythonLexer())

    doc = next(entry for entry in entries if entry.start == (0, 0))
    assert doc.kind.startswith("Token.Literal.String")
    assert doc.end == (4, 1)
    assert entry_text(buffer, doc) == '"""a\r\nb"""'


def test_plain_text_produces_no_entries() -> None:
    buffer = TextBuffer.load(b"just some words\n")

    assert SyntaxIndex().build(buffer) == []


def test_type_tags_are_stable_small_integers() -> None:
    keyword = type_tag_for(Token.Keyword)

    assert keyword == type_tag_for(Token.Keyword)
    assert type_tag_for(Token.Keyword.Custom) == keyword
    assert type_tag_for(Token.Name) != keyword
    assert all(0 <= type_tag_for(ttype) < len(STANDARD_TYPES) for ttype in STANDARD_TYPES)


def test_lexer_is_chosen_from_file_name() -> None:
    assert lexer_for_path("main.py").name == "Python"
    assert lexer_for_path("notes.txt", name="rust").name == "Rust"
    assert isinstance(lexer_for_path("data.unknown-extension"), TextLexer)


def test_lexer_failure_raises_parse_failure() -> None:
    buffer = TextBuffer.load(b"anything\n")

    with pytest.raises(ParseFailure) as info:
        SyntaxIndex(BrokenLexer()).build(buffer)

    assert "lexer exploded" in str(info.value)
    assert isinstance(info.value.__cause__, RuntimeError)
