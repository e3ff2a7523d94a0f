from __future__ import annotations

from typing import Optional, Sequence

import pytest
from pygments.lexers import PythonLexer

from termpad.buffer import CursorModel, TextBuffer
from termpad.render import (
    PALETTE,
    DrawSpan,
    Frame,
    ViewportRenderer,
    color_for_tag,
    strip_terminator,
)
from termpad.syntax import SyntaxEntry, SyntaxIndex


def entry(tag: int, start: tuple[int, int], end: tuple[int, int]) -> SyntaxEntry:
    return SyntaxEntry(type_tag=tag, kind=f"tag{tag}", start=start, end=end)


def render(
    text: str,
    entries: Optional[Sequence[SyntaxEntry]],
    *,
    height: int = 5,
    width: int = 40,
    **state: int,
) -> tuple[TextBuffer, CursorModel, Frame]:
    buffer = TextBuffer.load(text.encode("utf-8"))
    cursor = CursorModel(buffer, height=height, **state)
    frame = ViewportRenderer().render(buffer, cursor, entries, (width, height))
    return buffer, cursor, frame


def visible_length(buffer: TextBuffer, cursor: CursorModel) -> int:
    last = min(cursor.scroll + cursor.height, buffer.line_count())
    return sum(buffer.line_length(row) for row in range(cursor.scroll, last))


def test_gaps_are_untagged_and_entries_use_palette_colors() -> None:
    _, _, frame = render("ab cd\nef\n", [entry(1, (3, 0), (5, 0)), entry(0, (0, 0), (2, 0))])

    assert frame.spans == [
        DrawSpan((0, 0), "ab", PALETTE[0]),
        DrawSpan((2, 0), " ", None),
        DrawSpan((3, 0), "cd", PALETTE[1]),
        DrawSpan((5, 0), "\r\n", None),
        DrawSpan((0, 1), "ef\r\n", None),
    ]
    assert frame.lines() == ["ab cd", "ef", "", "", ""]


def test_emitted_characters_cover_visible_lines_exactly() -> None:
    text = "zero\none\ntwo\nthree\nfour\n"
    entries = [entry(2, (0, row), (2, row)) for row in range(5)]
    buffer, cursor, frame = render(text, entries, height=2, scroll=2)

    assert frame.character_count == visible_length(buffer, cursor)
    assert frame.lines() == ["two", "three"]


def test_entries_starting_outside_window_are_dropped() -> None:
    text = "aa\nbb\ncc\ndd\n"
    entries = [entry(0, (0, 0), (2, 0)), entry(3, (0, 1), (2, 1)), entry(5, (0, 3), (2, 3))]
    _, _, frame = render(text, entries, height=2, scroll=1)

    colored = [span for span in frame.spans if span.color is not None]
    assert colored == [DrawSpan((0, 0), "bb", PALETTE[3])]


def test_entry_crossing_window_bottom_is_clipped() -> None:
    text = "a\nbcd\nefg\nh\n"
    buffer, cursor, frame = render(text, [entry(4, (0, 1), (1, 3))], height=2)

    assert frame.character_count == visible_length(buffer, cursor)
    assert frame.spans[-1] == DrawSpan((0, 1), "bcd\r\n", PALETTE[4])


def test_overlapping_entries_never_duplicate_characters() -> None:
    _, _, frame = render("abcdef", [entry(0, (0, 0), (4, 0)), entry(1, (2, 0), (5, 0))])

    assert frame.spans == [
        DrawSpan((0, 0), "abcd", PALETTE[0]),
        DrawSpan((4, 0), "e", PALETTE[1]),
        DrawSpan((5, 0), "f", None),
    ]


def test_missing_entries_render_window_as_plain_text() -> None:
    buffer, cursor, frame = render("x = 1\ny = 2\n", None)

    assert all(span.color is None for span in frame.spans)
    assert frame.lines()[:2] == ["x = 1", "y = 2"]
    assert frame.character_count == visible_length(buffer, cursor)


def test_frame_carries_cursor_and_size() -> None:
    _, cursor, frame = render("ab\ncd\n", [], height=3, width=12, column=1, row=1)

    assert frame.cursor == cursor.position == (1, 1)
    assert (frame.width, frame.height) == (12, 3)


def test_real_lexer_output_reassembles_visible_text() -> None:
    buffer = TextBuffer.load(b"import os\n\nprint(os.sep)\n")
    cursor = CursorModel(buffer, height=10)
    entries = SyntaxIndex(PythonLexer()).build(buffer)

    frame = ViewportRenderer().render(buffer, cursor, entries, (80, 10))

    assert "".join(span.text for span in frame.spans) == buffer.text
    assert any(span.color is not None for span in frame.spans)


def test_palette_wraps_type_tags() -> None:
    assert len(PALETTE) == 12
    assert color_for_tag(12) == color_for_tag(0) == "bright_red"
    assert color_for_tag(13) == "red"


def test_carriage_return_content_survives_in_lines() -> None:
    buffer, cursor, frame = render("a\r\nb\n", [entry(4, (0, 0), (2, 0))])

    assert frame.lines()[:2] == ["a\r", "b"]
    assert frame.spans[0] == DrawSpan((0, 0), "a\r", PALETTE[4])
    assert frame.character_count == visible_length(buffer, cursor)


@pytest.mark.parametrize(
    "text,expected",
    [("ab\r\n", "ab"), ("ab\n", "ab"), ("ab\r", "ab\r"), ("a\r\r\n", "a\r"), ("", "")],
)
def test_strip_terminator_drops_only_the_line_end(text: str, expected: str) -> None:
    assert strip_terminator(text) == expected


def test_scrolled_window_reads_buffer_lines_once() -> None:
    text = "".join(f"line{row}\n" for row in range(50))
    buffer = TextBuffer.load(text.encode("utf-8"))
    calls = []
    walk = buffer.lines

    def counted_lines():
        calls.append(1)
        return walk()

    buffer.lines = counted_lines  # type: ignore[method-assign]
    cursor = CursorModel(buffer, height=5, scroll=40)

    frame = ViewportRenderer().render(buffer, cursor, [], (20, 5))

    assert len(calls) == 1
    assert frame.lines() == [f"line{row}" for row in range(40, 45)]
