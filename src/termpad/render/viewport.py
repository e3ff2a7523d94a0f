"""Turns buffer text + syntax entries into positioned draw instructions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from termpad.buffer import LINE_FEED, TERMINATOR, CursorModel, Position, TextBuffer
from termpad.syntax import SyntaxEntry

from .palette import color_for_tag


def strip_terminator(text: str) -> str:
    """Drop one trailing CR LF (or bare LF); other carriage returns are content."""

    if text.endswith(TERMINATOR):
        return text[: -len(TERMINATOR)]
    if text.endswith(LINE_FEED):
        return text[: -len(LINE_FEED)]
    return text


@dataclass(frozen=True, slots=True)
class DrawSpan:
    """Text drawn at a viewport position; ``color`` is ``None`` when untagged.

    A span never crosses a row boundary. Terminator characters stay in
    ``text`` so character counts match the buffer.
    """

    position: Position
    text: str
    color: Optional[str] = None


@dataclass(slots=True)
class Frame:
    width: int
    height: int
    cursor: Position
    spans: List[DrawSpan] = field(default_factory=list)

    @property
    def character_count(self) -> int:
        return sum(len(span.text) for span in self.spans)

    def rows(self) -> List[List[DrawSpan]]:
        grouped: List[List[DrawSpan]] = [[] for _ in range(self.height)]
        for span in self.spans:
            grouped[span.position[1]].append(span)
        return grouped

    def lines(self) -> List[str]:
        """Plain text per visible row with the line terminator stripped."""

        return [
            strip_terminator("".join(span.text for span in row)) for row in self.rows()
        ]


class _SpanWriter:
    """Accumulates contiguous buffer slices, splitting them at line feeds."""

    def __init__(self, buffer: TextBuffer, start: int) -> None:
        self.buffer = buffer
        self.offset = start
        self.spans: List[DrawSpan] = []
        self._column = 0
        self._row = 0

    def emit(self, end: int, color: Optional[str] = None) -> None:
        text = self.buffer.slice(self.offset, end)
        self.offset = end
        start = 0
        while start < len(text):
            cut = text.find(LINE_FEED, start)
            piece = text[start:] if cut == -1 else text[start : cut + 1]
            self.spans.append(DrawSpan((self._column, self._row), piece, color))
            if piece.endswith(LINE_FEED):
                self._row += 1
                self._column = 0
            else:
                self._column += len(piece)
            start += len(piece)


class ViewportRenderer:
    """Renders the rows ``[scroll, scroll + height)`` of a buffer.

    Entries are clipped and ordered by start offset here, so callers may
    pass them in any order. Passing ``entries=None`` renders the window as
    plain text, which is the recovery path when lexing failed.
    """

    def render(
        self,
        buffer: TextBuffer,
        cursor: CursorModel,
        entries: Optional[Iterable[SyntaxEntry]],
        size: Tuple[int, int],
    ) -> Frame:
        width, height = size
        first_row = cursor.scroll
        end_row = min(first_row + height, buffer.line_count())
        row_starts, window_end = self._row_starts(buffer, first_row, end_row)
        window_start = row_starts.get(first_row, len(buffer))

        writer = _SpanWriter(buffer, window_start)
        if entries is not None:
            for start, end, entry in self._visible(
                entries, row_starts, first_row, first_row + height, window_end
            ):
                start = max(start, writer.offset)
                end = min(end, window_end)
                if end <= start:
                    continue
                if start > writer.offset:
                    writer.emit(start)
                writer.emit(end, color_for_tag(entry.type_tag))
        if writer.offset < window_end:
            writer.emit(window_end)

        return Frame(
            width=width, height=height, cursor=cursor.position, spans=writer.spans
        )

    @staticmethod
    def _row_starts(
        buffer: TextBuffer, first_row: int, end_row: int
    ) -> Tuple[Dict[int, int], int]:
        """Offsets of rows ``[first_row, end_row)`` and of the window end, in one walk."""

        row_starts: Dict[int, int] = {}
        offset = 0
        for row, line in enumerate(buffer.lines()):
            if row >= end_row:
                return row_starts, offset
            if row >= first_row:
                row_starts[row] = offset
            offset += len(line)
        return row_starts, offset

    @staticmethod
    def _visible(
        entries: Iterable[SyntaxEntry],
        row_starts: Dict[int, int],
        first_row: int,
        stop_row: int,
        window_end: int,
    ) -> List[Tuple[int, int, SyntaxEntry]]:
        resolved = []
        for entry in entries:
            start_column, start_row = entry.start
            if start_row < first_row or start_row >= stop_row:
                continue
            if start_row not in row_starts:
                continue
            start = row_starts[start_row] + start_column
            end_column, end_row = entry.end
            end = row_starts[end_row] + end_column if end_row in row_starts else window_end
            resolved.append((start, end, entry))
        resolved.sort(key=lambda item: item[0])
        return resolved


__all__ = ["DrawSpan", "Frame", "ViewportRenderer", "strip_terminator"]
