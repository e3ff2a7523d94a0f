"""Mutable text storage with line-aware indexing."""

from __future__ import annotations

from typing import Iterator, Tuple

from .validation import (
    DecodeError,
    EncodeError,
    OutOfRange,
    ensure_offset,
    ensure_span,
)

TERMINATOR = "\r\n"
LINE_FEED = "\n"


class TextBuffer:
    """Character sequence where every line ends with a CR LF terminator.

    Terminators are normalized in by :meth:`load` and back out by
    :meth:`save`, so a line's width always counts its terminator as a fixed
    number of characters. Lines are split after each line feed, which means
    a buffer ending in a terminator has an empty final line.
    """

    def __init__(self, text: str = "", *, encoding: str = "utf-8") -> None:
        self._text = text
        self.encoding = encoding
        self.version = 0
        self.dirty = False

    @classmethod
    def load(cls, raw: bytes, *, encoding: str = "utf-8") -> "TextBuffer":
        try:
            decoded = raw.decode(encoding)
        except UnicodeDecodeError as exc:
            raise DecodeError(
                f"File is not valid {encoding} text: {exc.reason}", encoding=encoding
            ) from exc
        return cls(decoded.replace(LINE_FEED, TERMINATOR), encoding=encoding)

    def save(self) -> bytes:
        try:
            return self._text.replace(TERMINATOR, LINE_FEED).encode(self.encoding)
        except UnicodeEncodeError as exc:
            raise EncodeError(
                f"Text cannot be saved as {self.encoding}: {exc.reason}",
                encoding=self.encoding,
            ) from exc

    @property
    def text(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def slice(self, start: int, end: int) -> str:
        ensure_span(start, end, len(self._text))
        return self._text[start:end]

    # -- mutation ---------------------------------------------------------

    def insert_char(self, offset: int, ch: str) -> None:
        if len(ch) != 1:
            raise ValueError(f"insert_char expects one character, got {ch!r}")
        self.insert_text(offset, ch)

    def insert_text(self, offset: int, text: str) -> None:
        ensure_offset(offset, len(self._text))
        if not text:
            return
        self._text = self._text[:offset] + text + self._text[offset:]
        self._touch()

    def remove_range(self, start: int, end: int) -> None:
        ensure_span(start, end, len(self._text))
        if start == end:
            return
        self._text = self._text[:start] + self._text[end:]
        self._touch()

    def mark_saved(self) -> None:
        self.dirty = False

    def _touch(self) -> None:
        self.version += 1
        self.dirty = True

    # -- lines ------------------------------------------------------------

    def lines(self) -> Iterator[str]:
        """Yield lines lazily, each with its terminator when it has one."""

        text = self._text
        start = 0
        while True:
            end = text.find(LINE_FEED, start)
            if end == -1:
                yield text[start:]
                return
            yield text[start : end + 1]
            start = end + 1

    def line_count(self) -> int:
        return self._text.count(LINE_FEED) + 1

    def line(self, row: int) -> str:
        if row >= 0:
            for index, line in enumerate(self.lines()):
                if index == row:
                    return line
        raise OutOfRange(
            f"Row {row} outside buffer of {self.line_count()} lines",
            length=self.line_count(),
        )

    def line_length(self, row: int) -> int:
        return len(self.line(row))

    def terminator_length(self, row: int) -> int:
        line = self.line(row)
        if line.endswith(TERMINATOR):
            return len(TERMINATOR)
        if line.endswith(LINE_FEED):
            return len(LINE_FEED)
        return 0

    def content_length(self, row: int) -> int:
        """Length of ``row`` without its terminator, never below zero."""

        line = self.line(row)
        if line.endswith(TERMINATOR):
            return max(len(line) - len(TERMINATOR), 0)
        if line.endswith(LINE_FEED):
            return max(len(line) - len(LINE_FEED), 0)
        return len(line)

    # -- coordinates ------------------------------------------------------

    def absolute_char_offset(self, column: int, row: int) -> int:
        """Translate an absolute ``(column, row)`` into a character offset.

        Lines after ``row`` are never visited.
        """

        if row < 0 or column < 0:
            raise OutOfRange(f"Negative position ({column}, {row})")
        count = 0
        for index, line in enumerate(self.lines()):
            if index == row:
                if column > len(line):
                    raise OutOfRange(
                        f"Column {column} past end of row {row} ({len(line)} chars)",
                        length=len(line),
                    )
                return count + column
            count += len(line)
        raise OutOfRange(
            f"Row {row} outside buffer of {self.line_count()} lines",
            length=self.line_count(),
        )

    def offset_to_position(self, offset: int) -> Tuple[int, int]:
        """Inverse of :meth:`absolute_char_offset`, returning ``(column, row)``."""

        ensure_offset(offset, len(self._text))
        row = self._text.count(LINE_FEED, 0, offset)
        line_start = self._text.rfind(LINE_FEED, 0, offset) + 1
        return offset - line_start, row


__all__ = ["TextBuffer", "TERMINATOR", "LINE_FEED"]
