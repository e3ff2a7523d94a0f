"""Leaf-token extraction from a full Pygments lex of the buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_by_name, get_lexer_for_filename
from pygments.token import STANDARD_TYPES, Token, _TokenType
from pygments.util import ClassNotFound

from termpad.buffer import EditorError, Position, TextBuffer
from termpad.runtime import telemetry

_TYPE_TAGS: Dict[_TokenType, int] = {
    ttype: index for index, ttype in enumerate(sorted(STANDARD_TYPES, key=str))
}


class ParseFailure(EditorError):
    """Raised when the lexer cannot produce tokens for the buffer text."""


@dataclass(frozen=True, slots=True)
class SyntaxEntry:
    """One colorable token; ``end`` is exclusive, both positions absolute."""

    type_tag: int
    kind: str
    start: Position
    end: Position


def type_tag_for(ttype: _TokenType) -> int:
    """Stable small integer for ``ttype`` (nearest standard ancestor)."""

    current: Optional[_TokenType] = ttype
    while current is not None:
        tag = _TYPE_TAGS.get(current)
        if tag is not None:
            return tag
        current = current.parent
    return _TYPE_TAGS[Token]


def is_leaf_token(ttype: _TokenType, value: str) -> bool:
    if not value or value.isspace():
        return False
    return ttype is not Token.Text


def lexer_for_path(path: str, *, name: Optional[str] = None) -> Lexer:
    options = {"stripnl": False, "ensurenl": False}
    try:
        if name:
            return get_lexer_by_name(name, **options)
        return get_lexer_for_filename(path, **options)
    except ClassNotFound:
        telemetry.record_event(
            "syntax.lexer_fallback", level="debug", data={"path": path, "name": name}
        )
        return TextLexer(**options)


class _LineTracker:
    """Turns increasing offsets into positions without rescanning the text."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._offset = 0
        self._row = 0
        self._line_start = 0

    def position(self, offset: int) -> Position:
        if offset < self._offset:
            self._offset, self._row, self._line_start = 0, 0, 0
        newlines = self._text.count("\n", self._offset, offset)
        if newlines:
            self._row += newlines
            self._line_start = self._text.rfind("\n", self._offset, offset) + 1
        self._offset = offset
        return (offset - self._line_start, self._row)


class SyntaxIndex:
    """Re-lexes the whole document on every call to :meth:`build`.

    There is no incremental reuse between edits: each build costs time
    proportional to the document size.
    """

    def __init__(self, lexer: Optional[Lexer] = None) -> None:
        self.lexer = lexer or TextLexer(stripnl=False, ensurenl=False)

    @classmethod
    def for_path(cls, path: str, *, lexer_name: Optional[str] = None) -> "SyntaxIndex":
        return cls(lexer_for_path(path, name=lexer_name))

    @property
    def language(self) -> str:
        return str(self.lexer.name)

    def build(self, buffer: TextBuffer) -> List[SyntaxEntry]:
        text = buffer.text
        try:
            tokens = list(self.lexer.get_tokens_unprocessed(text))
        except Exception as exc:
            raise ParseFailure(f"{self.language} lexer failed: {exc}") from exc
        entries = list(self._extract(text, tokens))
        entries.sort(key=lambda entry: (entry.start[1], entry.start[0]))
        return entries

    @staticmethod
    def _extract(
        text: str, tokens: Iterable[Tuple[int, _TokenType, str]]
    ) -> Iterable[SyntaxEntry]:
        tracker = _LineTracker(text)
        for index, ttype, value in tokens:
            if not is_leaf_token(ttype, value):
                continue
            start = tracker.position(index)
            end = tracker.position(index + len(value))
            yield SyntaxEntry(
                type_tag=type_tag_for(ttype), kind=str(ttype), start=start, end=end
            )


__all__ = [
    "ParseFailure",
    "SyntaxEntry",
    "SyntaxIndex",
    "is_leaf_token",
    "lexer_for_path",
    "type_tag_for",
]
