"""Text storage, cursor state, and buffer error types."""

from .document import LINE_FEED, TERMINATOR, TextBuffer
from .state import CursorModel, Direction, Position
from .validation import (
    DecodeError,
    EditorError,
    EncodeError,
    OutOfRange,
    ensure_offset,
    ensure_span,
    saturating_sub,
)

__all__ = [
    "TextBuffer",
    "TERMINATOR",
    "LINE_FEED",
    "CursorModel",
    "Direction",
    "Position",
    "EditorError",
    "DecodeError",
    "EncodeError",
    "OutOfRange",
    "ensure_offset",
    "ensure_span",
    "saturating_sub",
]
