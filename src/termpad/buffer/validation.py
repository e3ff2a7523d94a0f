"""Error types and range checks shared across buffer services."""

from __future__ import annotations

from typing import Optional, Tuple


class EditorError(RuntimeError):
    """Base class for every error raised by termpad itself."""


class DecodeError(EditorError):
    """Raised when file contents cannot be decoded as text."""

    def __init__(self, message: str, *, encoding: str) -> None:
        super().__init__(message)
        self.encoding = encoding


class EncodeError(EditorError):
    """Raised when buffer text cannot be encoded for saving."""

    def __init__(self, message: str, *, encoding: str) -> None:
        super().__init__(message)
        self.encoding = encoding


class OutOfRange(EditorError):
    """Raised when a buffer index or coordinate falls outside the buffer.

    Cursor invariants keep every edit in range, so this signals a bug in
    the caller rather than a user-facing condition.
    """

    def __init__(
        self,
        message: str,
        *,
        span: Optional[Tuple[int, int]] = None,
        length: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.span = span
        self.length = length


def ensure_offset(offset: int, length: int) -> int:
    if offset < 0 or offset > length:
        raise OutOfRange(
            f"Offset {offset} outside buffer of length {length}",
            span=(offset, offset),
            length=length,
        )
    return offset


def ensure_span(start: int, end: int, length: int) -> Tuple[int, int]:
    if start > end:
        raise OutOfRange(
            f"Range start {start} is after end {end}", span=(start, end), length=length
        )
    ensure_offset(start, length)
    ensure_offset(end, length)
    return start, end


def saturating_sub(value: int, amount: int) -> int:
    return value - amount if value > amount else 0
