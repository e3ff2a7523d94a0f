"""Cursor and scroll state tied to a TextBuffer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .document import TextBuffer
from .validation import OutOfRange

Position = Tuple[int, int]  # (column, row)


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(slots=True)
class CursorModel:
    """Viewport-relative cursor plus the absolute row shown at the top.

    Invariants kept by every method::

        0 <= column <= current line length
        0 <= row < height
        scroll + row < buffer.line_count()
    """

    buffer: TextBuffer
    height: int
    column: int = 0
    row: int = 0
    scroll: int = 0

    def __post_init__(self) -> None:
        if self.height < 1:
            raise ValueError("viewport height must be at least 1")

    @property
    def position(self) -> Position:
        return (self.column, self.row)

    def line_number(self) -> int:
        return self.scroll + self.row

    def current_line_length(self) -> int:
        return self.buffer.content_length(self.line_number())

    def index_in_buffer(self) -> int:
        return self.buffer.absolute_char_offset(self.column, self.line_number())

    def last_navigable_row(self) -> int:
        """Last row Down may reach; a trailing empty line is not navigable."""

        count = self.buffer.line_count()
        if count > 1 and self.buffer.line_length(count - 1) == 0:
            return count - 2
        return count - 1

    def clamp_to_line(self) -> None:
        self.column = max(0, min(self.column, self.current_line_length()))

    def move(self, direction: Direction) -> bool:
        """Apply one movement step; returns ``False`` when it was refused."""

        if direction is Direction.UP:
            if self.line_number() == 0:
                return False
            if self.row == 0:
                self.scroll -= 1
            else:
                self.row -= 1
        elif direction is Direction.DOWN:
            if self.line_number() >= self.last_navigable_row():
                return False
            self._step_down()
        elif direction is Direction.LEFT:
            if self.column == 0:
                return False
            self.column -= 1
        elif direction is Direction.RIGHT:
            if self.column >= self.current_line_length():
                return False
            self.column += 1
        self.clamp_to_line()
        return True

    def advance_row(self) -> bool:
        """Step one row down as long as the row exists, navigable or not."""

        if self.line_number() + 1 >= self.buffer.line_count():
            return False
        self._step_down()
        self.clamp_to_line()
        return True

    def _step_down(self) -> None:
        if self.row >= self.height - 1:
            self.scroll += 1
        else:
            self.row += 1

    def place(self, column: int, absolute_row: int) -> None:
        """Put the cursor on ``absolute_row``, scrolling only when needed."""

        if absolute_row < 0 or absolute_row >= self.buffer.line_count():
            raise OutOfRange(
                f"Row {absolute_row} outside buffer of {self.buffer.line_count()} lines"
            )
        if absolute_row < self.scroll:
            self.scroll = absolute_row
        elif absolute_row >= self.scroll + self.height:
            self.scroll = absolute_row - self.height + 1
        self.row = absolute_row - self.scroll
        self.column = column
        self.clamp_to_line()

    def resize(self, height: int) -> None:
        if height < 1:
            raise ValueError("viewport height must be at least 1")
        absolute = self.line_number()
        self.height = height
        if self.row >= height:
            self.scroll = absolute - height + 1
            self.row = height - 1


__all__ = ["CursorModel", "Direction", "Position"]
