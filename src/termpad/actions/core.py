"""Edit transitions applied to a buffer through its cursor."""

from __future__ import annotations

from dataclasses import dataclass

from termpad.buffer import TERMINATOR, CursorModel, Direction, saturating_sub
from termpad.runtime import telemetry


@dataclass(slots=True)
class ActionResult:
    """Outcome of one edit or movement."""

    changed: bool
    label: str
    status: str = "ok"


def _noop(label: str) -> ActionResult:
    return ActionResult(changed=False, label=label, status="noop")


def move_cursor(cursor: CursorModel, direction: Direction) -> ActionResult:
    label = f"move_{direction.value}"
    if not cursor.move(direction):
        return _noop(label)
    return ActionResult(changed=False, label=label)


def insert_character(cursor: CursorModel, ch: str) -> ActionResult:
    with telemetry.span("buffer::insert_char", component="buffer"):
        cursor.buffer.insert_char(cursor.index_in_buffer(), ch)
        cursor.move(Direction.RIGHT)
    return ActionResult(changed=True, label="insert_char")


def insert_newline(cursor: CursorModel) -> ActionResult:
    with telemetry.span("buffer::newline", component="buffer"):
        cursor.buffer.insert_text(cursor.index_in_buffer(), TERMINATOR)
        cursor.column = 0
        cursor.advance_row()
    return ActionResult(changed=True, label="newline")


def backspace(cursor: CursorModel) -> ActionResult:
    """Delete backwards, joining lines at column zero.

    Cases, in order: remove the previous character; drop an empty line
    into the one above; merge a non-empty line onto the end of the one
    above. The very start of the document is left alone.
    """

    buffer = cursor.buffer
    line = cursor.line_number()
    index = cursor.index_in_buffer()

    if cursor.column > 0:
        with telemetry.span("buffer::backspace", component="buffer"):
            buffer.remove_range(saturating_sub(index, 1), index)
            cursor.move(Direction.LEFT)
        return ActionResult(changed=True, label="backspace")

    if line == 0:
        return _noop("backspace")

    joint = buffer.terminator_length(line - 1)
    if cursor.current_line_length() == 0:
        with telemetry.span("buffer::join_empty_line", component="buffer"):
            buffer.remove_range(saturating_sub(index, joint), index)
            cursor.move(Direction.UP)
            cursor.column = cursor.current_line_length()
        return ActionResult(changed=True, label="join_empty_line")

    with telemetry.span("buffer::join_lines", component="buffer"):
        cursor.move(Direction.UP)
        cursor.column = cursor.current_line_length()
        buffer.remove_range(saturating_sub(index, joint), index)
    return ActionResult(changed=True, label="join_lines")


def delete_forward(cursor: CursorModel) -> ActionResult:
    """Delete at the cursor without moving it.

    At the end of a line the whole terminator goes, joining the next line.
    At the end of the buffer nothing happens.
    """

    buffer = cursor.buffer
    index = cursor.index_in_buffer()
    if index >= len(buffer):
        return _noop("delete_forward")

    width = 1
    if cursor.column >= cursor.current_line_length():
        width = buffer.terminator_length(cursor.line_number())
        if width == 0:
            return _noop("delete_forward")

    with telemetry.span("buffer::delete_forward", component="buffer"):
        buffer.remove_range(index, index + width)
    return ActionResult(changed=True, label="delete_forward")


__all__ = [
    "ActionResult",
    "backspace",
    "delete_forward",
    "insert_character",
    "insert_newline",
    "move_cursor",
]
