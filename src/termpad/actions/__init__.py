"""Editing verbs dispatched by the controller."""

from .core import (
    ActionResult,
    backspace,
    delete_forward,
    insert_character,
    insert_newline,
    move_cursor,
)

__all__ = [
    "ActionResult",
    "backspace",
    "delete_forward",
    "insert_character",
    "insert_newline",
    "move_cursor",
]
