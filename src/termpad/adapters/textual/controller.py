"""Textual-facing adapter: key translation and frame conversion."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from rich.text import Text

from termpad.controller import EditController, KeyEvent
from termpad.controller.events import (
    BACKSPACE,
    CTRL,
    DELETE,
    DOWN,
    ENTER,
    ESC,
    LEFT,
    RIGHT,
    UP,
)
from termpad.render import Frame, strip_terminator

_NAMED_KEYS: Dict[str, str] = {
    "up": UP,
    "down": DOWN,
    "left": LEFT,
    "right": RIGHT,
    "enter": ENTER,
    "return": ENTER,
    "backspace": BACKSPACE,
    "ctrl+h": BACKSPACE,
    "delete": DELETE,
    "escape": ESC,
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def normalize_textual_key(key: str, character: Optional[str] = None) -> Optional[KeyEvent]:
    """Translate a Textual ``Key`` (name + printable character) to a KeyEvent."""

    if key in _NAMED_KEYS:
        return KeyEvent(_NAMED_KEYS[key])
    if key.startswith("ctrl+"):
        rest = key[len("ctrl+") :]
        if len(rest) == 1:
            return KeyEvent(rest, (CTRL,))
        return None
    if character and len(character) == 1 and character.isprintable():
        return KeyEvent(character)
    return None


def frame_to_text(frame: Frame, *, show_cursor: bool = True) -> Text:
    """Build a Rich ``Text`` for ``frame``, cropped to its width."""

    output = Text(no_wrap=True, overflow="crop", end="")
    cursor_column, cursor_row = frame.cursor
    for row, spans in enumerate(frame.rows()):
        line = Text(no_wrap=True, end="")
        remaining = len(strip_terminator("".join(span.text for span in spans)))
        for span in spans:
            piece = span.text[:remaining]
            remaining -= len(piece)
            if piece:
                line.append(piece, style=span.color or "")
        if show_cursor and row == cursor_row:
            if cursor_column >= len(line):
                line.append(" ")
            line.stylize("reverse", cursor_column, cursor_column + 1)
        line.truncate(frame.width)
        if row:
            output.append("\n")
        output.append_text(line)
    return output


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[Text], None]
    update_status: Callable[[str], None] = _noop
    request_exit: Callable[[], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges Textual key/resize events to an EditController."""

    def __init__(self, controller: EditController, hooks: TextualUIHooks) -> None:
        self.controller = controller
        self.hooks = hooks
        self.refresh()

    def handle_textual_key(self, key: str, *, character: Optional[str] = None) -> bool:
        """Dispatch one key; returns ``True`` when the key was recognised."""

        event = normalize_textual_key(key, character)
        self.hooks.log(f"key -> {key!r} {event!r}")
        if event is None:
            return False
        if not self.controller.handle_event(event):
            self.hooks.request_exit()
            return True
        self.refresh()
        return True

    def resize(self, width: int, height: int) -> None:
        self.controller.resize(max(width, 1), max(height, 1))
        self.refresh()

    def refresh(self) -> None:
        self.hooks.update_view(frame_to_text(self.controller.render()))
        self.hooks.update_status(self.status_line())

    def status_line(self) -> str:
        controller = self.controller
        column, row = controller.cursor.position
        location = f"{controller.cursor.scroll + row + 1}:{column + 1}"
        parts = [controller.title, controller.syntax.language, location]
        if controller.status:
            parts.append(controller.status)
        return "  ".join(parts)


__all__ = [
    "TextualEditorAdapter",
    "TextualUIHooks",
    "frame_to_text",
    "normalize_textual_key",
]
