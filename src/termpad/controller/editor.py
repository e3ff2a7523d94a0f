"""Top-level edit loop: one key event in, one frame out."""

from __future__ import annotations

from typing import Callable, Optional, Protocol, Tuple

from termpad.actions import (
    ActionResult,
    backspace,
    delete_forward,
    insert_character,
    insert_newline,
    move_cursor,
)
from termpad.buffer import CursorModel, Direction, EncodeError, TextBuffer
from termpad.render import Frame, ViewportRenderer
from termpad.runtime import telemetry
from termpad.runtime.config import EditorConfig
from termpad.runtime.files import (
    PathLike,
    PersistenceError,
    read_document,
    write_document,
)
from termpad.syntax import ParseFailure, SyntaxEntry, SyntaxIndex

from .events import (
    BACKSPACE,
    CTRL,
    DELETE,
    DOWN,
    ENTER,
    ESC,
    LEFT,
    RIGHT,
    UP,
    EventSource,
    KeyEvent,
)

Reader = Callable[[PathLike], bytes]
Writer = Callable[[PathLike, bytes], None]

_MOVES = {
    UP: Direction.UP,
    DOWN: Direction.DOWN,
    LEFT: Direction.LEFT,
    RIGHT: Direction.RIGHT,
}


class TerminalSurface(Protocol):
    """Output side of the terminal: draws frames, then flushes."""

    def draw(self, frame: Frame) -> None:
        ...

    def flush(self) -> None:
        ...


class EditController:
    """Owns the buffer, cursor, and persistence for a single open file."""

    def __init__(
        self,
        buffer: TextBuffer,
        *,
        path: PathLike,
        size: Tuple[int, int] = (80, 24),
        syntax: Optional[SyntaxIndex] = None,
        renderer: Optional[ViewportRenderer] = None,
        writer: Writer = write_document,
    ) -> None:
        self.buffer = buffer
        self.path = str(path)
        self.width, self.height = size
        self.cursor = CursorModel(buffer, height=self.height)
        self.syntax = syntax or SyntaxIndex()
        self.renderer = renderer or ViewportRenderer()
        self.status = ""
        self.logger = telemetry.get_logger("termpad.controller")
        self._writer = writer

    @classmethod
    def open(
        cls,
        path: PathLike,
        *,
        config: Optional[EditorConfig] = None,
        size: Tuple[int, int] = (80, 24),
        reader: Reader = read_document,
        writer: Writer = write_document,
    ) -> "EditController":
        """Load ``path`` and build a controller with a lexer picked for it.

        Read failures and undecodable contents propagate to the caller.
        """

        config = config or EditorConfig.from_env()
        buffer = TextBuffer.load(reader(path), encoding=config.encoding)
        syntax = SyntaxIndex.for_path(str(path), lexer_name=config.lexer)
        telemetry.record_event(
            "document.load",
            data={
                "path": str(path),
                "lines": buffer.line_count(),
                "lexer": syntax.language,
            },
        )
        return cls(buffer, path=path, size=size, syntax=syntax, writer=writer)

    @property
    def title(self) -> str:
        return f"{self.path} [+]" if self.buffer.dirty else self.path

    def handle_event(self, event: KeyEvent) -> bool:
        """Apply one event; returns ``False`` when the editor should quit."""

        if not event.is_press:
            return True
        if event.matches(ESC):
            return False

        if event.matches("s", CTRL):
            self.save()
        else:
            self._apply(event)
        self.cursor.clamp_to_line()
        return True

    def _apply(self, event: KeyEvent) -> Optional[ActionResult]:
        if event.code in _MOVES and not event.modifiers:
            return move_cursor(self.cursor, _MOVES[event.code])
        if event.code == ENTER:
            return insert_newline(self.cursor)
        if event.code == BACKSPACE:
            return backspace(self.cursor)
        if event.code == DELETE:
            return delete_forward(self.cursor)
        character = event.character
        if character is not None:
            return insert_character(self.cursor, character)
        self.logger.debug(f"ignored key {event.code} {event.modifiers}")
        return None

    def save(self) -> bool:
        try:
            data = self.buffer.save()
            with telemetry.span(
                "document::save", component="persistence", metadata={"path": self.path}
            ):
                self._writer(self.path, data)
        except (EncodeError, PersistenceError) as exc:
            telemetry.record_event(
                "document.save_failed",
                level="error",
                data={"path": self.path, "reason": str(exc)},
            )
            self.status = f"Save failed: {exc}"
            return False

        self.buffer.mark_saved()
        self.status = f"Wrote {len(data)} bytes to {self.path}"
        telemetry.record_event(
            "document.save", data={"path": self.path, "bytes": len(data)}
        )
        return True

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.cursor.resize(height)

    def syntax_entries(self) -> Optional[list[SyntaxEntry]]:
        try:
            return self.syntax.build(self.buffer)
        except ParseFailure as exc:
            telemetry.record_event(
                "syntax.parse_failed",
                level="warning",
                data={"lexer": self.syntax.language, "reason": str(exc)},
            )
            return None

    def render(self) -> Frame:
        with telemetry.span("render::frame", component="render"):
            return self.renderer.render(
                self.buffer,
                self.cursor,
                self.syntax_entries(),
                (self.width, self.height),
            )

    def run(self, source: EventSource, surface: TerminalSurface) -> int:
        """Blocking loop; returns the process exit code once Escape is pressed."""

        surface.draw(self.render())
        surface.flush()
        while True:
            event = source.next_event()
            if not self.handle_event(event):
                return 0
            if event.is_press:
                surface.draw(self.render())
                surface.flush()


__all__ = ["EditController", "TerminalSurface"]
