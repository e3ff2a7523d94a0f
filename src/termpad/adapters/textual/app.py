"""Executable Textual app that hosts the editor."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use termpad.adapters.textual.app"
    ) from exc

from termpad.buffer import DecodeError
from termpad.controller import EditController
from termpad.runtime import telemetry
from termpad.runtime.files import PersistenceError

from .controller import TextualEditorAdapter, TextualUIHooks


class TermpadApp(App[int]):
    """Full-screen editor view with a one-line status bar."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor-view {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    def __init__(self, controller: EditController) -> None:
        super().__init__()
        self.controller = controller
        self.adapter: TextualEditorAdapter | None = None
        self._editor_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        self._editor_widget = Static("", id="editor-view")
        self._status_widget = Static("", id="status-line")
        yield self._editor_widget
        yield self._status_widget

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            request_exit=lambda: self.exit(0),
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.controller, hooks)
        self.adapter.resize(self.size.width, self.size.height - 1)

    def on_resize(self, event: events.Resize) -> None:
        if self.adapter:
            self.adapter.resize(event.size.width, event.size.height - 1)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        character = event.character if event.is_printable else None
        if self.adapter.handle_textual_key(event.key, character=character):
            event.stop()
            event.prevent_default()

    def _update_view(self, text: Text) -> None:
        if self._editor_widget:
            self._editor_widget.update(text)

    def _update_status(self, status: str) -> None:
        self.title = self.controller.title
        if self._status_widget:
            self._status_widget.update(status)

    def _log_line(self, line: str) -> None:
        telemetry.get_logger("termpad.textual").debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="termpad", description="Edit a single file in the terminal."
    )
    parser.add_argument("path", help="File to open")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    try:
        controller = EditController.open(args.path)
    except (PersistenceError, DecodeError) as exc:
        telemetry.record_event(
            "document.open_failed",
            level="error",
            data={"path": args.path, "reason": str(exc)},
        )
        print(f"termpad: {exc}", file=sys.stderr)
        return 1
    TermpadApp(controller).run()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual run
    sys.exit(main())
