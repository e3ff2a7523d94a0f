"""Event handling and the edit loop."""

from .editor import EditController, TerminalSurface
from .events import EventSource, KeyEvent

__all__ = ["EditController", "TerminalSurface", "EventSource", "KeyEvent"]
