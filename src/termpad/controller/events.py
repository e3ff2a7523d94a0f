"""Normalized key events delivered to the controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol, Tuple

PRESS = "press"
REPEAT = "repeat"
RELEASE = "release"

UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
ENTER = "ENTER"
BACKSPACE = "BACKSPACE"
DELETE = "DELETE"
ESC = "ESC"

CTRL = "CTRL"


def _normalize_modifiers(modifiers: Iterable[str]) -> Tuple[str, ...]:
    values = tuple(m.strip().upper() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """Single key event: a named key (``"UP"``) or one typed character."""

    code: str
    modifiers: Tuple[str, ...] = ()
    kind: str = PRESS

    def __post_init__(self) -> None:
        if not self.code:
            raise ValueError("code cannot be empty")
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def is_press(self) -> bool:
        return self.kind == PRESS

    @property
    def character(self) -> str | None:
        """The typed character, when this event inserts text."""

        if len(self.code) != 1 or not self.code.isprintable():
            return None
        if CTRL in self.modifiers:
            return None
        return self.code

    def matches(self, code: str, *modifiers: str) -> bool:
        return self.code == code and self.modifiers == _normalize_modifiers(modifiers)


class EventSource(Protocol):
    """Blocking supplier of key events."""

    def next_event(self) -> KeyEvent:
        ...


__all__ = [
    "KeyEvent",
    "EventSource",
    "PRESS",
    "REPEAT",
    "RELEASE",
    "UP",
    "DOWN",
    "LEFT",
    "RIGHT",
    "ENTER",
    "BACKSPACE",
    "DELETE",
    "ESC",
    "CTRL",
]
