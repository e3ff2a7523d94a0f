"""Fixed foreground palette indexed by token type tag."""

from __future__ import annotations

from typing import Tuple

PALETTE: Tuple[str, ...] = (
    "bright_red",
    "red",
    "bright_green",
    "green",
    "bright_yellow",
    "yellow",
    "bright_blue",
    "blue",
    "bright_magenta",
    "magenta",
    "bright_cyan",
    "cyan",
)


def color_for_tag(type_tag: int) -> str:
    # Unrelated token kinds may share a slot.
    return PALETTE[type_tag % len(PALETTE)]


__all__ = ["PALETTE", "color_for_tag"]
