"""Textual host for the editor."""

from .controller import (
    TextualEditorAdapter,
    TextualUIHooks,
    frame_to_text,
    normalize_textual_key,
)

__all__ = [
    "TextualEditorAdapter",
    "TextualUIHooks",
    "frame_to_text",
    "normalize_textual_key",
]
