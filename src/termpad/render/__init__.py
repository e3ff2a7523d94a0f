"""Viewport rendering into positioned, colored spans."""

from .palette import PALETTE, color_for_tag
from .viewport import DrawSpan, Frame, ViewportRenderer, strip_terminator

__all__ = [
    "PALETTE",
    "color_for_tag",
    "DrawSpan",
    "Frame",
    "ViewportRenderer",
    "strip_terminator",
]
