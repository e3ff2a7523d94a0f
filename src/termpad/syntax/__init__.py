"""Syntax tokens used to color the viewport."""

from .index import (
    ParseFailure,
    SyntaxEntry,
    SyntaxIndex,
    is_leaf_token,
    lexer_for_path,
    type_tag_for,
)

__all__ = [
    "ParseFailure",
    "SyntaxEntry",
    "SyntaxIndex",
    "is_leaf_token",
    "lexer_for_path",
    "type_tag_for",
]
