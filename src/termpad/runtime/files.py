"""Byte-level file collaborators used at startup and on save."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from termpad.buffer import EditorError

PathLike = Union[str, Path]


class PersistenceError(EditorError):
    """Raised when a document cannot be read from or written to disk."""

    def __init__(self, message: str, *, path: PathLike) -> None:
        super().__init__(message)
        self.path = str(path)


class DocumentNotFound(PersistenceError):
    """Raised when the requested document does not exist."""


def read_document(path: PathLike) -> bytes:
    try:
        return Path(path).read_bytes()
    except FileNotFoundError as exc:
        raise DocumentNotFound(f"No such file: {path}", path=path) from exc
    except OSError as exc:
        raise PersistenceError(f"Cannot read {path}: {exc.strerror}", path=path) from exc


def write_document(path: PathLike, data: bytes) -> None:
    try:
        Path(path).write_bytes(data)
    except OSError as exc:
        raise PersistenceError(f"Cannot write {path}: {exc.strerror}", path=path) from exc


__all__ = ["DocumentNotFound", "PersistenceError", "read_document", "write_document"]
