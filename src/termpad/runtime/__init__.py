"""Runtime services: telemetry, configuration, and file access."""

from . import telemetry
from .config import EditorConfig
from .files import DocumentNotFound, PersistenceError, read_document, write_document

__all__ = [
    "telemetry",
    "EditorConfig",
    "DocumentNotFound",
    "PersistenceError",
    "read_document",
    "write_document",
]
