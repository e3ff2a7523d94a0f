"""Editor settings read from ``TERMPAD_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .telemetry import ENV_PREFIX


@dataclass(frozen=True)
class EditorConfig:
    encoding: str = "utf-8"
    lexer: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        env = os.environ if environ is None else environ
        return cls(
            encoding=env.get(f"{ENV_PREFIX}ENCODING") or "utf-8",
            lexer=env.get(f"{ENV_PREFIX}LEXER") or None,
        )


__all__ = ["EditorConfig"]
