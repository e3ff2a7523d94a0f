"""Logging for the editor, backed by telelog.

The terminal belongs to the editor while it runs, so log lines go to a
file (``TERMPAD_LOG_FILE``) and only reach the console when
``TERMPAD_LOG_CONSOLE`` is set. Everything else in the package goes
through three calls: ``get_logger``, ``record_event`` and ``span``.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "TERMPAD_"
ROOT_LOGGER = "termpad"

_TRUTHY = {"1", "true", "yes", "on"}

_loggers: MutableMapping[str, Any] = {}
_config: Optional[Any] = None


@dataclass(frozen=True)
class LogSettings:
    level: str = "INFO"
    console: bool = False
    colored: bool = True
    json: bool = False
    file: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LogSettings":
        env = os.environ if environ is None else environ

        def flag(name: str, default: bool) -> bool:
            raw = env.get(f"{ENV_PREFIX}{name}")
            return default if raw is None else raw.lower() in _TRUTHY

        return cls(
            level=(env.get(f"{ENV_PREFIX}LOG_LEVEL") or "INFO").upper(),
            console=flag("LOG_CONSOLE", False),
            colored=not flag("NO_COLOR", False),
            json=flag("LOG_JSON", False),
            file=env.get(f"{ENV_PREFIX}LOG_FILE") or None,
        )

    def to_config(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.colored)
        if self.json:
            config.with_json_format(True)
        if self.file:
            config.with_file_output(self.file)
        config.with_profiling(True)
        return config


def configure(settings: Optional[LogSettings] = None) -> None:
    """Rebuild the telelog config; cached loggers are dropped."""

    global _config
    _config = (settings or LogSettings.from_env()).to_config()
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    key = name or ROOT_LOGGER
    if key not in _loggers:
        if _config is None:
            configure()
        _loggers[key] = tl.Logger.with_config(key, _config)
    return _loggers[key]


def _pairs(data: Mapping[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), value if isinstance(value, str) else repr(value)) for key, value in data.items()]


def _emit(log: Any, level: str, message: str, data: Mapping[str, Any]) -> None:
    structured = getattr(log, f"{level.lower()}_with", None)
    if structured is not None:
        structured(message, _pairs(data))
        return
    plain = getattr(log, level.lower(), None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {dict(data)}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` attached as key/value pairs."""

    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@contextmanager
def span(
    name: str,
    *,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> Iterator[Any]:
    """Profile the block as ``name``; a failure is logged and re-raised.

    ``component=True`` also tracks the block as a component named ``name``,
    a string names the component explicitly. ``metadata`` is attached as
    logger context while the block runs.
    """

    log = get_logger(logger_name)
    tracked = name if component is True else component or None
    context = {key: str(value) for key, value in (metadata or {}).items()}

    with ExitStack() as stack:
        for key, value in context.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if tracked:
            stack.enter_context(log.track_component(tracked))
        stack.enter_context(log.profile(name))
        try:
            yield log
        except Exception as exc:
            _emit(log, "error", "span::fail", {"span": name, **context, "reason": str(exc)})
            raise


configure()

__all__ = [
    "ENV_PREFIX",
    "LogSettings",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
