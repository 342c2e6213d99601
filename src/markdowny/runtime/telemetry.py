"""telelog wiring for markdowny.

Loggers are built lazily from ``MARKDOWNY_*`` environment variables the
first time one is requested. Hosts that own the terminal can hand in their
own ``telelog.Config`` through ``configure``.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "MARKDOWNY_"
ROOT_LOGGER = "markdowny"

_loggers: Dict[str, Any] = {}
_config: Optional[Any] = None


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(ENV_PREFIX + name, default)


def env_flag(name: str, default: bool = False) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _from_env() -> Any:
    config = tl.Config()
    config.with_min_level((env("LOG_LEVEL") or "WARNING").upper())
    console = not env_flag("DISABLE_CONSOLE")
    config.with_console_output(console)
    if console:
        config.with_colored_output(not env_flag("NO_COLOR"))
    if env_flag("LOG_JSON"):
        config.with_json_format(True)
    if env("LOG_FILE"):
        config.with_file_output(env("LOG_FILE"))
    return config


def configure(config: Optional[Any] = None) -> None:
    """Use ``config``, or rebuild from the environment, for new loggers."""

    global _config
    _config = config if config is not None else _from_env()
    _config.with_profiling(True)
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    name = name or ROOT_LOGGER
    if _config is None:
        configure()
    if name not in _loggers:
        _loggers[name] = tl.Logger.with_config(name, _config)
    return _loggers[name]


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else repr(value)


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    level = level.lower()
    structured = getattr(logger, f"{level}_with", None)
    if structured is not None:
        structured(message, [(key, _as_text(val)) for key, val in payload.items()])
        return
    plain = getattr(logger, level, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Collects outcome metadata for the surrounding ``span``."""

    logger: Any
    name: str
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _as_text(value)

    def fail(self, reason: str) -> None:
        payload = {"span": self.name, **self.metadata, "reason": reason}
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block under ``name``; ``component`` also tracks it."""

    log = get_logger(logger_name)
    context: List[Tuple[str, str]] = [
        (key, _as_text(value)) for key, value in (metadata or {}).items()
    ]
    for key, value in context:
        log.add_context(key, value)
    handle = SpanHandle(log, name, dict(context))
    try:
        if component:
            with log.track_component(component), log.profile(name):
                yield handle
        else:
            with log.profile(name):
                yield handle
    except Exception as exc:
        handle.fail(str(exc))
        raise
    finally:
        for key, _ in context:
            log.remove_context(key)


__all__ = [
    "SpanHandle",
    "configure",
    "env",
    "env_flag",
    "get_logger",
    "record_event",
    "span",
]
