"""Structured logging utilities for the hiddenai package.

- One shared ``hiddenai`` logger writes to stderr (JSON by default); module
  loggers obtained through ``get_logger`` propagate into it.
- Level comes from ``HIDDENAI_LOG_LEVEL`` when set.
- ``log_event`` emits a single JSON payload per event so request, retry and
  error events share one schema.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional, Union

from .log_support import JsonFormatter, LogContext

ROOT_LOGGER_NAME = "hiddenai"
LEVEL_ENV = "HIDDENAI_LOG_LEVEL"

_CONSOLE_MARK = "_hiddenai_console"
_FILE_MARK = "_hiddenai_file_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}
_FILE_MAX_BYTES = 10 * 1024 * 1024
_FILE_BACKUPS = 5


def _level_from(value: Union[int, str, None], default: int) -> int:
    if isinstance(value, int):
        return value
    return _LEVELS.get((value or "").strip().upper(), default)


def _make_formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _console_handler(logger: logging.Logger) -> Optional[logging.StreamHandler]:
    for h in logger.handlers:
        if getattr(h, _CONSOLE_MARK, False):
            return h  # type: ignore[return-value]
    return None


def _setup_root(json_mode: bool, level: int) -> logging.Logger:
    """Create or refresh the shared logger's console handler."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    effective = _level_from(os.getenv(LEVEL_ENV), level)
    console = _console_handler(root)
    if console is None:
        console = logging.StreamHandler(sys.stderr)
        setattr(console, _CONSOLE_MARK, True)
        root.handlers[:] = [console]
        root.propagate = False
    else:
        # follow stream swaps (pytest capsys replaces sys.stderr per test)
        console.setStream(sys.stderr)
    if console.formatter is None or json_mode != isinstance(console.formatter, JsonFormatter):
        console.setFormatter(_make_formatter(json_mode))
    root.setLevel(effective)
    console.setLevel(effective)
    return root


def get_logger(name: str = ROOT_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return ``name``'s logger, making sure the shared handler is in place.

    Child loggers carry no handlers of their own; records propagate to the
    ``hiddenai`` logger.
    """
    root = _setup_root(json_mode, level)
    if name == ROOT_LOGGER_NAME:
        return root
    child = logging.getLogger(name)
    child.setLevel(logging.NOTSET)
    child.propagate = True
    return child


def configure_logger(
    *,
    level: Union[int, str, None] = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Adjust the shared logger at runtime.

    Parameters
    ----------
    level: int | str | None
        New level, numeric or by name. ``None`` keeps the current one.
    file_path: Optional[str]
        Attach a rotating file handler writing here (10 MiB x 5). ``None``
        detaches a handler previously attached by this function; handlers
        added by other code are never touched.
    json_mode: bool
        JSON (default) or plain text lines.

    Returns
    -------
    logging.Logger
        The shared ``hiddenai`` logger.
    """
    root = get_logger(ROOT_LOGGER_NAME, json_mode=json_mode)
    if level is not None:
        new_level = _level_from(level, root.level)
        root.setLevel(new_level)
        for h in root.handlers:
            h.setLevel(new_level)

    target = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    current = next((h for h in root.handlers if getattr(h, _FILE_MARK, False)), None)
    if current is not None and getattr(current, "baseFilename", None) != target:
        root.removeHandler(current)
        current.close()
        current = None
    if target is None:
        return root

    if current is None:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
        current = RotatingFileHandler(target, maxBytes=_FILE_MAX_BYTES, backupCount=_FILE_BACKUPS, encoding="utf-8")
        setattr(current, _FILE_MARK, True)
        root.addHandler(current)
    current.setFormatter(_make_formatter(json_mode))
    current.setLevel(root.level)
    return root


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: Optional[LogContext] = None,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Emit ``event`` as one JSON message.

    Context fields come first, then ``fields``; ``None`` values are dropped
    and anything not JSON serializable is rendered with ``str``.
    """
    payload: dict[str, Any] = {"event": event}
    if ctx is not None:
        payload.update(ctx.to_dict())
    payload.update((k, v) for k, v in fields.items() if v is not None)
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


__all__ = [
    "LogContext",
    "configure_logger",
    "get_logger",
    "log_event",
]
