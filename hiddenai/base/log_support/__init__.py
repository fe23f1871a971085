"""Formatter and per-request context used by ``hiddenai.base.logging``."""

from .json_formatter import ISO, JsonFormatter
from .logging_context import LogContext

__all__ = ["ISO", "JsonFormatter", "LogContext"]
