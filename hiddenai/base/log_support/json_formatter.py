"""JSON logging formatter for the shared ``hiddenai`` logger.

One JSON object per line: timestamp, level, logger name and message, plus any
``extra`` attributes set on the record. When the message itself is a JSON
object (as emitted by ``log_event``) its keys are merged into the line and the
raw message is dropped, so events are never double encoded.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"

# attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


def _event_payload(text: str) -> Dict[str, Any] | None:
    if not text.startswith("{"):
        return None
    try:
        parsed = json.loads(text)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


class JsonFormatter(logging.Formatter):
    """Render records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        line: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
        }
        text = record.getMessage()
        event = _event_payload(text)
        if event is None:
            line["msg"] = text
        else:
            line.update(event)
        if record.exc_info:
            line["exc"] = self.formatException(record.exc_info)
        extras = {
            k: v
            for k, v in vars(record).items()
            if not k.startswith("_") and k not in _RECORD_ATTRS and k not in line
        }
        line.update(extras)
        return json.dumps(line, ensure_ascii=False, default=str)


__all__ = ["JsonFormatter", "ISO"]
