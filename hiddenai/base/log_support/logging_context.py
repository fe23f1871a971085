"""Structured logging context for service requests.

`LogContext` carries the fields shared by every event of one request
(operation, model, request id) plus free-form extras such as the uploaded
file name or byte count.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Per-request fields merged into each ``log_event`` payload."""

    operation: Optional[str] = None
    model: Optional[str] = None
    request_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into one mapping; extras win on name clashes, ``None`` values are pruned."""
        merged = {"operation": self.operation, "model": self.model, "request_id": self.request_id}
        merged.update(self.extra)
        return {k: v for k, v in merged.items() if v is not None}


__all__ = ["LogContext"]
