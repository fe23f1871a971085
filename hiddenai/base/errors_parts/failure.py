"""
Raw failure signal handed to the classifier.

A `Failure` is what an HTTP client knows about a request that went wrong
before anyone has decided what it means: an optional status code, an optional
machine-readable reason, free text, and an optional ``Retry-After`` value.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FailureReason(str, Enum):
    """Transport-level reasons a request can fail without an HTTP status."""

    TIMED_OUT = "timed_out"
    NOT_CONNECTED = "not_connected"
    CONNECTION_LOST = "connection_lost"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Failure:
    """Unclassified failure of an outbound request.

    Attributes:
        status_code: HTTP status (or other numeric error code) if known.
        reason: Transport-level reason such as a timeout or cancellation.
        message: Free-text description, usually the response body or the
            exception string.
        retry_after: Seconds the server asked us to wait, if it said so.
    """

    status_code: Optional[int] = None
    reason: Optional[FailureReason] = None
    message: Optional[str] = None
    retry_after: Optional[float] = None

    def __str__(self) -> str:
        parts = []
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        if self.reason is not None:
            parts.append(f"reason={self.reason.value}")
        if self.message:
            parts.append(self.message)
        return " ".join(parts) or "unspecified failure"


__all__ = ["Failure", "FailureReason"]
