"""Cancellation error type.

Defines the public ``CancelledError`` raised when a request observes that its
`CancellationToken` was cancelled. The classifier maps it to
``REQUEST_CANCELLED``.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when a request is cancelled cooperatively."""


__all__ = ["CancelledError"]
