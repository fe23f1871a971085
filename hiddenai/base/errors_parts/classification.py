"""
Request outcome classification.

Maps whatever an outbound request failed with (an SDK exception, a transport
error, a bare HTTP status wrapped in a `Failure`, or an already classified
`ServiceError`) onto exactly one `ServiceError` variant.

Lowering exceptions to a `Failure` handles the shapes raised by ``httpx``, the
``openai`` SDK, the standard library and this package's cancellation token.
The ordered rules in `classify` then decide the variant; the first match
wins and anything left over becomes ``UNKNOWN``.
"""
from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Optional, Union

import httpx
import openai

from ..cancellation_parts.cancelled_error import CancelledError
from .failure import Failure, FailureReason
from .service_error import ServiceError

FailureLike = Union[ServiceError, Failure, BaseException]

_CONNECTIVITY_REASONS = (FailureReason.NOT_CONNECTED, FailureReason.CONNECTION_LOST)


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


def parse_retry_after(value: Any) -> Optional[float]:
    """Parse a ``Retry-After`` value (delta-seconds or HTTP-date) into seconds.

    Negative or unparseable values yield ``None``. Dates in the past yield 0.
    """
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value) if value >= 0 else None
    text = str(value).strip()
    if not text:
        return None
    try:
        seconds = float(text)
        return seconds if seconds >= 0 else None
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(text)
    except (TypeError, ValueError):
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max(0.0, (when - datetime.now(timezone.utc)).total_seconds())


def _extract_retry_after(exc: BaseException) -> Optional[float]:
    direct = getattr(exc, "retry_after", None)
    if direct is not None:
        return parse_retry_after(direct)
    headers = getattr(getattr(exc, "response", None), "headers", None)
    if headers is None:
        return None
    millis = headers.get("retry-after-ms")
    if millis is not None:
        parsed = parse_retry_after(millis)
        if parsed is not None:
            return parsed / 1000.0
    return parse_retry_after(headers.get("retry-after") or headers.get("Retry-After"))


def _extract_reason(exc: BaseException) -> Optional[FailureReason]:
    # APITimeoutError subclasses APIConnectionError, so it must be checked first.
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException, openai.APITimeoutError)):
        return FailureReason.TIMED_OUT
    if isinstance(exc, (CancelledError, asyncio.CancelledError)):
        return FailureReason.CANCELLED
    if isinstance(exc, httpx.ConnectError):
        return FailureReason.NOT_CONNECTED
    if isinstance(exc, openai.APIConnectionError):
        if isinstance(exc.__cause__, httpx.ConnectError):
            return FailureReason.NOT_CONNECTED
        return FailureReason.CONNECTION_LOST
    if isinstance(exc, (ConnectionError, httpx.NetworkError)):
        return FailureReason.CONNECTION_LOST
    return None


def failure_from_exception(exc: BaseException) -> Failure:
    """Lower an arbitrary exception into a `Failure` signal."""
    message = getattr(exc, "message", None)
    if not isinstance(message, str) or not message:
        message = str(exc) or type(exc).__name__
    return Failure(
        status_code=_extract_status(exc),
        reason=_extract_reason(exc),
        message=message,
        retry_after=_extract_retry_after(exc),
    )


def _classify_failure(failure: Failure, original: Any) -> ServiceError:
    reason = failure.reason
    status = failure.status_code
    if reason is FailureReason.TIMED_OUT:
        return ServiceError.network_timeout()
    if reason in _CONNECTIVITY_REASONS:
        return ServiceError.network_connection_lost()
    if reason is FailureReason.CANCELLED:
        return ServiceError.request_cancelled()
    if status == 401:
        return ServiceError.api_key_invalid()
    if status == 429:
        return ServiceError.rate_limit_exceeded(failure.retry_after)
    if status in (402, 403):
        return ServiceError.quota_exceeded()
    if status == 404:
        return ServiceError.file_not_found(failure.message or "")
    if status is not None and 500 <= status <= 599:
        return ServiceError.server_error(status, failure.message)
    return ServiceError.unknown(original)


def classify(failure: FailureLike) -> ServiceError:
    """Classify a failure into a `ServiceError`.

    Precedence:
        1. ``ServiceError`` passthrough (idempotent).
        2. Timeout, connectivity, cancellation reasons.
        3. HTTP status mapping (401, 429, 402/403, 404, 5xx).
        4. ``UNKNOWN`` fallback carrying the original failure.

    Never raises.
    """
    if isinstance(failure, ServiceError):
        return failure
    if isinstance(failure, Failure):
        return _classify_failure(failure, failure)
    try:
        lowered = failure_from_exception(failure)
    except Exception:  # noqa: BLE001 - classification must stay total
        return ServiceError.unknown(failure)
    return _classify_failure(lowered, failure)


__all__ = [
    "FailureLike",
    "classify",
    "failure_from_exception",
    "parse_retry_after",
    "_extract_status",
]
