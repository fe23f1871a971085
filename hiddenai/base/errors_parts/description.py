"""
User-facing description of a classified failure.

`describe` is a pure lookup over every `ErrorKind`: the message shown to the
user, a hint on how to recover, and whether re-issuing the same request after
a backoff makes sense. The UI layer reads nothing else from an error.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict

from .error_kind import ErrorKind

if TYPE_CHECKING:
    from .service_error import ServiceError


@dataclass(frozen=True)
class Description:
    """Read-only view of a `ServiceError` for presentation."""

    user_message: str
    recovery_suggestion: str
    is_retryable: bool


_DEFAULT_RECOVERY = "Try again. If the problem persists, restart the app."

_RETRYABLE_SERVER_CODES = frozenset({408, 429})


def _rate_limit_message(err: "ServiceError") -> str:
    if err.retry_after is not None:
        return (
            f"Rate limit exceeded. Please wait {int(err.retry_after)} seconds "
            "before trying again."
        )
    return "Rate limit exceeded. Please try again later."


def _cause_text(cause: object) -> str:
    try:
        return str(cause)
    except Exception:  # noqa: BLE001 - describe must stay total
        return type(cause).__name__


def _server_error_message(err: "ServiceError") -> str:
    if err.detail:
        return f"Server error ({err.status_code}): {err.detail}"
    return f"Server error ({err.status_code})"


_MESSAGES: Dict[ErrorKind, Callable[["ServiceError"], str]] = {
    ErrorKind.API_KEY_MISSING: lambda e: "OpenAI API key not set. Please configure in settings.",
    ErrorKind.API_KEY_INVALID: lambda e: "Invalid OpenAI API key. Please check your settings.",
    ErrorKind.NETWORK_TIMEOUT: lambda e: (
        "Request timed out. Please check your internet connection and try again."
    ),
    ErrorKind.NETWORK_CONNECTION_LOST: lambda e: (
        "Network connection lost. Please check your internet connection."
    ),
    ErrorKind.INVALID_RESPONSE: lambda e: "Received invalid response from server.",
    ErrorKind.RESPONSE_PARSING_FAILED: lambda e: "Failed to parse server response.",
    ErrorKind.FILE_NOT_FOUND: lambda e: f"File not found: {e.detail}",
    ErrorKind.FILE_TOO_SMALL: lambda e: (
        f"File too small or empty: {e.detail}. Please ensure the file contains valid data."
    ),
    ErrorKind.INVALID_FILE_FORMAT: lambda e: f"Invalid or unsupported file format: {e.detail}",
    ErrorKind.REQUEST_CANCELLED: lambda e: "Request was cancelled.",
    ErrorKind.RATE_LIMIT_EXCEEDED: _rate_limit_message,
    ErrorKind.SERVER_ERROR: _server_error_message,
    ErrorKind.QUOTA_EXCEEDED: lambda e: "API quota exceeded. Please check your OpenAI account billing.",
    ErrorKind.AUDIO_TOO_SHORT: lambda e: (
        "Audio recording too short or no audio detected. Please try again."
    ),
    ErrorKind.IMAGE_PROCESSING_FAILED: lambda e: (
        "Failed to process image. Please try with a different image."
    ),
    ErrorKind.PERMISSION_DENIED: lambda e: (
        f"{e.detail} permission is required. Please check your Privacy settings."
    ),
    ErrorKind.UNKNOWN: lambda e: f"Unexpected error: {_cause_text(e.cause)}",
}

_RECOVERY: Dict[ErrorKind, str] = {
    ErrorKind.API_KEY_MISSING: "Open settings and configure a valid OpenAI API key.",
    ErrorKind.API_KEY_INVALID: "Open settings and configure a valid OpenAI API key.",
    ErrorKind.NETWORK_TIMEOUT: "Check your internet connection and try again.",
    ErrorKind.NETWORK_CONNECTION_LOST: "Check your internet connection and try again.",
    ErrorKind.RATE_LIMIT_EXCEEDED: "Wait a moment before making another request.",
    ErrorKind.QUOTA_EXCEEDED: "Check your OpenAI account billing and usage limits.",
    ErrorKind.AUDIO_TOO_SHORT: "Record for at least 1-2 seconds and speak clearly.",
    ErrorKind.PERMISSION_DENIED: (
        "Open System Preferences > Security & Privacy to grant required permissions."
    ),
}

_ALWAYS_RETRYABLE = frozenset(
    {
        ErrorKind.NETWORK_TIMEOUT,
        ErrorKind.NETWORK_CONNECTION_LOST,
        ErrorKind.RATE_LIMIT_EXCEEDED,
    }
)


def is_retryable(err: "ServiceError") -> bool:
    """Return True when the same request may be re-issued after backoff."""
    if err.kind in _ALWAYS_RETRYABLE:
        return True
    if err.kind is ErrorKind.SERVER_ERROR:
        code = err.status_code or 0
        return code >= 500 or code in _RETRYABLE_SERVER_CODES
    return False


def describe(err: "ServiceError") -> Description:
    """Return the presentation view of ``err``.

    Total over `ErrorKind`; performs no I/O and keeps no state.
    """
    return Description(
        user_message=_MESSAGES[err.kind](err),
        recovery_suggestion=_RECOVERY.get(err.kind, _DEFAULT_RECOVERY),
        is_retryable=is_retryable(err),
    )


__all__ = ["Description", "describe", "is_retryable"]
