"""
Closed set of request failure kinds (taxonomy).

Defines the `ErrorKind` enumeration used by the classifier, the retry policy
and the OpenAI service. Values are lowercase snake_case and are considered a
stable public contract for logging and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Enumerated failure categories for outbound AI service requests."""

    API_KEY_MISSING = "api_key_missing"
    API_KEY_INVALID = "api_key_invalid"
    NETWORK_TIMEOUT = "network_timeout"
    NETWORK_CONNECTION_LOST = "network_connection_lost"
    INVALID_RESPONSE = "invalid_response"
    RESPONSE_PARSING_FAILED = "response_parsing_failed"
    FILE_NOT_FOUND = "file_not_found"
    FILE_TOO_SMALL = "file_too_small"
    INVALID_FILE_FORMAT = "invalid_file_format"
    REQUEST_CANCELLED = "request_cancelled"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    SERVER_ERROR = "server_error"
    QUOTA_EXCEEDED = "quota_exceeded"
    AUDIO_TOO_SHORT = "audio_too_short"
    IMAGE_PROCESSING_FAILED = "image_processing_failed"
    PERMISSION_DENIED = "permission_denied"
    UNKNOWN = "unknown"


__all__ = ["ErrorKind"]
