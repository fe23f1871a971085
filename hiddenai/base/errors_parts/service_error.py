"""
Structured AI service error type.

`ServiceError` is both the classified variant value and the exception raised
by the service layer. The `kind` tag selects the variant; the remaining
fields hold that variant's associated values and stay ``None`` otherwise.
Use the named constructors rather than filling fields by hand.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .description import describe
from .error_kind import ErrorKind


@dataclass
class ServiceError(Exception):
    """Classified failure of an AI service request.

    Attributes:
        kind: Variant tag.
        detail: File name (``FILE_NOT_FOUND``, ``FILE_TOO_SMALL``), format
            (``INVALID_FILE_FORMAT``), permission name (``PERMISSION_DENIED``)
            or optional server message (``SERVER_ERROR``).
        status_code: HTTP status for ``SERVER_ERROR``.
        retry_after: Seconds to wait for ``RATE_LIMIT_EXCEEDED``, if known.
        cause: Original failure wrapped by ``UNKNOWN``.

    Instances are treated as immutable values once built.
    """

    kind: ErrorKind
    detail: Optional[str] = None
    status_code: Optional[int] = None
    retry_after: Optional[float] = None
    cause: Any = None

    # value equality, identity hash
    __hash__ = Exception.__hash__

    # -------------------- Variant constructors --------------------

    @classmethod
    def api_key_missing(cls) -> "ServiceError":
        return cls(ErrorKind.API_KEY_MISSING)

    @classmethod
    def api_key_invalid(cls) -> "ServiceError":
        return cls(ErrorKind.API_KEY_INVALID)

    @classmethod
    def network_timeout(cls) -> "ServiceError":
        return cls(ErrorKind.NETWORK_TIMEOUT)

    @classmethod
    def network_connection_lost(cls) -> "ServiceError":
        return cls(ErrorKind.NETWORK_CONNECTION_LOST)

    @classmethod
    def invalid_response(cls) -> "ServiceError":
        return cls(ErrorKind.INVALID_RESPONSE)

    @classmethod
    def response_parsing_failed(cls) -> "ServiceError":
        return cls(ErrorKind.RESPONSE_PARSING_FAILED)

    @classmethod
    def file_not_found(cls, name: str) -> "ServiceError":
        return cls(ErrorKind.FILE_NOT_FOUND, detail=name)

    @classmethod
    def file_too_small(cls, name: str) -> "ServiceError":
        return cls(ErrorKind.FILE_TOO_SMALL, detail=name)

    @classmethod
    def invalid_file_format(cls, fmt: str) -> "ServiceError":
        return cls(ErrorKind.INVALID_FILE_FORMAT, detail=fmt)

    @classmethod
    def request_cancelled(cls) -> "ServiceError":
        return cls(ErrorKind.REQUEST_CANCELLED)

    @classmethod
    def rate_limit_exceeded(cls, retry_after: Optional[float] = None) -> "ServiceError":
        return cls(ErrorKind.RATE_LIMIT_EXCEEDED, retry_after=retry_after)

    @classmethod
    def server_error(cls, status_code: int, message: Optional[str] = None) -> "ServiceError":
        return cls(ErrorKind.SERVER_ERROR, detail=message, status_code=status_code)

    @classmethod
    def quota_exceeded(cls) -> "ServiceError":
        return cls(ErrorKind.QUOTA_EXCEEDED)

    @classmethod
    def audio_too_short(cls) -> "ServiceError":
        return cls(ErrorKind.AUDIO_TOO_SHORT)

    @classmethod
    def image_processing_failed(cls) -> "ServiceError":
        return cls(ErrorKind.IMAGE_PROCESSING_FAILED)

    @classmethod
    def permission_denied(cls, permission: str) -> "ServiceError":
        return cls(ErrorKind.PERMISSION_DENIED, detail=permission)

    @classmethod
    def unknown(cls, cause: Any) -> "ServiceError":
        return cls(ErrorKind.UNKNOWN, cause=cause)

    # -------------------- Derived view --------------------

    @property
    def user_message(self) -> str:
        return describe(self).user_message

    @property
    def recovery_suggestion(self) -> str:
        return describe(self).recovery_suggestion

    @property
    def is_retryable(self) -> bool:
        return describe(self).is_retryable

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.user_message}"


__all__ = ["ServiceError"]
