"""Unified AI service error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``hiddenai.base.errors_parts`` to keep a stable import path for callers.
"""

from .errors_parts.error_kind import ErrorKind
from .errors_parts.failure import Failure, FailureReason
from .errors_parts.description import Description, describe
from .errors_parts.service_error import ServiceError
from .errors_parts.classification import classify, failure_from_exception, parse_retry_after

__all__ = [
    "ErrorKind",
    "Failure",
    "FailureReason",
    "Description",
    "describe",
    "ServiceError",
    "classify",
    "failure_from_exception",
    "parse_retry_after",
]
