"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `hiddenai.base.errors` for the stable surface.
"""

from .error_kind import ErrorKind
from .failure import Failure, FailureReason
from .description import Description, describe
from .service_error import ServiceError
from .classification import classify, failure_from_exception, parse_retry_after

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
