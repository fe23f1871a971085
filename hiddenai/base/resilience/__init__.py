"""Retry policy for outbound requests."""

from .retry import DEFAULT_RETRY_CONFIG, RetryConfig, retry, run_with_retry

__all__ = ["RetryConfig", "DEFAULT_RETRY_CONFIG", "retry", "run_with_retry"]
