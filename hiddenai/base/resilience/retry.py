from __future__ import annotations

import functools
import time
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Protocol, TypeVar

from ..cancellation import CancellationToken
from ..errors import ErrorKind, ServiceError, classify
from ..logging import get_logger, log_event
from ..timeouts import NetworkConfig

T = TypeVar("T")

_logger = get_logger("hiddenai.retry")


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: ServiceError | None,
    ) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    max_attempts: int = 4
    base_delay: float = 0.5  # attempt n waits base_delay * 2**n
    max_delay: float = 60.0
    attempt_logger: AttemptLogger | None = None

    @classmethod
    def from_network(cls, network: NetworkConfig, attempt_logger: AttemptLogger | None = None) -> "RetryConfig":
        return cls(
            max_attempts=network.max_retries + 1,
            base_delay=network.base_retry_delay_seconds,
            attempt_logger=attempt_logger,
        )

    def delays(self) -> Iterator[float]:
        for attempt in range(max(self.max_attempts, 1) - 1):
            yield min(self.base_delay * 2**attempt, self.max_delay)

    def delay_for(self, base: float, error: ServiceError) -> float:
        """Backoff before the next attempt; honours a server ``Retry-After``."""
        if error.kind is ErrorKind.RATE_LIMIT_EXCEEDED and error.retry_after is not None:
            return min(max(base, error.retry_after), self.max_delay)
        return base


DEFAULT_RETRY_CONFIG = RetryConfig()


def run_with_retry(
    func: Callable[[], T],
    config: RetryConfig = DEFAULT_RETRY_CONFIG,
    token: Optional[CancellationToken] = None,
) -> T:
    """Call ``func`` under the retry policy.

    - Any exception is classified; only retryable kinds are retried
    - Exponential backoff, interrupted early by ``token``
    - The final failure is raised as a `ServiceError` chained to the original
    """
    schedule = list(config.delays()) + [None]  # final attempt has delay None
    for attempt, base in enumerate(schedule):
        if token is not None and token.cancelled:
            raise ServiceError.request_cancelled()
        try:
            result = func()
        except Exception as exc:  # noqa: BLE001 - every failure is classified
            error = classify(exc)
            delay = config.delay_for(base, error) if (base is not None and error.is_retryable) else None
            if config.attempt_logger:
                config.attempt_logger(
                    attempt=attempt,
                    max_attempts=config.max_attempts,
                    delay=delay,
                    error=error,
                )
            log_event(
                _logger,
                "retry.attempt",
                attempt=attempt,
                max_attempts=config.max_attempts,
                error_kind=error.kind.value,
                delay=delay,
                will_retry=delay is not None,
            )
            if delay is None:
                if error is exc:
                    raise
                raise error from exc
            if token is not None:
                if token.wait(delay):
                    raise ServiceError.request_cancelled() from exc
            else:
                time.sleep(delay)
            continue
        if config.attempt_logger:
            config.attempt_logger(
                attempt=attempt,
                max_attempts=config.max_attempts,
                delay=None,
                error=None,
            )
        return result
    # The loop always returns or raises; schedule is never empty.
    raise RuntimeError("retry: reached terminal state without outcome")  # pragma: no cover


def retry(config: RetryConfig = DEFAULT_RETRY_CONFIG, token: Optional[CancellationToken] = None):
    """Return a decorator applying ``run_with_retry`` to the wrapped function."""

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            return run_with_retry(lambda: func(*args, **kwargs), config, token)

        return wrapper

    return decorator


__all__ = [
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "retry",
    "run_with_retry",
]
