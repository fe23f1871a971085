"""In-process notification center.

Replaces the desktop client's notification bus: the OpenAI service posts
every reply on ``response`` and every classified failure on ``error`` so a
presentation layer can react without wrapping each call. Subscribers run
synchronously on the posting thread, in subscription order.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, List

from .logging import get_logger, log_event

RESPONSE_TOPIC = "response"
ERROR_TOPIC = "error"

Subscriber = Callable[[Any], None]

_logger = get_logger("hiddenai.notifications")


class NotificationCenter:
    """Topic keyed publish/subscribe registry.

    A subscriber that raises is logged and skipped; delivery to the remaining
    subscribers continues.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscribers: Dict[str, List[Subscriber]] = {}

    def subscribe(self, topic: str, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback`` for ``topic``; return a function that unsubscribes it."""
        with self._lock:
            self._subscribers.setdefault(topic, []).append(callback)

        def _unsubscribe() -> None:
            with self._lock:
                callbacks = self._subscribers.get(topic, [])
                if callback in callbacks:
                    callbacks.remove(callback)

        return _unsubscribe

    def post(self, topic: str, payload: Any = None) -> int:
        """Deliver ``payload`` to every subscriber of ``topic``; return the delivered count."""
        with self._lock:
            callbacks = list(self._subscribers.get(topic, ()))
        delivered = 0
        for callback in callbacks:
            try:
                callback(payload)
            except Exception as exc:  # noqa: BLE001 - one subscriber must not starve the rest
                log_event(
                    _logger,
                    "notification.subscriber_error",
                    topic=topic,
                    subscriber=getattr(callback, "__qualname__", repr(callback)),
                    error=str(exc),
                )
                continue
            delivered += 1
        return delivered


__all__ = ["NotificationCenter", "RESPONSE_TOPIC", "ERROR_TOPIC", "Subscriber"]
