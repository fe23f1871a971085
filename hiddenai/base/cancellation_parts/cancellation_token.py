"""Cooperative cancellation for outbound requests.

A caller (for instance a UI closing its panel) cancels the token; the retry
loop notices before the next attempt or while sleeping between attempts. A
request already on the wire is not interrupted.
"""

from __future__ import annotations

import threading
from typing import List, Optional

from .cancelled_error import CancelledError


class CancellationToken:
    """Thread-safe cancel flag with optional children.

    Cancelling a token cancels every token linked below it, with the same
    reason. The first ``cancel`` wins; later calls are ignored.
    """

    def __init__(self, *, parent: Optional["CancellationToken"] = None) -> None:
        self._flag = threading.Event()
        self._guard = threading.Lock()
        self._why: Optional[str] = None
        self._linked: List["CancellationToken"] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:
        return self._flag.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._why

    def cancel(self, reason: Optional[str] = None) -> None:
        with self._guard:
            if self._flag.is_set():
                return
            self._why = reason
            self._flag.set()
            linked = tuple(self._linked)
        for token in linked:
            token.cancel(reason)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Attach ``token`` below this one; it is cancelled at once if this one already is."""
        with self._guard:
            self._linked.append(token)
            already = self._flag.is_set()
        if already:
            token.cancel(self._why)
        return token

    def child(self) -> "CancellationToken":
        return CancellationToken(parent=self)

    def wait(self, seconds: float) -> bool:
        """Block for up to ``seconds``; return True as soon as the token is cancelled."""
        return self._flag.wait(timeout=max(0.0, seconds))

    def raise_if_cancelled(self) -> None:
        if self._flag.is_set():
            raise CancelledError(self._why or "request cancelled")

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"CancellationToken(cancelled={self.cancelled}, reason={self._why!r})"


__all__ = ["CancellationToken"]
