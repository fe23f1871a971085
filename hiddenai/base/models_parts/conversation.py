"""
Running chat history sent with every plain text request.

The first entry is always the system prompt; it is swapped when the question
type changes. ``clear`` drops every turn but keeps the system prompt.
"""
from __future__ import annotations

import threading
from typing import Dict, List, Literal

ChatRole = Literal["system", "user", "assistant"]


class Conversation:
    """Thread-safe ordered list of ``{"role", "content"}`` entries."""

    def __init__(self, system_prompt: str) -> None:
        self._lock = threading.Lock()
        self._messages: List[Dict[str, str]] = [{"role": "system", "content": system_prompt}]

    @property
    def system_prompt(self) -> str:
        with self._lock:
            return self._messages[0]["content"]

    def set_system(self, prompt: str) -> None:
        with self._lock:
            self._messages[0] = {"role": "system", "content": prompt}

    def add_user(self, content: str) -> None:
        self._append("user", content)

    def add_assistant(self, content: str) -> None:
        self._append("assistant", content)

    def _append(self, role: ChatRole, content: str) -> None:
        with self._lock:
            self._messages.append({"role": role, "content": content})

    def clear(self) -> None:
        with self._lock:
            del self._messages[1:]

    def as_payload(self) -> List[Dict[str, str]]:
        """Return a copy safe to hand to the SDK while the history keeps growing."""
        with self._lock:
            return [dict(m) for m in self._messages]

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)


__all__ = ["Conversation", "ChatRole"]
