"""
A single rendered part of a chat message.

A part is either prose or a fenced code block. Code parts carry the fence's
language tag (``"text"`` when the fence had none).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class MessageContent:
    """Prose (``language is None``) or code in ``language``."""

    content: str
    language: Optional[str] = None

    @property
    def is_code(self) -> bool:
        return self.language is not None

    def to_prompt_text(self) -> str:
        """Render back to markdown, re-fencing code parts."""
        if self.language is None:
            return self.content
        return f"```{self.language}\n{self.content}\n```"


__all__ = ["MessageContent"]
