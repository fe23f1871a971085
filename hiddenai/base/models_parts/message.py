"""
Chat message DTO with fenced code block splitting.

`Message.from_text` turns a raw model reply into ordered prose and code parts
so a UI can render code blocks separately. `Message.to_prompt_text` goes the
other way when earlier messages are replayed as request context.
"""
from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Literal

from .message_content import MessageContent

Role = Literal["user", "assistant"]

_CODE_BLOCK = re.compile(r"```([a-zA-Z0-9]*)\s*\n?([\s\S]*?)\n?```")
_BLANK_RUN = re.compile(r"\n\s*\n+")
_DEFAULT_LANGUAGE = "text"


def _collapse_blank_lines(text: str) -> str:
    return _BLANK_RUN.sub("\n", text)


def parse_code_blocks(text: str) -> List[MessageContent]:
    """Split ``text`` into prose and fenced code parts, in order.

    - Prose before a block is trimmed and gets one trailing space.
    - Prose after the last block loses leading newlines and has runs of
      blank lines collapsed to a single newline.
    - Blank parts are dropped; blank input yields an empty list.
    - If nothing survives but the input is not blank, the collapsed input is
      returned as a single prose part.
    """
    contents: List[MessageContent] = []
    last = 0
    for match in _CODE_BLOCK.finditer(text):
        before = text[last:match.start()].strip()
        if before:
            contents.append(MessageContent(before + " "))
        language = match.group(1).strip() or _DEFAULT_LANGUAGE
        code = match.group(2).strip()
        if code:
            contents.append(MessageContent(code, language=language))
        last = match.end()

    if last < len(text):
        after = _collapse_blank_lines(text[last:].lstrip("\r\n"))
        if after.strip():
            contents.append(MessageContent(after))

    if not contents and text.strip():
        contents.append(MessageContent(_collapse_blank_lines(text)))
    return contents


@dataclass
class Message:
    """A user or assistant turn as shown in the conversation view.

    Attributes:
        role: ``"user"`` or ``"assistant"``.
        contents: Ordered prose and code parts.
        timestamp: Creation time (UTC).
        id: Stable identifier used to reference the message in reply chains.
    """

    role: Role
    contents: List[MessageContent]
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def from_text(cls, text: str, role: Role) -> "Message":
        return cls(role=role, contents=parse_code_blocks(text))

    def to_prompt_text(self) -> str:
        """Flatten parts into one markdown string separated by blank lines."""
        return "\n\n".join(part.to_prompt_text() for part in self.contents)

    def to_payload(self) -> dict:
        return {"role": self.role, "content": self.to_prompt_text()}


__all__ = ["Message", "Role", "parse_code_blocks"]
