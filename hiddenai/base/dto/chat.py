"""
Pydantic DTOs for outbound chat completion payloads.

Purpose
-------
Validate the payload the OpenAI service builds before it leaves the process:
roles, non-empty user content, numeric parameter bounds, and the shape of
image parts used by screenshot requests.

Fallback semantics: none. Validation either succeeds or raises
`pydantic.ValidationError`, which the service classifies like any other
failure (``UNKNOWN``, not retryable).
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

Role = Literal["system", "user", "assistant"]


class ImageURLDTO(BaseModel):
    """Image reference; screenshots are sent inline as ``data:`` URLs."""

    url: str = Field(..., min_length=1)


class ContentPartDTO(BaseModel):
    """A structured content part: text or an image reference."""

    type: Literal["text", "image_url"]
    text: Optional[str] = None
    image_url: Optional[ImageURLDTO] = None

    @model_validator(mode="after")
    def _validate_payload(self) -> "ContentPartDTO":
        if self.type == "text" and self.text is None:
            raise ValueError("text part requires 'text'")
        if self.type == "image_url" and self.image_url is None:
            raise ValueError("image_url part requires 'image_url'")
        return self


class MessageDTO(BaseModel):
    """A chat message with either a text string or structured parts.

    User messages must carry visible content; system and assistant messages
    may be empty (an unset context prompt is allowed).
    """

    role: Role
    content: Union[str, List[ContentPartDTO]]

    @model_validator(mode="after")
    def _validate_content(self) -> "MessageDTO":
        content = self.content
        if isinstance(content, list):
            if not content:
                raise ValueError("content parts must be a non-empty list")
            return self
        if self.role == "user" and not content.strip():
            raise ValueError("user message content must be non-empty")
        return self


class ChatCompletionRequestDTO(BaseModel):
    """Validated chat completion request.

    Parameters:
        model: Target model identifier (non-empty).
        messages: Ordered, non-empty list; the first is system or user.
        temperature: Within [0.0, 2.0] when given.
        max_tokens: Positive when given.
    """

    model: str = Field(..., min_length=1)
    messages: List[MessageDTO] = Field(..., min_length=1)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(default=None, gt=0)

    @model_validator(mode="after")
    def _validate_sequence(self) -> "ChatCompletionRequestDTO":
        if self.messages[0].role not in ("system", "user"):
            raise ValueError("first message must be from 'system' or 'user'")
        return self

    def to_sdk_kwargs(self) -> Dict[str, Any]:
        """Return keyword arguments for ``client.chat.completions.create``."""
        return self.model_dump(exclude_none=True)


__all__ = [
    "Role",
    "ImageURLDTO",
    "ContentPartDTO",
    "MessageDTO",
    "ChatCompletionRequestDTO",
]
