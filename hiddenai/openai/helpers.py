"""OpenAI response extraction and upload validation helpers.

Pure functions used by ``OpenAIService``. They raise ``ServiceError`` with
the variant that names the problem (missing file, bad format, unusable
response) and perform no network I/O.
"""

from __future__ import annotations

import base64
from pathlib import Path
from typing import Any, Iterable, Optional

from ..base.errors import ServiceError

_IMAGE_MIME = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "webp": "image/webp",
}


def file_format(path: Path) -> str:
    """Return the lowercase extension without the dot (``""`` when absent)."""
    return path.suffix.lower().lstrip(".")


def check_upload(path: Path, allowed_formats: Iterable[str], min_bytes: Optional[int] = None) -> int:
    """Validate a file before upload and return its size in bytes.

    Raises:
        ServiceError: ``FILE_NOT_FOUND`` when missing, ``INVALID_FILE_FORMAT``
            for an unsupported extension, ``FILE_TOO_SMALL`` under
            ``min_bytes``.
    """
    if not path.is_file():
        raise ServiceError.file_not_found(path.name)
    fmt = file_format(path)
    if fmt not in allowed_formats:
        raise ServiceError.invalid_file_format(fmt or path.name)
    size = path.stat().st_size
    if min_bytes is not None and size < min_bytes:
        raise ServiceError.file_too_small(path.name)
    return size


def image_data_url(path: Path) -> str:
    """Read an image and return it as a base64 ``data:`` URL.

    Raises:
        ServiceError: ``IMAGE_PROCESSING_FAILED`` when the file cannot be read
            or is empty.
    """
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ServiceError.image_processing_failed() from exc
    if not raw:
        raise ServiceError.image_processing_failed()
    mime = _IMAGE_MIME.get(file_format(path), "image/png")
    return f"data:{mime};base64,{base64.b64encode(raw).decode('ascii')}"


def extract_chat_text(resp: Any) -> str:
    """Return the first choice's message text from a chat completion.

    Raises:
        ServiceError: ``INVALID_RESPONSE`` without choices,
            ``RESPONSE_PARSING_FAILED`` when the first choice has no text.
    """
    choices = getattr(resp, "choices", None)
    if not choices:
        raise ServiceError.invalid_response()
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    if not isinstance(content, str):
        raise ServiceError.response_parsing_failed()
    return content


def extract_transcript(resp: Any) -> str:
    """Return the transcript text from a transcription response.

    The SDK returns an object with ``text``; ``response_format="text"``
    yields a bare string.

    Raises:
        ServiceError: ``RESPONSE_PARSING_FAILED`` when no text is present,
            ``AUDIO_TOO_SHORT`` when the transcript is blank.
    """
    text = resp if isinstance(resp, str) else getattr(resp, "text", None)
    if not isinstance(text, str):
        raise ServiceError.response_parsing_failed()
    if not text.strip():
        raise ServiceError.audio_too_short()
    return text


__all__ = [
    "check_upload",
    "extract_chat_text",
    "extract_transcript",
    "file_format",
    "image_data_url",
]
