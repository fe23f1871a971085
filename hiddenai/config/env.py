"""hiddenai.config.env
===================

Environment variable names and the placeholder-key check.

- ``OPENAI_API_KEY`` is the canonical key variable.
- Values that look like placeholders (``changeme``, ``placeholder``,
  ``example``, ``test_...``) are treated as unset so a template ``.env``
  never produces an ``API_KEY_INVALID`` round trip.

`is_placeholder` never raises; callers decide how to handle a missing key.
"""

from __future__ import annotations

from typing import Dict, Optional

API_KEY_ENV = "OPENAI_API_KEY"
BASE_URL_ENV = "OPENAI_BASE_URL"
CONFIG_FILE_ENV = "HIDDENAI_CONFIG_FILE"

# config field -> env var
ENV_FIELD_MAP: Dict[str, str] = {
    "api_key": API_KEY_ENV,
    "base_url": BASE_URL_ENV,
    "chat_model": "HIDDENAI_CHAT_MODEL",
    "vision_model": "HIDDENAI_VISION_MODEL",
    "whisper_model": "HIDDENAI_WHISPER_MODEL",
}

# question type -> env var holding its system prompt
CONTEXT_ENV_MAP: Dict[str, str] = {
    "general": "HIDDENAI_GENERAL_CONTEXT",
    "text": "HIDDENAI_TEXT_CONTEXT",
    "whisper": "HIDDENAI_VOICE_CONTEXT",
    "screenshot": "HIDDENAI_SCREENSHOT_CONTEXT",
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if ``val`` looks like a placeholder or test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. Case-insensitive, surrounding spaces ignored.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "example" in v or v.startswith("test_")


__all__ = [
    "API_KEY_ENV",
    "BASE_URL_ENV",
    "CONFIG_FILE_ENV",
    "ENV_FIELD_MAP",
    "CONTEXT_ENV_MAP",
    "is_placeholder",
]
