"""hiddenai.config.defaults
========================

Small, stable default values for the OpenAI service and CLI. Everything here
can be overridden through the config file, the environment, or explicit
overrides (see ``hiddenai.config``). Plain constants only; no I/O.
"""

from __future__ import annotations

# ---- OpenAI models ----
CHAT_DEFAULT_MODEL = "gpt-4o"
VISION_DEFAULT_MODEL = "gpt-4o"
WHISPER_DEFAULT_MODEL = "whisper-1"

# ---- Request parameters ----
CHAT_DEFAULT_TEMPERATURE = 0.7
VISION_DEFAULT_MAX_TOKENS = 1000

# ---- Upload guards ----
# Recordings smaller than this almost always contain no audio.
AUDIO_MIN_BYTES = 1000
AUDIO_FORMATS = ("flac", "m4a", "mp3", "mp4", "mpeg", "mpga", "oga", "ogg", "wav", "webm")
IMAGE_FORMATS = ("png", "jpg", "jpeg", "gif", "webp")

# ---- System prompts ----
# Context prompts are truncated to this many characters.
CONTEXT_MAX_CHARS = 1000
GENERAL_DEFAULT_CONTEXT = (
    "You are a helpful assistant that provides clear, informative responses. "
    "Explain concepts thoroughly and provide examples when appropriate."
)
