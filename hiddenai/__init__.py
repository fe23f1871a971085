"""hiddenai: OpenAI chat, screenshot and transcription client core.

Public API re-exports:
- ``OpenAIService``: conversation-aware request entry point
- ``ServiceError`` / ``ErrorKind``: classified failure taxonomy
- ``classify`` / ``describe``: failure classification and presentation
"""

from .base.errors import ErrorKind, Failure, FailureReason, ServiceError, classify, describe
from .openai import OpenAIService

__all__ = [
    "ErrorKind",
    "Failure",
    "FailureReason",
    "OpenAIService",
    "ServiceError",
    "classify",
    "describe",
]

__version__ = "0.1.0"
