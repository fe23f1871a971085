"""OpenAI service adapter."""

from .service import OpenAIService

__all__ = ["OpenAIService"]
