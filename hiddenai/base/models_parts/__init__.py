"""Conversation model parts; import from ``hiddenai.base.models``."""
