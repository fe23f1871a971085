"""Conversation models public surface.

Re-exports the message, content and conversation types from
``hiddenai.base.models_parts``.
"""

from .models_parts.message_content import MessageContent
from .models_parts.message import Message, Role, parse_code_blocks
from .models_parts.conversation import ChatRole, Conversation

__all__ = ["MessageContent", "Message", "Role", "parse_code_blocks", "Conversation", "ChatRole"]
