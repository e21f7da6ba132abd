"""Conversation pipeline between the HTTP layer and the model backend.

Responsibilities:
    - Normalizing client conversation history into backend wire shape
    - Extracting the current file attachment and stripping earlier ones
    - Issuing streaming calls to the Anthropic Messages API
    - Republishing backend stream events as a byte stream

Maintains clean separation from the HTTP layer.
"""

from tax_assistant.agent.chat_agent import ChatService
from tax_assistant.agent.config import AssistantConfig, get_assistant_config
from tax_assistant.agent.normalizer import decode_content, normalize
from tax_assistant.agent.streaming import StreamAdapter, StreamState, adapt

__all__ = [
    "AssistantConfig",
    "ChatService",
    "StreamAdapter",
    "StreamState",
    "adapt",
    "decode_content",
    "get_assistant_config",
    "normalize",
]
