"""Pydantic models for API requests and model-backend payloads.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - TextBlock, ImageBlock, DocumentBlock: Content block union members
    - ConversationTurn: One role-tagged entry in the conversation
    - ChatRequest: Incoming chat request payload
    - NormalizedRequest: Outbound payload for the model backend
    - Attachment: File extracted from the turn being answered
"""

from tax_assistant.models.schemas import (
    Attachment,
    AttachmentKind,
    Base64Source,
    ChatRequest,
    ContentBlock,
    ConversationTurn,
    DocumentBlock,
    ImageBlock,
    MessageContent,
    NormalizedRequest,
    Role,
    TextBlock,
    dump_content,
    parse_blocks,
)

__all__ = [
    "Attachment",
    "AttachmentKind",
    "Base64Source",
    "ChatRequest",
    "ContentBlock",
    "ConversationTurn",
    "DocumentBlock",
    "ImageBlock",
    "MessageContent",
    "NormalizedRequest",
    "Role",
    "TextBlock",
    "dump_content",
    "parse_blocks",
]
