"""Conversation normalization for the model backend.

Turns the client's conversation history (plain strings, content-block lists,
or content-block lists serialized as JSON strings) into the request shape the
backend expects.

Earlier file attachments are never re-sent: prior turns keep only their text
caption, and only the file attached to the last turn travels with the request.
"""

import logging
from collections.abc import Sequence
from typing import Any, assert_never

from tax_assistant.agent.prompts import SYSTEM_PROMPT
from tax_assistant.models.schemas import (
    Attachment,
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

logger = logging.getLogger(__name__)


def decode_content(content: MessageContent) -> list[ContentBlock] | None:
    """Return the content blocks of a turn, or None for plain text.

    Strings are tried as serialized block lists. A string that does not
    decode is plain text, not an error.
    """
    if isinstance(content, list):
        return content or None
    return parse_blocks(content)


def _text_parts(blocks: Sequence[ContentBlock]) -> list[str]:
    parts: list[str] = []
    for block in blocks:
        match block:
            case TextBlock():
                parts.append(block.text)
            case ImageBlock() | DocumentBlock():
                pass
            case _:
                assert_never(block)
    return parts


def _first_attachment(blocks: Sequence[ContentBlock]) -> Attachment | None:
    for block in blocks:
        match block:
            case TextBlock():
                continue
            case ImageBlock() | DocumentBlock():
                return Attachment(media_type=block.source.media_type, data=block.source.data)
            case _:
                assert_never(block)
    return None


def _wire_role(role: Role) -> str:
    # The backend only accepts user and assistant turns.
    return "user" if role is Role.USER else "assistant"


def _strip_attachments(turn: ConversationTurn) -> str | list[dict[str, Any]]:
    """Reduce an earlier turn to its text so its file is not re-sent."""
    blocks = decode_content(turn.content)
    if blocks is None:
        return dump_content(turn.content)
    texts = _text_parts(blocks)
    if not texts:
        return dump_content(turn.content)
    return "\n".join(texts)


def _rebuild_last_turn(
    turn: ConversationTurn,
) -> tuple[str | list[dict[str, Any]], Attachment | None]:
    blocks = decode_content(turn.content)
    attachment = _first_attachment(blocks) if blocks else None
    if attachment is None:
        return dump_content(turn.content), None

    caption = "\n".join(_text_parts(blocks))
    rebuilt: list[ContentBlock] = []
    if caption:
        rebuilt.append(TextBlock(text=caption))
    rebuilt.append(attachment.to_block())
    return dump_content(rebuilt), attachment


def normalize(history: Sequence[ConversationTurn], system: str = SYSTEM_PROMPT) -> NormalizedRequest:
    """Build the backend request for the last turn of a conversation.

    Args:
        history: Conversation turns, oldest first. The last turn is the one
            being answered.
        system: System instruction attached outside the turn list.

    Returns:
        NormalizedRequest with the system prompt, wire-shaped turns, and the
        attachment extracted from the last turn (if any).

    Raises:
        ValueError: If history is empty.
    """
    if not history:
        raise ValueError("Cannot normalize an empty conversation")

    *earlier, last = history
    messages: list[dict[str, Any]] = [
        {"role": _wire_role(turn.role), "content": _strip_attachments(turn)}
        for turn in earlier
    ]

    content, attachment = _rebuild_last_turn(last)
    messages.append({"role": _wire_role(last.role), "content": content})

    if attachment is not None:
        logger.debug(f"Attaching {attachment.kind.value} ({attachment.media_type}) to last turn")

    return NormalizedRequest(system=system, messages=messages, attachment=attachment)
