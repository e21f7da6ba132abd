import base64
import binascii
import json
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator


class Role(str, Enum):
    """Speaker of a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class AttachmentKind(str, Enum):
    """Block type an attachment is sent as."""

    IMAGE = "image"
    DOCUMENT = "document"


class Base64Source(BaseModel):
    """Inline binary payload of an image or document block.

    Attributes:
        type: Payload encoding, always "base64".
        media_type: MIME type of the decoded bytes.
        data: Base64-encoded file bytes.
    """

    model_config = ConfigDict(extra="forbid")

    type: Literal["base64"] = "base64"
    media_type: str = Field(..., min_length=1)
    data: str

    @field_validator("data")
    @classmethod
    def validate_base64(cls, v: str) -> str:
        """Reject payloads that are not strict base64."""
        try:
            base64.b64decode(v, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"source data is not valid base64: {e}") from e
        return v


class TextBlock(BaseModel):
    """A run of plain text within a turn."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["text"] = "text"
    text: str


class ImageBlock(BaseModel):
    """An inline image (e.g. a photographed salary slip)."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["image"] = "image"
    source: Base64Source


class DocumentBlock(BaseModel):
    """An inline document, typically a PDF such as Form 16."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["document"] = "document"
    source: Base64Source


ContentBlock = Annotated[
    TextBlock | ImageBlock | DocumentBlock,
    Field(discriminator="type"),
]
MessageContent = str | list[ContentBlock]

_BLOCKS_ADAPTER: TypeAdapter[list[ContentBlock]] = TypeAdapter(list[ContentBlock])


def parse_blocks(value: Any) -> list[ContentBlock] | None:
    """Attempt to read a value as a list of content blocks.

    Accepts an already structured list (of models or dicts) or its JSON
    serialization. Returns None when the value has any other shape, which
    callers treat as plain text.
    """
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except (ValueError, RecursionError):
            # Deeply nested brackets exhaust the decoder; still plain text.
            return None
    if not isinstance(value, list) or not value:
        return None
    try:
        return _BLOCKS_ADAPTER.validate_python(value)
    except ValidationError:
        return None


def dump_content(content: MessageContent) -> str | list[dict[str, Any]]:
    """Render turn content in the backend's wire shape."""
    if isinstance(content, str):
        return content
    return [block.model_dump() for block in content]


class Attachment(BaseModel):
    """The file attached to the turn being answered.

    Attributes:
        media_type: MIME type reported by the client.
        data: Base64-encoded file bytes.
    """

    media_type: str
    data: str

    @property
    def kind(self) -> AttachmentKind:
        if self.media_type.startswith("image/"):
            return AttachmentKind.IMAGE
        return AttachmentKind.DOCUMENT

    def to_block(self) -> ImageBlock | DocumentBlock:
        """Build the content block the backend expects for this attachment."""
        source = Base64Source(media_type=self.media_type, data=self.data)
        if self.kind is AttachmentKind.IMAGE:
            return ImageBlock(source=source)
        return DocumentBlock(source=source)


class ConversationTurn(BaseModel):
    """A single turn in the conversation.

    Attributes:
        role: The speaker (user, assistant, or system).
        content: Plain text, or content blocks with at most one attached file.
    """

    role: Role
    content: MessageContent


class ChatRequest(BaseModel):
    """Request payload for the chat endpoint.

    Attributes:
        messages: Full conversation history, oldest first. The last turn is
            the one being answered.
    """

    messages: list[ConversationTurn] = Field(..., min_length=1)


class NormalizedRequest(BaseModel):
    """Payload ready for the model backend.

    Attributes:
        system: Assistant persona sent as the system-level field.
        messages: Turns in backend wire shape, oldest first.
        attachment: File extracted from the last turn, if any.
    """

    system: str
    messages: list[dict[str, Any]]
    attachment: Attachment | None = None
