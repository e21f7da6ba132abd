"""Turn an uploaded file into a conversation turn.

PDFs and images become a caption plus an inline base64 block. Plain text is
inlined into the message. Anything else, or a file that cannot be read,
becomes a plain message telling the assistant what went wrong so the
conversation can continue.
"""

import base64
import logging
from typing import Any

from tax_assistant.models.schemas import Base64Source, DocumentBlock, ImageBlock, TextBlock

logger = logging.getLogger(__name__)

ACCEPTED_FILE_TYPES = ".pdf,.jpg,.jpeg,.png,.txt"
PDF_MEDIA_TYPE = "application/pdf"
TEXT_MEDIA_TYPE = "text/plain"


def _encode(data: bytes) -> str:
    return base64.standard_b64encode(data).decode("ascii")


def _read_text(filename: str, data: bytes) -> str:
    text = data.decode("utf-8")
    return (
        f'I\'ve uploaded a text file named "{filename}". Here\'s its content:\n\n'
        f"{text}\n\nPlease analyze this document and provide guidance."
    )


def build_file_turn(filename: str, media_type: str, data: bytes) -> dict[str, Any]:
    """Build the user turn that hands a file to the assistant.

    Args:
        filename: Original file name, quoted in the caption.
        media_type: MIME type reported by the browser.
        data: Raw file bytes.

    Returns:
        A user turn in wire shape (content is a string or a block list).
    """
    try:
        if media_type == PDF_MEDIA_TYPE:
            blocks = [
                TextBlock(text=f'I\'m uploading a PDF file named "{filename}" for analysis.'),
                DocumentBlock(source=Base64Source(media_type=PDF_MEDIA_TYPE, data=_encode(data))),
            ]
            return {"role": "user", "content": [b.model_dump() for b in blocks]}

        if media_type.startswith("image/"):
            blocks = [
                TextBlock(text=f'I\'m uploading an image file named "{filename}" for analysis.'),
                ImageBlock(source=Base64Source(media_type=media_type, data=_encode(data))),
            ]
            return {"role": "user", "content": [b.model_dump() for b in blocks]}

        if media_type == TEXT_MEDIA_TYPE:
            return {"role": "user", "content": _read_text(filename, data)}

    except ValueError as e:
        # UnicodeDecodeError and pydantic ValidationError are both ValueErrors.
        logger.warning(f"Failed to process uploaded file {filename}: {e}")
        return {
            "role": "user",
            "content": (
                f'There was an error processing the file "{filename}". Please try uploading '
                "a different file or copy-paste the content directly."
            ),
        }

    return {
        "role": "user",
        "content": (
            f'I tried to upload a file "{filename}" but the file type "{media_type}" is not '
            "supported. Please upload a PDF, image, or text file."
        ),
    }
