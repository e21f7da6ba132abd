"""Unit tests for turning uploaded files into conversation turns."""

import base64

import pytest_check as check

from tax_assistant.agent.normalizer import normalize
from tax_assistant.models.schemas import AttachmentKind, ConversationTurn
from tax_assistant.ui.file_intake import build_file_turn


class TestBuildFileTurn:
    def test_pdf_becomes_caption_and_document(self) -> None:
        data = b"%PDF-1.4\nform 16"

        turn = build_file_turn("form16.pdf", "application/pdf", data)

        check.equal(turn["role"], "user")
        check.equal(
            turn["content"][0],
            {"type": "text", "text": 'I\'m uploading a PDF file named "form16.pdf" for analysis.'},
        )
        check.equal(turn["content"][1]["type"], "document")
        check.equal(turn["content"][1]["source"]["media_type"], "application/pdf")
        check.equal(base64.b64decode(turn["content"][1]["source"]["data"]), data)

    def test_image_keeps_its_media_type(self) -> None:
        turn = build_file_turn("slip.jpg", "image/jpeg", b"\xff\xd8\xff\xe0")

        check.is_in("image file", turn["content"][0]["text"])
        check.equal(turn["content"][1]["type"], "image")
        check.equal(turn["content"][1]["source"]["media_type"], "image/jpeg")

    def test_text_file_inlined(self) -> None:
        turn = build_file_turn("notes.txt", "text/plain", "Gross salary: ₹12,00,000".encode())

        content = turn["content"]
        check.is_instance(content, str)
        check.is_in('text file named "notes.txt"', content)
        check.is_in("Gross salary: ₹12,00,000", content)
        check.is_true(content.endswith("Please analyze this document and provide guidance."))

    def test_unsupported_type_described(self) -> None:
        turn = build_file_turn("sheet.xlsx", "application/vnd.ms-excel", b"PK")

        check.is_in('file type "application/vnd.ms-excel" is not supported', turn["content"])

    def test_unreadable_text_becomes_error_message(self) -> None:
        turn = build_file_turn("bad.txt", "text/plain", b"\xff\xfe\xfa")

        check.is_in('error processing the file "bad.txt"', turn["content"])

    def test_uploaded_pdf_normalizes_as_attachment(self) -> None:
        turn = build_file_turn("form16.pdf", "application/pdf", b"%PDF-1.4")

        result = normalize([ConversationTurn.model_validate(turn)])

        check.equal(result.attachment.kind, AttachmentKind.DOCUMENT)
        check.equal(result.messages[-1]["content"], turn["content"])
