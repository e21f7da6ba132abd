"""Unit tests for chat view formatting."""

import json

import pytest_check as check

from tax_assistant.ui.formatting import (
    emphasize_figures,
    markdown_to_html,
    message_text,
    render_message,
)


class TestMessageText:
    def test_plain_string(self) -> None:
        assert message_text("Hello") == "Hello"

    def test_only_text_blocks_shown(self, pdf_b64: str) -> None:
        content = [
            {"type": "text", "text": "uploading form16"},
            {"type": "document", "source": {"type": "base64", "media_type": "application/pdf", "data": pdf_b64}},
        ]

        check.equal(message_text(content), "uploading form16")
        check.equal(message_text(json.dumps(content)), "uploading form16")

    def test_deeply_nested_brackets_shown_verbatim(self) -> None:
        assert message_text("[" * 5000) == "[" * 5000


class TestEmphasizeFigures:
    def test_numbers_percentages_and_currency(self) -> None:
        html = emphasize_figures("Tax is 30% on ₹15,00,000 or $1.5 for 2 items")

        check.is_in('<span class="figure">30%</span>', html)
        check.is_in('<span class="figure">₹15,00,000</span>', html)
        check.is_in('<span class="figure">$1.5</span>', html)
        check.is_in('<span class="figure">2</span>', html)

    def test_tags_left_alone(self) -> None:
        html = emphasize_figures('<ol class="my-2"><li>Step</li></ol>')
        assert html == '<ol class="my-2"><li>Step</li></ol>'

    def test_digits_inside_words_untouched(self) -> None:
        assert emphasize_figures("Form16 and ITR2") == "Form16 and ITR2"


class TestMarkdownToHtml:
    def test_bold_and_lists(self) -> None:
        html = markdown_to_html("**Slabs**\n- Up to 3L: nil\n- Above: 5%")

        check.is_in("<strong>Slabs</strong>", html)
        check.is_in("<ul", html)
        check.is_in("<li>Up to 3L: nil</li>", html)

    def test_html_escaped(self) -> None:
        assert "&lt;script&gt;" in markdown_to_html("<script>")

    def test_snake_case_not_italicized(self) -> None:
        assert "<em>" not in markdown_to_html("gross_total_income")


def test_render_message_user_text_not_markdown() -> None:
    html = render_message("**not bold**\n80C", markdown=False)

    check.is_not_in("<strong>", html)
    check.is_in("<br>", html)
    check.is_in('<span class="figure">80</span>C', html)
