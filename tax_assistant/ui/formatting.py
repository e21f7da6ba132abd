"""Text formatting helpers for the chat view.

Kept free of NiceGUI imports so they can be tested on their own.
"""

import re
from typing import Any

from tax_assistant.models.schemas import parse_blocks

# Amounts, percentages and plain numbers (with thousands separators and decimals).
_FIGURE_RE = re.compile(r"(?<![\w#&])([₹$€]\d+(?:,\d+)*(?:\.\d+)?|\d+(?:,\d+)*(?:\.\d+)?%?)")


def message_text(content: str | list[Any]) -> str:
    """Return the displayable text of a turn.

    Block lists (including serialized ones) show only their text blocks,
    one paragraph each; attached file data is never rendered.
    """
    blocks = parse_blocks(content)
    if blocks is None:
        return content if isinstance(content, str) else ""
    return "\n\n".join(block.text for block in blocks if block.type == "text")


def emphasize_figures(html: str) -> str:
    """Wrap numbers, percentages and currency amounts outside tags in a span."""
    parts = re.split(r"(<[^>]+>)", html)
    for i, part in enumerate(parts):
        if part.startswith("<"):
            continue
        parts[i] = _FIGURE_RE.sub(r'<span class="figure">\1</span>', part)
    return "".join(parts)


def markdown_to_html(text: str) -> str:
    """Convert markdown to HTML for chat display.

    Supports: bold, italic, inline code, code blocks, links, lists.
    """
    # Escape HTML entities first
    text = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")

    text = re.sub(
        r"```(\w*)\n?([\s\S]*?)```",
        r'<pre class="bg-gray-800 text-gray-100 rounded-lg p-3 my-2 overflow-x-auto text-xs">'
        r"<code>\2</code></pre>",
        text,
    )
    text = re.sub(
        r"`([^`]+)`",
        r'<code class="bg-gray-200 text-pink-600 px-1.5 py-0.5 rounded text-xs">\1</code>',
        text,
    )

    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"__(.+?)__", r"<strong>\1</strong>", text)
    text = re.sub(r"\*([^*\n]+)\*", r"<em>\1</em>", text)
    text = re.sub(r"(?<!\w)_([^_\n]+)_(?!\w)", r"<em>\1</em>", text)

    text = re.sub(
        r"\[([^\]]+)\]\(([^)]+)\)",
        r'<a href="\2" class="text-blue-600 underline" target="_blank">\1</a>',
        text,
    )

    text = _wrap_list(text, r"^[-*]\s+", '<ul class="list-disc list-inside my-2 space-y-1">', "</ul>")
    text = _wrap_list(text, r"^\d+\.\s+", '<ol class="list-decimal list-inside my-2 space-y-1">', "</ol>")

    return text.replace("\n", "<br>")


def _wrap_list(text: str, marker: str, open_tag: str, close_tag: str) -> str:
    result: list[str] = []
    in_list = False
    for line in text.split("\n"):
        stripped = line.strip()
        if re.match(marker, stripped):
            if not in_list:
                result.append(open_tag)
                in_list = True
            result.append(f"<li>{re.sub(marker, '', stripped)}</li>")
        else:
            if in_list:
                result.append(close_tag)
                in_list = False
            result.append(line)
    if in_list:
        result.append(close_tag)
    return "\n".join(result)


def render_message(content: str | list[Any], markdown: bool = True) -> str:
    """Render a turn's content as HTML with emphasized figures."""
    text = message_text(content)
    if markdown:
        html = markdown_to_html(text)
    else:
        html = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
        html = html.replace("\n", "<br>")
    return emphasize_figures(html)
