"""NiceGUI chat interface with streamed replies and file upload."""

import os
from collections.abc import Callable
from datetime import datetime
from typing import Any

import httpx
from nicegui import events, ui

from tax_assistant.ui.file_intake import ACCEPTED_FILE_TYPES, build_file_turn
from tax_assistant.ui.formatting import render_message

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")

CUSTOM_CSS = """
<style>
    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: #1e3a8a; }

    .message-user { background: #eff6ff; color: #1f2937; border-radius: 12px; }
    .message-assistant { background: #f3f4f6; color: #1f2937; border-radius: 12px; }

    .avatar-user { background: #bfdbfe; color: #1e3a8a; }
    .avatar-assistant { background: #e5e7eb; color: #374151; }

    .figure { font-weight: 500; color: #111827; }

    .message-assistant strong { font-weight: 600; }
    .message-assistant code { font-family: 'Menlo', 'Monaco', monospace; }
    .message-assistant ul, .message-assistant ol { margin: 0.5rem 0; }
</style>
"""

EMPTY_STATE_TEXT = (
    "Ask me anything about Indian taxes! I can help with income tax, GST, and more. "
    "Upload your tax documents (Form 16, ITR, etc.) for specific guidance."
)


class ChatSession:
    """Conversation held by one browser page for its lifetime."""

    def __init__(self) -> None:
        self.messages: list[dict[str, Any]] = []
        self.times: list[str] = []
        self.is_streaming: bool = False

    def add_message(self, role: str, content: str | list[dict[str, Any]]) -> None:
        self.messages.append({"role": role, "content": content})
        self.times.append(datetime.now().strftime("%I:%M %p"))


async def stream_chat_response(
    messages: list[dict[str, Any]],
    on_chunk: Callable[[str], None],
    on_complete: Callable[[], None],
    on_error: Callable[[str], None],
) -> None:
    """Post the full conversation to /api/chat and consume the text stream."""
    async with httpx.AsyncClient(timeout=120.0) as client:
        try:
            async with client.stream(
                "POST",
                f"{API_BASE_URL}/api/chat",
                json={"messages": messages},
            ) as response:
                response.raise_for_status()
                async for text in response.aiter_text():
                    if text:
                        on_chunk(text)
            on_complete()
        except httpx.HTTPStatusError as e:
            on_error(f"HTTP {e.response.status_code}")
        except httpx.RequestError as e:
            on_error(f"Connection failed: {e}")


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    session = ChatSession()

    messages_container: ui.column
    input_field: ui.input
    send_btn: ui.button

    def render_avatar(is_user: bool) -> None:
        css = "avatar-user" if is_user else "avatar-assistant"
        with ui.element("div").classes(f"rounded-full px-2 py-1 text-xs font-medium {css}"):
            ui.label("You" if is_user else "AI")

    def render_turn(msg: dict[str, Any], time: str) -> None:
        is_user = msg["role"] == "user"
        bubble = "message-user" if is_user else "message-assistant"
        with ui.row().classes(f"w-full gap-3 items-start px-4 py-3 {bubble}"):
            render_avatar(is_user)
            with ui.column().classes("flex-1 gap-1"):
                html = render_message(msg["content"], markdown=not is_user)
                ui.html(html, sanitize=False).classes("text-sm leading-relaxed")
                ui.label(time).classes("text-[10px] text-gray-400")

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            if not session.messages:
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.label(EMPTY_STATE_TEXT).classes("text-center text-gray-500")
            else:
                for msg, time in zip(session.messages, session.times):
                    render_turn(msg, time)

    def set_busy(busy: bool) -> None:
        session.is_streaming = busy
        if busy:
            send_btn.disable()
            input_field.disable()
        else:
            send_btn.enable()
            input_field.enable()

    async def submit() -> None:
        set_busy(True)
        refresh_messages()

        with messages_container, ui.row().classes(
            "w-full gap-3 items-start px-4 py-3 message-assistant"
        ):
            render_avatar(False)
            response_html = ui.html("Thinking...", sanitize=False).classes(
                "text-sm leading-relaxed text-gray-500"
            )

        accumulated = ""

        def on_chunk(content: str) -> None:
            nonlocal accumulated
            accumulated += content
            response_html.set_content(render_message(accumulated))

        def on_complete() -> None:
            session.add_message("assistant", accumulated)
            set_busy(False)
            refresh_messages()

        def on_error(error: str) -> None:
            set_busy(False)
            refresh_messages()
            ui.notify(f"Something went wrong: {error}. Please try again.", type="negative")

        await stream_chat_response(list(session.messages), on_chunk, on_complete, on_error)

    async def send_message() -> None:
        text = input_field.value.strip()
        if not text or session.is_streaming:
            return
        input_field.value = ""
        session.add_message("user", text)
        await submit()

    async def handle_upload(e: events.UploadEventArguments) -> None:
        if session.is_streaming:
            ui.notify("Please wait for the current reply to finish.", type="warning")
            return
        data = await e.file.read()
        turn = build_file_turn(e.file.name, e.file.content_type, data)
        input_field.props('placeholder="Ask questions about the uploaded document..."')
        session.add_message(turn["role"], turn["content"])
        await submit()

    with ui.column().classes("w-full max-w-3xl mx-auto app-container my-4").style(
        "height: calc(100vh - 2rem)"
    ):
        with ui.row().classes("w-full header px-5 py-4 items-center"):
            ui.label("Indian Tax Assistant").classes("text-lg font-semibold text-white")

        with ui.scroll_area().classes("flex-grow w-full"), ui.column().classes("w-full p-4"):
            messages_container = ui.column().classes("w-full gap-2")
            refresh_messages()

        with ui.column().classes("w-full p-4 gap-3 bg-white border-t"):
            ui.upload(
                label="Upload file",
                auto_upload=True,
                max_files=1,
                on_upload=handle_upload,
            ).props(f'accept="{ACCEPTED_FILE_TYPES}" flat bordered').classes("w-full")
            with ui.row().classes("w-full gap-3 items-center"):
                input_field = (
                    ui.input(placeholder="Ask about Indian taxes...")
                    .props("outlined dense")
                    .classes("flex-grow")
                    .on("keydown.enter", send_message)
                )
                send_btn = ui.button("Send", on_click=send_message).props("unelevated")
