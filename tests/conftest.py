"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - assistant_config: Config with a dummy API key
    - fake_client: Stand-in for AsyncAnthropic that replays scripted events
    - chat_service: Real ChatService wired to the fake client
    - async_client: HTTPX client for API testing with the service injected
    - pdf_b64 / png_b64: Small base64 payloads for attachment tests
"""

import base64
from collections.abc import AsyncGenerator, Iterable
from typing import Any

import pytest
from anthropic.types import (
    RawContentBlockDeltaEvent,
    RawContentBlockStopEvent,
    RawMessageStopEvent,
    TextDelta,
)
from httpx import ASGITransport, AsyncClient

from tax_assistant.agent.chat_agent import ChatService
from tax_assistant.agent.config import AssistantConfig
from tax_assistant.api.app import create_app


def text_events(*texts: str) -> list[Any]:
    """Backend events for a reply made of the given deltas."""
    events: list[Any] = [
        RawContentBlockDeltaEvent(
            type="content_block_delta",
            index=0,
            delta=TextDelta(type="text_delta", text=text),
        )
        for text in texts
    ]
    events.append(RawContentBlockStopEvent(type="content_block_stop", index=0))
    events.append(RawMessageStopEvent(type="message_stop"))
    return events


class FakeEventStream:
    """Async iterator over scripted events, optionally failing part-way."""

    def __init__(self, events: Iterable[Any], error: Exception | None = None) -> None:
        self._events = list(events)
        self._error = error
        self.closed = False

    def __aiter__(self) -> "FakeEventStream":
        return self

    async def __anext__(self) -> Any:
        if self._events:
            return self._events.pop(0)
        if self._error is not None:
            raise self._error
        raise StopAsyncIteration

    async def close(self) -> None:
        self.closed = True


class FakeMessages:
    """Records create() calls and returns the scripted stream.

    `error` fails the call itself; `stream_error` fails the returned stream
    after its events are consumed.
    """

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.streams: list[FakeEventStream] = []
        self.events: list[Any] = text_events("Hello")
        self.error: Exception | None = None
        self.stream_error: Exception | None = None

    async def create(self, **kwargs: Any) -> FakeEventStream:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        stream = FakeEventStream(self.events, error=self.stream_error)
        self.streams.append(stream)
        return stream


class FakeAnthropic:
    def __init__(self) -> None:
        self.messages = FakeMessages()
        self.closed = False

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def pdf_b64() -> str:
    return base64.b64encode(b"%PDF-1.4\n%fake form 16\n").decode("ascii")


@pytest.fixture
def png_b64() -> str:
    return base64.b64encode(b"\x89PNG\r\n\x1a\nfake").decode("ascii")


@pytest.fixture
def assistant_config() -> AssistantConfig:
    return AssistantConfig(api_key="sk-test-key", model_name="claude-test")


@pytest.fixture
def fake_client() -> FakeAnthropic:
    return FakeAnthropic()


@pytest.fixture
def chat_service(assistant_config: AssistantConfig, fake_client: FakeAnthropic) -> ChatService:
    return ChatService(config=assistant_config, client=fake_client)


@pytest.fixture
async def async_client(chat_service: ChatService) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        AsyncClient bound to an app whose chat service uses the fake backend.
    """
    app = create_app(chat_service=chat_service)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
