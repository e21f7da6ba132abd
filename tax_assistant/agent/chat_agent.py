"""Chat service over the Anthropic Messages API.

Core module for the assistant's conversation handling.

The service is stateless: the client resends the full conversation on every
request, the normalizer turns it into a backend payload, and the backend's
event stream is handed to the streaming adapter. One service (and one
AsyncAnthropic client) is created at startup and shared by all requests;
nothing on it is mutated per request.
"""

import logging
from collections.abc import AsyncIterator, Sequence
from typing import Any

from anthropic import AsyncAnthropic

from tax_assistant.agent.config import AssistantConfig, get_assistant_config
from tax_assistant.agent.normalizer import normalize
from tax_assistant.agent.streaming import adapt
from tax_assistant.models.schemas import ConversationTurn, NormalizedRequest

logger = logging.getLogger(__name__)


class ChatService:
    """Service for streaming tax assistant replies.

    Wraps the Anthropic client with:
    - Conversation normalization (attachment stripping and extraction)
    - A byte-stream interface for the HTTP layer
    """

    def __init__(
        self,
        config: AssistantConfig | None = None,
        client: AsyncAnthropic | None = None,
    ) -> None:
        """Initialize the chat service.

        Args:
            config: Optional assistant configuration.
                    Loads from environment if not provided.
            client: Optional pre-built Anthropic client.
        """
        self._config = config or get_assistant_config()
        self._client = client or self._create_client()

    def _create_client(self) -> AsyncAnthropic:
        return AsyncAnthropic(api_key=self._config.api_key)

    async def open_stream(self, turns: Sequence[ConversationTurn]) -> AsyncIterator[Any]:
        """Normalize a conversation and start a streaming backend call.

        Args:
            turns: Conversation history, oldest first.

        Returns:
            The backend's raw event stream.

        Raises:
            anthropic.APIError: If the backend rejects or fails the call.
        """
        request = normalize(turns)
        attached = request.attachment.kind.value if request.attachment else "no"
        logger.info(
            f"Requesting completion for {len(request.messages)} turn(s), {attached} attachment"
        )
        return await self._create_stream(request)

    async def _create_stream(self, request: NormalizedRequest) -> AsyncIterator[Any]:
        return await self._client.messages.create(
            model=self._config.model_name,
            max_tokens=self._config.max_tokens,
            temperature=self._config.temperature,
            system=request.system,
            messages=request.messages,
            stream=True,
        )

    async def stream_response(self, turns: Sequence[ConversationTurn]) -> AsyncIterator[bytes]:
        """Stream reply chunks for a conversation.

        The backend call is issued before this returns, so connection and
        authentication failures surface here rather than mid-stream.

        Args:
            turns: Conversation history, oldest first.

        Returns:
            Async iterator of UTF-8 encoded text deltas.
        """
        events = await self.open_stream(turns)
        return adapt(events)

    async def aclose(self) -> None:
        """Release the underlying HTTP connection pool."""
        await self._client.close()
