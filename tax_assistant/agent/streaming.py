"""Bridge from backend stream events to an HTTP byte stream.

Only text deltas produce output; message start/stop and other bookkeeping
events are dropped. The output ends when the backend stream ends.
"""

import inspect
import logging
from collections.abc import AsyncIterable, AsyncIterator
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class StreamState(str, Enum):
    """Lifecycle of one streamed response."""

    IDLE = "idle"
    STREAMING = "streaming"
    CLOSED = "closed"
    FAILED = "failed"


def delta_text(event: Any) -> str | None:
    """Return the text carried by a content delta event, else None."""
    if getattr(event, "type", None) != "content_block_delta":
        return None
    delta = getattr(event, "delta", None)
    if getattr(delta, "type", None) != "text_delta":
        return None
    return delta.text


class StreamAdapter:
    """Republish a backend event stream as UTF-8 chunks.

    Each adapter serves a single response. Chunks are yielded in the order
    the backend produced them, one per text delta, without buffering.
    """

    def __init__(self, events: AsyncIterable[Any]) -> None:
        self._events = events
        self.state = StreamState.IDLE

    async def chunks(self) -> AsyncIterator[bytes]:
        """Yield encoded text deltas until the backend stream ends.

        Any exit other than exhausting the backend stream (a source error,
        or the consumer closing the iterator) moves the adapter to FAILED
        and closes the source.

        Raises:
            Exception: Whatever the backend stream raised. The adapter
                does not retry.
        """
        if self.state is not StreamState.IDLE:
            return

        self.state = StreamState.STREAMING
        try:
            async for event in self._events:
                text = delta_text(event)
                if text:
                    yield text.encode("utf-8")
            self.state = StreamState.CLOSED
        except Exception:
            self.state = StreamState.FAILED
            logger.exception("Backend stream failed mid-response")
            raise
        finally:
            if self.state is not StreamState.CLOSED:
                # Source error, or consumer stopped early (client went away).
                self.state = StreamState.FAILED
                await self._close_source()

    async def _close_source(self) -> None:
        close = getattr(self._events, "aclose", None) or getattr(self._events, "close", None)
        if close is None:
            return
        result = close()
        if inspect.isawaitable(result):
            await result


def adapt(events: AsyncIterable[Any]) -> AsyncIterator[bytes]:
    """Shortcut for StreamAdapter(events).chunks()."""
    return StreamAdapter(events).chunks()
