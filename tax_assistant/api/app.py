"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tax_assistant.agent.chat_agent import ChatService
from tax_assistant.api.chat import DATA_HEADER
from tax_assistant.api.chat import router as chat_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Own the chat service for the lifetime of the process.

    Builds the service from the environment unless one was injected into
    create_app(). Startup fails if the API key is missing. The backend
    client is closed on shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    if getattr(app.state, "chat_service", None) is None:
        app.state.chat_service = ChatService()
    logger.info("Tax Assistant API ready")
    yield
    logger.info("Closing model backend client...")
    await app.state.chat_service.aclose()


def create_app(chat_service: ChatService | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        chat_service: Service handling /api/chat. Built at startup from the
            environment when omitted.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Indian Tax Assistant API",
        description=(
            "Streaming chat API for an assistant specialized in Indian taxation. "
            "Accepts the full conversation on every request, including an optional "
            "PDF or image attachment on the latest turn."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )
    application.state.chat_service = chat_service

    # The browser client reads the auxiliary metadata header cross-origin.
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[DATA_HEADER],
    )

    application.include_router(chat_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Report whether the chat service is wired up."""
        ready = application.state.chat_service is not None
        return {"status": "healthy" if ready else "starting", "service": "tax-assistant"}

    return application


app = create_app()
