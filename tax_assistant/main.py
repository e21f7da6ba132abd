"""Main application entry point.

Serves the chat API and the NiceGUI chat page from one uvicorn server.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Build the chat service, mount the chat page, and serve.

    Exits before binding the port if the model backend is not configured.
    """
    import uvicorn
    from nicegui import ui
    from pydantic import ValidationError

    from tax_assistant.agent.chat_agent import ChatService
    from tax_assistant.agent.config import get_assistant_config
    from tax_assistant.api.app import create_app
    from tax_assistant.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    try:
        config = get_assistant_config()
    except ValidationError as e:
        logger.error(f"Invalid assistant configuration: {e}")
        sys.exit(1)

    logger.info(f"Using model {config.model_name} (max_tokens={config.max_tokens})")
    app = create_app(chat_service=ChatService(config=config))

    ui.run_with(
        app,
        title="Indian Tax Assistant",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "tax-assistant-secret"),
    )

    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Chat page at http://localhost:{port}/, API at /api/chat")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
