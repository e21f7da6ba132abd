"""FastAPI endpoints for the tax assistant.

Endpoints:
    - GET /health: Service health status
    - POST /api/chat: Streamed chat completion for a full conversation
"""

from tax_assistant.api.app import app, create_app

__all__ = ["app", "create_app"]
