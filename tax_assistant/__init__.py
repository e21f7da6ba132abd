"""Indian Tax Assistant - streaming LLM chat for Indian taxation questions.

Combines FastAPI for HTTP streaming, the Anthropic Messages API for
completions, NiceGUI for visualization, and Pydantic for data validation.

Components:
    - api: HTTP endpoints and streaming responses
    - agent: Conversation normalization, backend calls, stream adaptation
    - ui: Web interface and file intake
    - models: Content blocks, turns, request/response schemas
"""

__version__ = "0.1.0"
