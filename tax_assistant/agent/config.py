"""Assistant configuration with environment variable loading.

Pydantic-based configuration for the Anthropic-backed chat service.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class AssistantConfig(BaseModel):
    """Configuration for the tax assistant chat service.

    Attributes:
        api_key: Anthropic API key.
        model_name: Model identifier to use.
        temperature: Sampling temperature (0.0 = deterministic, 1.0 = creative).
        max_tokens: Maximum tokens in generated response.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("ANTHROPIC_API_KEY", ""),
        description="API key for the model backend",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", "claude-3-5-sonnet-20241022"),
        description="Model to use",
    )
    temperature: float = Field(
        default=1.0,
        ge=0.0,
        le=1.0,
        description="Sampling temperature for response generation",
    )
    max_tokens: int = Field(
        default=4096,
        ge=1,
        le=8192,
        description="Maximum tokens in generated response",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("ANTHROPIC_API_KEY is required. Set it in the environment or .env")
        return v.strip()


def get_assistant_config() -> AssistantConfig:
    """Create assistant configuration from environment.

    Returns:
        Configured AssistantConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return AssistantConfig()
